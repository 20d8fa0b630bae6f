"""
Typed registry values.

A RegistryValue is built once from the raw text after ``=``. Its kind is
classified from the prefix and the payload is decoded immediately, so a
malformed value fails at construction time rather than on first access.

Decoded value types:

    NONE                        -> None
    SZ                          -> str (unescaped, unquoted)
    EXPAND_SZ, LINK             -> str (hex string, final NUL removed)
    BINARY                      -> bytes
    DWORD                       -> int (unsigned 32-bit)
    QWORD                       -> int (unsigned 64-bit, little-endian bytes)
    MULTI_SZ                    -> list[str]
    RESOURCE_LIST, FULL_RESOURCE_DESCRIPTOR,
    RESOURCE_REQUIREMENTS_LIST  -> str (payload text)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from core.enums import DocumentEncoding

from .exceptions import ValueDecodeError
from .hives import split_hive
from .text import splice_continuations, strip_quotes, unescape
from .value_types import RegValueKind, split_prefix

DEFAULT_LEGACY_CODEC = "latin-1"

_DWORD_RE = re.compile(r"[0-9a-fA-F]{1,8}")
_BYTE_RE = re.compile(r"[0-9a-fA-F]{1,2}")

Decoder = Callable[[str, DocumentEncoding, str], Any]


def parse_hex_bytes(payload: str) -> bytes:
    """
    Decode a comma-separated hex byte list such as ``01,02,\\<CRLF>  ff``.

    Continuation splices are removed first and one trailing comma is
    tolerated.

    Raises:
        ValueDecodeError: If a token is not a one- or two-digit hex byte
    """
    text = splice_continuations(payload).strip()
    if text.endswith(","):
        text = text[:-1]
    if not text:
        return b""

    result = bytearray()
    for token in text.split(","):
        token = token.strip()
        if not _BYTE_RE.fullmatch(token):
            raise ValueDecodeError(f"Invalid hex byte {token!r}")
        result.append(int(token, 16))
    return bytes(result)


def decode_hex_string(data: bytes, encoding: DocumentEncoding, legacy_codec: str = DEFAULT_LEGACY_CODEC) -> str:
    """Decode string bytes: UTF-16LE for UTF8 documents, one byte per char for REGEDIT4."""
    if encoding is DocumentEncoding.LEGACY_8BIT:
        try:
            return data.decode(legacy_codec)
        except UnicodeDecodeError as e:
            raise ValueDecodeError(f"Bytes not valid in {legacy_codec}: {e}") from e

    if len(data) % 2:
        raise ValueDecodeError(f"Odd-length byte list ({len(data)} bytes) for UTF-16 string")
    try:
        return data.decode("utf-16-le")
    except UnicodeDecodeError as e:
        raise ValueDecodeError(f"Invalid UTF-16 string data: {e}") from e


def _decode_none(payload: str, encoding: DocumentEncoding, legacy_codec: str) -> None:
    return None


def _decode_sz(payload: str, encoding: DocumentEncoding, legacy_codec: str) -> str:
    return strip_quotes(unescape(payload))


def _decode_dword(payload: str, encoding: DocumentEncoding, legacy_codec: str) -> int:
    text = payload.strip()
    if not _DWORD_RE.fullmatch(text):
        raise ValueDecodeError(f"Invalid DWORD {text!r}")
    return int(text, 16)


def _decode_qword(payload: str, encoding: DocumentEncoding, legacy_codec: str) -> int:
    data = parse_hex_bytes(payload)
    if len(data) != 8:
        raise ValueDecodeError(f"QWORD needs 8 bytes, got {len(data)}")
    return int.from_bytes(data, "little")


def _decode_binary(payload: str, encoding: DocumentEncoding, legacy_codec: str) -> bytes:
    return parse_hex_bytes(payload)


def _decode_multi_sz(payload: str, encoding: DocumentEncoding, legacy_codec: str) -> List[str]:
    text = decode_hex_string(parse_hex_bytes(payload), encoding, legacy_codec).rstrip("\0")
    if not text:
        return []
    return text.split("\0")


def _decode_terminated_string(payload: str, encoding: DocumentEncoding, legacy_codec: str) -> str:
    text = decode_hex_string(parse_hex_bytes(payload), encoding, legacy_codec)
    if text.endswith("\0"):
        text = text[:-1]
    return text


def _decode_payload_text(payload: str, encoding: DocumentEncoding, legacy_codec: str) -> str:
    return splice_continuations(payload).strip()


DECODERS: Dict[RegValueKind, Decoder] = {
    RegValueKind.NONE: _decode_none,
    RegValueKind.SZ: _decode_sz,
    RegValueKind.EXPAND_SZ: _decode_terminated_string,
    RegValueKind.BINARY: _decode_binary,
    RegValueKind.DWORD: _decode_dword,
    RegValueKind.LINK: _decode_terminated_string,
    RegValueKind.MULTI_SZ: _decode_multi_sz,
    RegValueKind.RESOURCE_LIST: _decode_payload_text,
    RegValueKind.FULL_RESOURCE_DESCRIPTOR: _decode_payload_text,
    RegValueKind.RESOURCE_REQUIREMENTS_LIST: _decode_payload_text,
    RegValueKind.QWORD: _decode_qword,
}


@dataclass(frozen=True, slots=True)
class RegistryValue:
    """A named, typed value owned by one registry key."""

    key_path: str
    name: str
    kind: RegValueKind
    raw_data: str
    encoding: DocumentEncoding
    value: Any = field(compare=False)

    @classmethod
    def from_raw(
        cls,
        key_path: str,
        name: str,
        raw_data: str,
        encoding: DocumentEncoding = DocumentEncoding.UTF8,
        legacy_codec: str = DEFAULT_LEGACY_CODEC,
    ) -> "RegistryValue":
        """
        Classify and decode raw value data.

        Raises:
            ValueDecodeError: If the payload does not decode as its kind
        """
        key_path = key_path.strip()
        kind, payload = split_prefix(raw_data)
        try:
            value = DECODERS[kind](payload, encoding, legacy_codec)
        except ValueDecodeError as e:
            raise e.with_context(key_path, name, raw_data) from e
        return cls(
            key_path=key_path,
            name=name,
            kind=kind,
            raw_data=raw_data,
            encoding=encoding,
            value=value,
        )

    @property
    def root(self) -> str:
        """Root hive name, or "" if the key path has none."""
        return split_hive(self.key_path)[0]

    @property
    def key_path_without_root(self) -> str:
        return split_hive(self.key_path)[1]

    @property
    def payload(self) -> str:
        """Raw data with the type prefix removed."""
        return split_prefix(self.raw_data)[1]

    @property
    def raw_bytes(self) -> Optional[bytes]:
        """Byte list behind hex-encoded kinds (None for SZ and DWORD)."""
        if not self.kind.is_hex:
            return None
        return parse_hex_bytes(self.payload)

    def __str__(self) -> str:
        return f"{self.key_path}\\{self.name}={self.kind.prefix or ''}{self.value}"
