"""
.reg document reader.

Reads the whole source, detects the document encoding, splits it into key
sections and value lines, and decodes every value into a RegistryDocument.
Parsing is fail-fast: the first structural or decode error aborts the read
with a single RegFileError chained to the cause. With ``strict`` disabled
in the config, undecodable values are skipped and collected instead.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import IO, Any, Iterator, List, Mapping, Optional, Tuple, Union

from core.config import ParserConfig
from core.enums import DocumentEncoding
from core.logging import get_logger

from .encoding import decode_bytes, detect_encoding
from .exceptions import RegFileError, ValueDecodeError
from .extract import extract_key_sections, extract_values
from .values import RegistryValue

LOGGER = get_logger("regfile.document")

KeyEntries = Mapping[str, RegistryValue]
Source = Union[str, "os.PathLike[str]", IO[bytes], IO[str]]


@dataclass(frozen=True, slots=True)
class RegistryDocument:
    """Parsed .reg content: key path -> value name -> RegistryValue."""

    entries: Mapping[str, KeyEntries]
    encoding: DocumentEncoding
    source: Optional[str] = None
    errors: Tuple[ValueDecodeError, ...] = field(default=(), compare=False)

    def __getitem__(self, key_path: str) -> KeyEntries:
        return self.entries[key_path]

    def __contains__(self, key_path: object) -> bool:
        return key_path in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def value_count(self) -> int:
        return sum(len(values) for values in self.entries.values())

    def iter_values(self) -> Iterator[RegistryValue]:
        """Yield every value, key by key in document order."""
        for values in self.entries.values():
            yield from values.values()

    def get(self, key_path: str, name: str = "", default: Any = None) -> Any:
        """Return the RegistryValue ``name`` under ``key_path`` or ``default``."""
        values = self.entries.get(key_path)
        if values is None:
            return default
        return values.get(name, default)


def _build_document(
    content: str,
    config: ParserConfig,
    source: Optional[str],
) -> RegistryDocument:
    encoding = detect_encoding(content)
    LOGGER.debug("Document encoding: %s", encoding)

    sections = extract_key_sections(content)
    entries = {}
    errors: List[ValueDecodeError] = []

    for key_path, block in sections.items():
        raw_values = extract_values(block)
        if not raw_values and not config.retain_empty_keys:
            LOGGER.debug("Skipping key without values: %s", key_path)
            continue

        values = {}
        for name, raw_data in raw_values.items():
            try:
                values[name] = RegistryValue.from_raw(
                    key_path, name, raw_data, encoding, config.legacy_codec
                )
            except ValueDecodeError as e:
                if config.strict:
                    raise
                LOGGER.warning("Skipping value: %s", e)
                errors.append(e)
        entries[key_path] = MappingProxyType(values)

    document = RegistryDocument(
        entries=MappingProxyType(entries),
        encoding=encoding,
        source=source,
        errors=tuple(errors),
    )
    LOGGER.debug("Parsed %d keys, %d values", len(document), document.value_count)
    return document


def parse_reg_text(
    content: str,
    config: Optional[ParserConfig] = None,
    source: Optional[str] = None,
) -> RegistryDocument:
    """
    Parse already-decoded .reg text.

    Raises:
        RegFileError: On any parse or decode failure; the original error
            is available as ``__cause__``
    """
    config = config or ParserConfig()
    label = source or "<text>"
    try:
        return _build_document(content, config, source)
    except RegFileError as e:
        LOGGER.error("Error reading reg file %s: %s", label, e)
        raise RegFileError(f"Error reading reg file {label}: {e}") from e


def _read_source(source: Source, config: ParserConfig) -> Tuple[str, Optional[str]]:
    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        raw_data = path.read_bytes()
        label = str(path)
    else:
        raw_data = source.read()
        name = getattr(source, "name", None)
        label = str(name) if name is not None else None
        if isinstance(raw_data, str):
            return raw_data, label

    try:
        return decode_bytes(raw_data, config.input_encoding), label
    except (UnicodeDecodeError, LookupError) as e:
        raise RegFileError(f"Cannot decode reg file {label or '<stream>'}: {e}") from e


def read_reg_file(source: Source, config: Optional[ParserConfig] = None) -> RegistryDocument:
    """
    Read and parse a .reg file from a path or an open stream.

    Streams may be binary or text; they are read to the end but not closed.

    Raises:
        OSError: If the path cannot be read
        RegFileError: If the content cannot be decoded or parsed
    """
    config = config or ParserConfig()
    content, label = _read_source(source, config)
    LOGGER.debug("Read %d characters from %s", len(content), label or "<stream>")
    return parse_reg_text(content, config, source=label)
