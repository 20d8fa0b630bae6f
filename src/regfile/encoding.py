"""
Encoding handling for .reg documents.

Two separate concerns live here:

- ``detect_encoding`` inspects the decoded text for the ``REGEDIT4`` marker.
  The result only governs how hex-encoded string payloads (``hex(2):``,
  ``hex(7):`` ...) are turned back into text.
- ``decode_bytes`` turns the raw file bytes into text before parsing.
  regedit 5 exports are UTF-16LE with a BOM, REGEDIT4 exports are ANSI,
  hand-written files are usually UTF-8.
"""

from __future__ import annotations

import codecs
import re
from typing import Optional, Tuple

import chardet

from core.enums import DocumentEncoding
from core.logging import get_logger

LOGGER = get_logger("regfile.encoding")

_REGEDIT4_RE = re.compile(r"[ ]*(?:\r?\n)*REGEDIT4", re.IGNORECASE)

# Bytes sampled for chardet when there is no BOM
DETECTION_SAMPLE_SIZE = 100000

_BOMS = (
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)


def detect_encoding(text: str) -> DocumentEncoding:
    """Return LEGACY_8BIT for REGEDIT4 documents, UTF8 otherwise."""
    if _REGEDIT4_RE.match(text):
        return DocumentEncoding.LEGACY_8BIT
    return DocumentEncoding.UTF8


def sniff_bytes(raw_data: bytes, preferred: Optional[str] = None) -> Tuple[str, int]:
    """
    Choose the codec for raw file bytes.

    Args:
        raw_data: File content (or its head)
        preferred: Codec to use when no BOM is present

    Returns:
        (codec name, number of leading BOM bytes to skip)
    """
    for bom, name in _BOMS:
        if raw_data.startswith(bom):
            return name, len(bom)

    if preferred:
        return preferred, 0

    result = chardet.detect(raw_data[:DETECTION_SAMPLE_SIZE])
    encoding = result.get("encoding")
    if not encoding:
        LOGGER.warning("Could not detect encoding, falling back to utf-8")
        return "utf-8", 0

    encoding = encoding.lower()
    LOGGER.debug("Detected encoding: %s (confidence: %.2f)", encoding, result.get("confidence") or 0.0)
    if encoding == "ascii":
        return "utf-8", 0
    if encoding.startswith("utf-16"):
        # No BOM: guess the byte order from where the zero bytes sit
        if raw_data[1:2] == b"\x00":
            return "utf-16-le", 0
        return "utf-16-be", 0
    return encoding, 0


def decode_bytes(raw_data: bytes, preferred: Optional[str] = None) -> str:
    """
    Decode raw .reg bytes to text, preserving line breaks as written.

    Raises:
        UnicodeDecodeError: If the bytes are not valid in the chosen codec
    """
    codec, skip = sniff_bytes(raw_data, preferred)
    return raw_data[skip:].decode(codec)
