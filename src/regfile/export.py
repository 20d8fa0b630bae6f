"""
Render a RegistryDocument back to .reg text.

Output follows what regedit writes: a version header, a blank line, then
one ``[key]`` block per key separated by blank lines, CR-LF line endings,
and hex lists wrapped at 80 columns with backslash continuations.
"""

from __future__ import annotations

import codecs
import os
from pathlib import Path
from typing import List, Optional, Union

from core.enums import DocumentEncoding
from core.logging import get_logger

from .document import RegistryDocument
from .text import LINE_SEPARATOR, escape
from .value_types import RegValueKind
from .values import DEFAULT_LEGACY_CODEC, RegistryValue

LOGGER = get_logger("regfile.export")

MAX_LINE_WIDTH = 80
CONTINUATION_INDENT = "  "


def _format_name(name: str) -> str:
    if not name:
        return "@"
    return f'"{escape(name)}"'


def format_hex_data(lead: str, data: bytes) -> str:
    """Write ``lead`` followed by comma-separated hex bytes, wrapping long lines."""
    lines: List[str] = []
    current = lead
    has_data = False
    for index, byte in enumerate(data):
        piece = f"{byte:02x}" + ("," if index < len(data) - 1 else "")
        if has_data and len(current) + len(piece) + 1 > MAX_LINE_WIDTH:
            lines.append(current + "\\")
            current = CONTINUATION_INDENT
        current += piece
        has_data = True
    lines.append(current)
    return LINE_SEPARATOR.join(lines)


def format_value(value: RegistryValue) -> str:
    """Return the ``name=data`` line(s) for one value."""
    lead = f"{_format_name(value.name)}="
    if value.kind is RegValueKind.SZ:
        return f'{lead}"{escape(value.value)}"'
    if value.kind is RegValueKind.DWORD:
        return f"{lead}dword:{value.value:08x}"
    return format_hex_data(f"{lead}{value.kind.prefix}", value.raw_bytes or b"")


def dumps(document: RegistryDocument) -> str:
    """Render the document as .reg text."""
    lines = [document.encoding.header, ""]
    for key_path, values in document.entries.items():
        lines.append(f"[{key_path}]")
        lines.extend(format_value(value) for value in values.values())
        lines.append("")
    return LINE_SEPARATOR.join(lines) + LINE_SEPARATOR


def dump(
    document: RegistryDocument,
    path: Union[str, "os.PathLike[str]"],
    encoding: Optional[str] = None,
    legacy_codec: str = DEFAULT_LEGACY_CODEC,
) -> Path:
    """
    Write the document to ``path``.

    Without an explicit encoding, Unicode documents are written as
    UTF-16LE with a BOM (as regedit does) and REGEDIT4 documents with
    ``legacy_codec``.
    """
    text = dumps(document)
    if encoding is not None:
        data = text.encode(encoding)
    elif document.encoding is DocumentEncoding.UTF8:
        data = codecs.BOM_UTF16_LE + text.encode("utf-16-le")
    else:
        data = text.encode(legacy_codec)

    target = Path(path)
    target.write_bytes(data)
    LOGGER.debug("Wrote %d keys to %s (%d bytes)", len(document), target, len(data))
    return target
