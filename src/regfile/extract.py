"""
Section and value-line extraction.

Splits decoded .reg text into one raw block per ``[key]`` header, then
splits each block into raw ``name -> data`` strings. Nothing is decoded
here; value data keeps its type prefix.
"""

from __future__ import annotations

import re
from typing import Dict, List, Tuple

from core.logging import get_logger

from .exceptions import MalformedHeaderError, ParseError, RegFileError
from .text import append_block, strip_brackets, strip_quotes, trim_line_breaks, unescape

LOGGER = get_logger("regfile.extract")

_KEY_HEADER_RE = re.compile(r"^[ \t]*\[.+\]=?[ \t]*(?:[\r\n]+|\Z)", re.MULTILINE)
_BRACKET_LINE_RE = re.compile(r"^[ \t]*\[[^\r\n]*", re.MULTILINE)

# Name: quoted (with escapes) or @. Data: quoted string closed at end of line,
# or the rest of the line plus any lines joined by a trailing backslash.
# A backslash right before the closing quote is literal (``"C:\Temp\"``).
_VALUE_LINE_RE = re.compile(
    r'^[ \t]*("(?:[^"\\\r\n]|\\.)*"|@)[ \t]*='
    r'[ \t]*("(?:[^"\\]|\\(?="[ \t]*(?:\r?\n|\Z))|\\[\s\S])*"(?=[ \t]*(?:\r?\n|\Z))'
    r'|[^\r\n]*(?:\\\r?\n[^\r\n]*)*)',
    re.MULTILINE,
)


def normalize_key_path(header: str) -> str:
    """
    Turn a header line into its key path.

    Trailing line breaks and one trailing ``=`` are dropped, then the
    surrounding brackets and quotes.
    """
    key = trim_line_breaks(header).strip()
    if key.endswith("="):
        key = key[:-1]
    return strip_quotes(strip_brackets(key))


def _is_balanced(header: str) -> bool:
    line = header.strip()
    if line.endswith("="):
        line = line[:-1]
    return line.count("[") == line.count("]") and line.endswith("]")


def _quoted_data_spans(content: str) -> List[Tuple[int, int]]:
    spans = []
    for match in _VALUE_LINE_RE.finditer(content):
        data = match.group(2)
        if len(data) >= 2 and data[0] == data[-1] == '"':
            spans.append(match.span(2))
    return spans


def _check_stray_headers(content: str, header_starts: set) -> None:
    """Reject ``[`` lines that are not headers, unless they sit inside quoted data."""
    spans = _quoted_data_spans(content)
    for match in _BRACKET_LINE_RE.finditer(content):
        start = match.start()
        if start in header_starts:
            continue
        if any(low < start < high for low, high in spans):
            continue
        raise MalformedHeaderError(match.group(0))


def extract_key_sections(content: str) -> Dict[str, str]:
    """
    Map each key path to the raw text that follows its header.

    Repeated headers for the same key have their blocks concatenated.

    Raises:
        MalformedHeaderError: A header line is unbalanced or names no key
        ParseError: Any other failure while processing a header
    """
    matches = list(_KEY_HEADER_RE.finditer(content))
    _check_stray_headers(content, {m.start() for m in matches})

    sections: Dict[str, str] = {}
    for index, match in enumerate(matches):
        header = match.group(0)
        try:
            if not _is_balanced(header):
                raise MalformedHeaderError(header)

            key = normalize_key_path(header)
            if not key:
                raise MalformedHeaderError(header)

            end = matches[index + 1].start() if index + 1 < len(matches) else len(content)
            block = trim_line_breaks(content[match.end():end])
        except RegFileError:
            raise
        except Exception as e:
            raise ParseError(f"Exception thrown on processing string {header!r}", header) from e

        if key in sections:
            LOGGER.debug("Merging duplicate key section %s", key)
            sections[key] = append_block(sections[key], block)
        else:
            sections[key] = block

    LOGGER.debug("Found %d key sections (%d headers)", len(sections), len(matches))
    return sections


def extract_values(block: str) -> Dict[str, str]:
    """
    Map each value name in a key block to its raw data.

    ``@`` becomes the empty name. Repeated names have their data
    concatenated. A blank block yields an empty mapping.
    """
    values: Dict[str, str] = {}
    if not block.strip():
        return values

    for match in _VALUE_LINE_RE.finditer(block):
        try:
            raw_name = trim_line_breaks(match.group(1))
            name = "" if raw_name == "@" else unescape(strip_quotes(raw_name))
            data = trim_line_breaks(match.group(2))
        except Exception as e:
            raise ParseError(f"Exception thrown on processing string {match.group(0)!r}", match.group(0)) from e

        if name in values:
            values[name] = append_block(values[name], data)
        else:
            values[name] = data

    return values
