"""
String helpers for .reg text.

Pure slice/regex transforms: trimming quotes and brackets, removing
line-continuation splices, and the backslash escape grammar used by
quoted value data.
"""

from __future__ import annotations

import re

# .reg files are written with CR-LF; used when concatenating duplicate blocks.
LINE_SEPARATOR = "\r\n"

_CONTINUATION_RE = re.compile(r"\\\r?\n[ \t]*")
_ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|[\s\S]?)")

_SIMPLE_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "'": "'",
    "/": "/",
    "0": "\0",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}


def strip_surrounding(text: str, lead: str, trail: str) -> str:
    """Trim whitespace, then remove one ``lead``/``trail`` pair if both are present."""
    value = text.strip()
    if len(value) >= 2 and value.startswith(lead) and value.endswith(trail):
        return value[1:-1]
    return value


def strip_quotes(text: str) -> str:
    """Remove one layer of surrounding double quotes."""
    return strip_surrounding(text, '"', '"')


def strip_brackets(text: str) -> str:
    """Remove one layer of surrounding square brackets."""
    return strip_surrounding(text, "[", "]")


def trim_line_breaks(text: str) -> str:
    """Drop trailing CR/LF characters."""
    return text.rstrip("\r\n")


def splice_continuations(text: str) -> str:
    """Delete backslash + line break + indentation sequences used to wrap hex lists."""
    return _CONTINUATION_RE.sub("", text)


def append_block(existing: str, addition: str) -> str:
    """Concatenate two raw text blocks, keeping them on separate lines."""
    if existing.endswith("\n"):
        return existing + addition
    return existing + LINE_SEPARATOR + addition


def unescape(text: str) -> str:
    """
    Resolve backslash escapes in quoted value data.

    Best effort: if any escape sequence is not recognised (including a
    dangling trailing backslash) the text is returned untouched.
    """
    if "\\" not in text:
        return text

    pieces = []
    position = 0
    for match in _ESCAPE_RE.finditer(text):
        token = match.group(1)
        if token in _SIMPLE_ESCAPES:
            replacement = _SIMPLE_ESCAPES[token]
        elif len(token) > 1:
            replacement = chr(int(token[1:], 16))
        else:
            return text
        pieces.append(text[position:match.start()])
        pieces.append(replacement)
        position = match.end()

    pieces.append(text[position:])
    return "".join(pieces)


def escape(text: str) -> str:
    """Escape backslashes and quotes for writing quoted .reg data."""
    return text.replace("\\", "\\\\").replace('"', '\\"')
