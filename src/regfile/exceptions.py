"""
Exceptions for .reg file parsing.
"""

from __future__ import annotations

from typing import Optional


class RegFileError(Exception):
    """Base exception for .reg parsing; also the top-level read error."""
    pass


class ParseError(RegFileError):
    """Raised when the structure of the document cannot be parsed."""

    def __init__(self, message: str, snippet: Optional[str] = None):
        self.snippet = snippet
        super().__init__(message)


class MalformedHeaderError(ParseError):
    """Raised when a key header line is not a well-formed ``[path]``."""

    def __init__(self, snippet: str):
        super().__init__(f"Malformed key header: {snippet.strip()!r}", snippet)


class ValueDecodeError(RegFileError):
    """Raised when the typed decode of a single value fails."""

    def __init__(
        self,
        message: str,
        key_path: str = "",
        name: str = "",
        raw_data: str = "",
    ):
        self.key_path = key_path
        self.name = name
        self.raw_data = raw_data
        super().__init__(message)

    def with_context(self, key_path: str, name: str, raw_data: str) -> "ValueDecodeError":
        """Return a copy that names the value the error belongs to."""
        label = name or "@"
        return ValueDecodeError(
            f"[{key_path}] {label}: {self}",
            key_path=key_path,
            name=name,
            raw_data=raw_data,
        )
