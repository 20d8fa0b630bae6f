"""
Core Enumerations

Centralized enum definitions for consistent typing across the codebase.
Using StrEnum (Python 3.11+) for string-based enums that serialize naturally.
"""

from enum import StrEnum


class DocumentEncoding(StrEnum):
    """Text encoding declared by a .reg document header."""

    LEGACY_8BIT = "legacy"  # REGEDIT4 (ANSI code page)
    UTF8 = "utf-8"          # Windows Registry Editor Version 5.00

    @property
    def header(self) -> str:
        """Return the first line regedit writes for this encoding."""
        if self is DocumentEncoding.LEGACY_8BIT:
            return "REGEDIT4"
        return "Windows Registry Editor Version 5.00"


class OutputFormat(StrEnum):
    """Renderings offered by the command line."""

    LISTING = "listing"  # Human-readable dump
    REG = "reg"          # .reg export
