"""
Windows Registry export (.reg) parser

Parses regedit text exports into typed values without touching a live
registry.

Features:
- REGEDIT4 (ANSI) and version 5.00 (Unicode) exports
- All eleven value kinds, including wrapped hex lists
- Fail-fast errors with the offending text attached
- Export back to .reg text
"""

from .document import KeyEntries, RegistryDocument, parse_reg_text, read_reg_file
from .exceptions import MalformedHeaderError, ParseError, RegFileError, ValueDecodeError
from .export import dump, dumps
from .value_types import RegValueKind
from .values import RegistryValue

__all__ = [
    "KeyEntries",
    "MalformedHeaderError",
    "ParseError",
    "RegFileError",
    "RegValueKind",
    "RegistryDocument",
    "RegistryValue",
    "ValueDecodeError",
    "dump",
    "dumps",
    "parse_reg_text",
    "read_reg_file",
]
