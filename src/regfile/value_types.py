"""
Registry value kinds and their .reg encoding prefixes.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Optional, Tuple


class RegValueKind(IntEnum):
    """Registry value types, numbered as in winnt.h."""

    NONE = 0
    SZ = 1
    EXPAND_SZ = 2
    BINARY = 3
    DWORD = 4
    LINK = 6
    MULTI_SZ = 7
    RESOURCE_LIST = 8
    FULL_RESOURCE_DESCRIPTOR = 9
    RESOURCE_REQUIREMENTS_LIST = 10
    QWORD = 11

    @property
    def prefix(self) -> Optional[str]:
        """Literal that introduces the value data, or None for REG_SZ."""
        return _PREFIXES.get(self)

    @property
    def reg_name(self) -> str:
        """Win32 constant name, e.g. ``REG_DWORD``."""
        return f"REG_{self.name}"

    @property
    def is_hex(self) -> bool:
        """True for kinds whose data is a comma-separated byte list."""
        prefix = self.prefix
        return prefix is not None and prefix.startswith("hex")

    @classmethod
    def from_encoded(cls, raw_data: str) -> "RegValueKind":
        """
        Classify raw value data by its prefix (case-insensitive).

        Data without a known prefix is a plain string (REG_SZ).
        """
        head = raw_data.lstrip()[:len("hex(a):")].lower()
        for kind in CLASSIFICATION_ORDER:
            if head.startswith(_PREFIXES[kind]):
                return kind
        return cls.SZ


_PREFIXES = {
    RegValueKind.NONE: "hex(0):",
    RegValueKind.EXPAND_SZ: "hex(2):",
    RegValueKind.BINARY: "hex:",
    RegValueKind.DWORD: "dword:",
    RegValueKind.LINK: "hex(6):",
    RegValueKind.MULTI_SZ: "hex(7):",
    RegValueKind.RESOURCE_LIST: "hex(8):",
    RegValueKind.FULL_RESOURCE_DESCRIPTOR: "hex(9):",
    RegValueKind.RESOURCE_REQUIREMENTS_LIST: "hex(a):",
    RegValueKind.QWORD: "hex(b):",
}

# Most specific first; the bare ``hex:`` must come after every ``hex(n):``.
CLASSIFICATION_ORDER: Tuple[RegValueKind, ...] = (
    RegValueKind.RESOURCE_REQUIREMENTS_LIST,
    RegValueKind.FULL_RESOURCE_DESCRIPTOR,
    RegValueKind.RESOURCE_LIST,
    RegValueKind.QWORD,
    RegValueKind.DWORD,
    RegValueKind.MULTI_SZ,
    RegValueKind.LINK,
    RegValueKind.EXPAND_SZ,
    RegValueKind.NONE,
    RegValueKind.BINARY,
)


def split_prefix(raw_data: str) -> Tuple[RegValueKind, str]:
    """Return the kind of ``raw_data`` and the data with its prefix removed."""
    kind = RegValueKind.from_encoded(raw_data)
    if kind.prefix is None:
        return kind, raw_data
    return kind, raw_data.lstrip()[len(kind.prefix):]
