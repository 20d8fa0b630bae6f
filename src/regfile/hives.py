"""Root hive derivation for registry key paths."""

from __future__ import annotations

from typing import Tuple

HKEY_LOCAL_MACHINE = "HKEY_LOCAL_MACHINE"
HKEY_CLASSES_ROOT = "HKEY_CLASSES_ROOT"
HKEY_USERS = "HKEY_USERS"
HKEY_CURRENT_CONFIG = "HKEY_CURRENT_CONFIG"
HKEY_CURRENT_USER = "HKEY_CURRENT_USER"

ROOT_HIVES: Tuple[str, ...] = (
    HKEY_LOCAL_MACHINE,
    HKEY_CLASSES_ROOT,
    HKEY_USERS,
    HKEY_CURRENT_CONFIG,
    HKEY_CURRENT_USER,
)


def split_hive(key_path: str) -> Tuple[str, str]:
    """
    Split a key path into its root hive and the remainder.

    Matching is case-sensitive. One path separator after the hive is
    dropped from the remainder.

    Returns:
        (root, key path without root); root is "" when no hive matches
    """
    path = key_path.strip()
    for hive in ROOT_HIVES:
        if path.startswith(hive):
            rest = path[len(hive):]
            if rest.startswith("\\"):
                rest = rest[1:]
            return hive, rest
    return "", key_path
