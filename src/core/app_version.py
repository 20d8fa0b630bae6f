"""Version lookup: the checkout's ``pyproject.toml`` first, then package metadata."""

from __future__ import annotations

from functools import lru_cache
from importlib import metadata
from pathlib import Path
import re

DISTRIBUTION_NAME = "regfile-parser"
UNKNOWN_VERSION = "0.0.0"

_VERSION_RE = re.compile(r'^\s*version\s*=\s*"([^"]+)"\s*$', re.MULTILINE)


def _version_from_pyproject(pyproject_path: Path) -> str | None:
    try:
        content = pyproject_path.read_text(encoding="utf-8")
    except OSError:
        return None
    match = _VERSION_RE.search(content)
    return match.group(1) if match else None


@lru_cache(maxsize=1)
def get_app_version() -> str:
    """Return the project version, or ``0.0.0`` when it cannot be found."""
    version = _version_from_pyproject(Path(__file__).resolve().parents[2] / "pyproject.toml")
    if version:
        return version
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return UNKNOWN_VERSION
