"""Plain-text listing of a parsed .reg document.

One block per key, one line per value: strings are shown quoted, other
kinds as ``[REG_KIND] value``. A summary line closes the listing.
"""

from __future__ import annotations

from typing import Any

from jinja2 import Environment, FileSystemLoader

from core.logging import get_logger
from regfile.document import RegistryDocument
from regfile.value_types import RegValueKind
from regfile.values import RegistryValue

from .paths import get_templates_dir

LOGGER = get_logger("reports.listing")

TEMPLATE_NAME = "listing.txt.j2"


def value_label(name: str) -> str:
    """``@`` for the default value, otherwise the quoted name."""
    if not name:
        return "@"
    return f'"{name}"'


def format_data(data: Any) -> str:
    if data is None:
        return "(none)"
    if isinstance(data, bytes):
        return ",".join(f"{byte:02x}" for byte in data)
    if isinstance(data, list):
        return " | ".join(data)
    return str(data)


def display_value(value: RegistryValue) -> str:
    if value.kind is RegValueKind.SZ:
        return f'"{value.value}"'
    return f"[{value.kind.reg_name}] {format_data(value.value)}"


def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(get_templates_dir()),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["value_label"] = value_label
    env.filters["display_value"] = display_value
    return env


def render_listing(document: RegistryDocument) -> str:
    """Render the listing for ``document``."""
    template = _environment().get_template(TEMPLATE_NAME)
    entries = [
        (key_path, list(values.values()))
        for key_path, values in document.entries.items()
    ]
    LOGGER.debug("Rendering listing for %d keys", len(entries))
    return template.render(
        entries=entries,
        key_count=len(document),
        value_count=document.value_count,
    )
