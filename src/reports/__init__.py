"""Reports module - text renderings of parsed documents."""

from core.app_version import get_app_version

__version__ = get_app_version()

from .listing import render_listing  # noqa: E402

__all__ = ["render_listing"]
