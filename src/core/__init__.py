"""Core layer shared by the parser, reports and command line."""

from .config import ConfigValidationError, ParserConfig, load_config  # noqa: F401
from .enums import DocumentEncoding, OutputFormat  # noqa: F401
