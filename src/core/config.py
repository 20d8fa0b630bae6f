from __future__ import annotations

import codecs
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml
from jsonschema import Draft202012Validator

from .logging import get_logger

LOGGER = get_logger("core.config")

SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "config.schema.json"


@dataclass(frozen=True)
class ConfigValidationError(Exception):
    """Raised when a configuration file does not match the schema."""

    errors: List[str]

    def __str__(self) -> str:
        return " | ".join(self.errors)


@dataclass(slots=True)
class LoggingConfig:
    """Logging configuration from the ``logging`` section."""

    level: str = "INFO"
    log_max_mb: int = 10
    log_backup_count: int = 5

    @property
    def level_number(self) -> int:
        return logging.getLevelName(self.level)


@dataclass(slots=True)
class ParserConfig:
    """Parser behaviour resolved from the ``parser`` section."""

    strict: bool = True  # Any undecodable value fails the whole document
    retain_empty_keys: bool = True  # Keys without value lines map to {}
    legacy_codec: str = "latin-1"  # Single-byte decoding for REGEDIT4 hex strings
    input_encoding: Optional[str] = None  # None: BOM / chardet detection
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_json(self) -> str:
        """Serialize the configuration into a JSON string."""
        data = {
            "parser": {
                "strict": self.strict,
                "retain_empty_keys": self.retain_empty_keys,
                "legacy_codec": self.legacy_codec,
                "input_encoding": self.input_encoding,
            },
            "logging": {
                "level": self.logging.level,
                "log_max_mb": self.logging.log_max_mb,
                "log_backup_count": self.logging.log_backup_count,
            },
        }
        return json.dumps(data, indent=2, sort_keys=True)


def load_schema(schema_path: Path = SCHEMA_PATH) -> Draft202012Validator:
    """Load a JSON schema file and return a compiled validator."""
    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    return Draft202012Validator(schema)


def iter_validation_errors(validator: Draft202012Validator, document: Dict[str, Any]) -> Iterable[str]:
    """Yield human-readable error strings for a document."""
    for error in validator.iter_errors(document):
        path = "/".join(str(p) for p in error.path)
        pointer = f"{path}: " if path else ""
        yield f"{pointer}{error.message}"


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        try:
            content = yaml.safe_load(handle) or {}
        except yaml.YAMLError as e:
            raise ConfigValidationError([f"Config file {path} is not valid YAML: {e}"]) from e
        if not isinstance(content, dict):
            raise ConfigValidationError([f"Config file {path} must contain a mapping at the top level."])
        return content


def _check_codecs(parser_cfg: Dict[str, Any]) -> List[str]:
    errors = []
    for option in ("legacy_codec", "input_encoding"):
        name = parser_cfg.get(option)
        if not name:
            continue
        try:
            codecs.lookup(name)
        except LookupError:
            errors.append(f"parser/{option}: unknown codec '{name}'")
    return errors


def config_from_dict(data: Dict[str, Any]) -> ParserConfig:
    """
    Build a ParserConfig from an already-loaded mapping.

    Raises:
        ConfigValidationError: If the mapping violates the schema or names
            an unknown codec.
    """
    errors = list(iter_validation_errors(load_schema(), data))
    if not errors:
        errors.extend(_check_codecs(data.get("parser", {})))
    if errors:
        LOGGER.error("Config validation failed: %s", " | ".join(errors))
        raise ConfigValidationError(errors)

    parser_cfg = data.get("parser", {})
    logging_cfg = data.get("logging", {})

    logging_config = LoggingConfig(
        level=logging_cfg.get("level", "INFO"),
        log_max_mb=logging_cfg.get("log_max_mb", 10),
        log_backup_count=logging_cfg.get("log_backup_count", 5),
    )

    return ParserConfig(
        strict=parser_cfg.get("strict", True),
        retain_empty_keys=parser_cfg.get("retain_empty_keys", True),
        legacy_codec=parser_cfg.get("legacy_codec", "latin-1"),
        input_encoding=parser_cfg.get("input_encoding"),
        logging=logging_config,
    )


def load_config(path: Optional[Path] = None) -> ParserConfig:
    """Load parser configuration from a YAML file, providing sensible defaults."""
    if path is None:
        return ParserConfig()
    config = config_from_dict(_load_yaml(Path(path)))
    LOGGER.debug("Loaded config from %s", path)
    return config
