from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from core.app_version import get_app_version
from core.config import ConfigValidationError, ParserConfig, load_config
from core.enums import OutputFormat
from core.logging import configure_logging, get_logger
from regfile import RegFileError, dumps, read_reg_file
from reports.listing import render_listing

LOGGER = get_logger("app.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="regfile",
        description="Parse a Windows Registry export (.reg) and print its content",
    )
    parser.add_argument("path", type=Path, help="Reg file to parse")
    parser.add_argument(
        "-o", "--output", type=Path,
        help="Write the rendering to this file instead of stdout")
    parser.add_argument(
        "-f", "--format", choices=[fmt.value for fmt in OutputFormat],
        default=OutputFormat.LISTING.value,
        help="listing (human readable) or reg (.reg export)")
    parser.add_argument("-c", "--config", type=Path, help="YAML config file")
    parser.add_argument("--log-dir", type=Path, help="Directory for processing.log")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {get_app_version()}")
    return parser


def _render(document, output_format: OutputFormat) -> str:
    if output_format is OutputFormat.REG:
        return dumps(document)
    return render_listing(document)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else ParserConfig()
    except ConfigValidationError as e:
        configure_logging(args.log_dir)
        LOGGER.error("Invalid config %s: %s", args.config, e)
        return 1

    level = logging.DEBUG if args.verbose else config.logging.level_number
    configure_logging(
        args.log_dir,
        level=level,
        max_bytes=config.logging.log_max_mb * 1024 * 1024,
        backup_count=config.logging.log_backup_count,
    )

    if not args.path.is_file():
        LOGGER.error("File '%s' not found.", args.path)
        return 1

    try:
        document = read_reg_file(args.path, config)
    except (RegFileError, OSError) as e:
        LOGGER.error("%s", e)
        return 1

    print("Reg file has been imported.", file=sys.stderr)
    text = _render(document, OutputFormat(args.format))

    if args.output:
        args.output.write_text(text, encoding="utf-8", newline="")
        LOGGER.info("Content file generated as '%s'", args.output)
    else:
        sys.stdout.write(text)

    LOGGER.info("Reg file contains %d keys and %d values.", len(document), document.value_count)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
