"""Global pytest configuration."""

import logging
from pathlib import Path

import pytest

from core.logging import LOGGER_NAMESPACE
from tests.fixtures.helpers import sample_reg_text, write_utf16_reg


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers added by configure_logging so tests stay isolated."""
    yield
    logger = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def sample_text() -> str:
    """Representative regedit 5 export with every common value kind."""
    return sample_reg_text()


@pytest.fixture()
def sample_reg_file(tmp_path: Path, sample_text: str) -> Path:
    """The sample export written the way regedit does (UTF-16LE + BOM)."""
    return write_utf16_reg(tmp_path / "sample.reg", sample_text)
