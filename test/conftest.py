from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from logging_utils import COMMAND_LOGGER_NAME  # noqa: E402


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Drop handlers installed by configure_logging during a test."""
    root = logging.getLogger()
    before = set(root.handlers)
    level = root.level
    command_logger = logging.getLogger(COMMAND_LOGGER_NAME)
    command_level = command_logger.level
    yield
    command_logger.setLevel(command_level)
    for handler in list(root.handlers):
        if handler not in before and type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
