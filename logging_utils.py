"""Logging setup helpers for catmp4."""
from __future__ import annotations

import logging
import sys
from logging import Logger
from pathlib import Path
from typing import Optional

from errors import ConfigError

# ffmpeg command lines go through this logger; it never drops below INFO so
# the echo survives a quieter configured level.
COMMAND_LOGGER_NAME = "catmp4.commands"


def configure_logging(level: str = "INFO", log_file: Optional[Path] = None) -> Logger:
    """Configure root logger with a console handler and an optional file handler.

    The console only shows the bare message; ffmpeg command lines and errors
    are meant to be read by the user. The log file keeps the full record.
    Filtering happens on the loggers, not the handlers, so the command
    logger can stay at INFO while the root follows `level`.
    """
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(numeric_level)
    logging.getLogger(COMMAND_LOGGER_NAME).setLevel(min(numeric_level, logging.INFO))

    # Clear existing handlers to avoid duplicate logs when reconfigured
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot open log file {log_file}: {exc}") from exc
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    logger.debug("Logging configured", extra={"level": level, "file": str(log_file)})
    return logger


def get_logger(name: Optional[str] = None) -> Logger:
    """Return a module-level logger."""
    return logging.getLogger(name)
