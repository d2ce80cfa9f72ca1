"""Logging utilities for admobgen runs."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "admobgen"

_CONSOLE_FORMAT = "[admobgen] %(levelname)s %(message)s"
# Render and scan pipelines run on pool threads; verbose output names them.
_VERBOSE_CONSOLE_FORMAT = "[admobgen] %(levelname)s %(threadName)s %(message)s"
_FILE_FORMAT = "%(asctime)s [admobgen] %(levelname)s %(name)s %(threadName)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the admobgen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install console output and, when ``log_file`` is given, a DEBUG file sink.

    The file always records DEBUG so a failed run can be inspected without
    re-running it with ``--verbose``. Its parent directory is created.
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(console_level)
    stream_handler.setFormatter(
        logging.Formatter(_VERBOSE_CONSOLE_FORMAT if verbose else _CONSOLE_FORMAT)
    )
    logger.addHandler(stream_handler)

    logger_level = console_level
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)
        logger_level = logging.DEBUG

    logger.setLevel(logger_level)
    return logger


__all__ = ["configure_logging", "get_logger"]
