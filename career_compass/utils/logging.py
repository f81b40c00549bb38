"""Logging setup for Career Compass.

Modules log through children of the ``career_compass`` logger obtained with
get_logger(). configure_logging() attaches a console handler once per process,
plus a file handler per distinct log file; later calls only adjust levels.
"""

import logging
import os
import sys
from pathlib import Path
from typing import TextIO

LOGGER_NAME = "career_compass"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def _resolve_level(level: str | None) -> int:
    if level is None:
        from career_compass.config.settings import get_settings

        level = get_settings().log_level
    return getattr(logging, level.upper(), logging.INFO)


def _attach(
    logger: logging.Logger,
    handler: logging.Handler,
    formatter: logging.Formatter,
) -> None:
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def _file_targets(logger: logging.Logger) -> set[str]:
    return {
        handler.baseFilename
        for handler in logger.handlers
        if isinstance(handler, logging.FileHandler)
    }


def configure_logging(
    level: str | None = None,
    *,
    log_file: Path | str | None = None,
    stream: TextIO | None = None,
    format_string: str = LOG_FORMAT,
    date_format: str = DATE_FORMAT,
) -> logging.Logger:
    """Configure and return the application logger.

    Args:
        level: Log level name. Defaults to ``Settings.log_level``.
        log_file: Also append records to this file; parent directories are
            created.
        stream: Console stream for the first configuration (stderr by default).
        format_string: Format string for log messages.
        date_format: Format string for timestamps.

    Returns:
        The ``career_compass`` logger.
    """
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    log_level = _resolve_level(level)
    logger.setLevel(log_level)
    formatter = logging.Formatter(format_string, datefmt=date_format)

    if not _configured:
        logger.handlers.clear()
        _attach(logger, logging.StreamHandler(stream or sys.stderr), formatter)
        # Host applications attach their own root handlers
        logger.propagate = False
        _configured = True

    if log_file is not None:
        path = Path(log_file)
        if os.path.abspath(path) not in _file_targets(logger):
            path.parent.mkdir(parents=True, exist_ok=True)
            _attach(logger, logging.FileHandler(path, encoding="utf-8"), formatter)

    for handler in logger.handlers:
        handler.setLevel(log_level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a component, e.g. ``get_logger("matching")``."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def reset_logging() -> None:
    """Close handlers and restore propagation (useful for testing)."""
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True

    _configured = False
