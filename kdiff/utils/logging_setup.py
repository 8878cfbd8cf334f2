"""Logging configuration for kdiff.

The TUI owns the terminal, so records only ever go to a log file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from kdiff.constants.defaults import LOG_FILE_DEFAULT, LOG_LEVEL_DEFAULT
from kdiff.constants.values import APP_NAME

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DIR_MODE = 0o755

LOG_LEVELS: dict[str, int] = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def resolve_log_level(level: str) -> int:
    """Map a kdiff level name to a ``logging`` level.

    Raises:
        ValueError: For unknown level names.
    """
    try:
        return LOG_LEVELS[level.strip().lower()]
    except KeyError:
        choices = ", ".join(LOG_LEVELS)
        raise ValueError(f"unknown log level {level!r} (expected one of: {choices})") from None


def configure_logging(
    log_file: str | Path = LOG_FILE_DEFAULT,
    level: str = LOG_LEVEL_DEFAULT,
) -> logging.Logger:
    """Attach a file handler to the ``kdiff`` logger.

    Previously installed handlers are closed and replaced, so calling this
    twice does not duplicate records.
    """
    path = Path(log_file).expanduser()
    path.parent.mkdir(mode=LOG_DIR_MODE, parents=True, exist_ok=True)

    logger = logging.getLogger(APP_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(resolve_log_level(level))
    logger.propagate = False
    return logger


__all__ = ["LOG_LEVELS", "configure_logging", "resolve_log_level"]
