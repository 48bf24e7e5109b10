"""Centralized logging configuration for Steam Games.

All modules log through children of the "steamgames" logger
(``logging.getLogger("steamgames.<area>")``); this module attaches the
handlers once at startup.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

__all__ = ["LOG_FORMAT", "logger", "parse_level", "setup_logging"]

logger = logging.getLogger("steamgames")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_LOG_FILE_MAX_BYTES = 512 * 1024
_LOG_FILE_BACKUPS = 2


def parse_level(level: int | str) -> int:
    """Turns a level name such as "debug" into its numeric value.

    Unknown names fall back to INFO.
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    level: int | str = logging.INFO,
    log_file: Path | None = None,
) -> None:
    """Configure the application logger.

    Calling it again only changes the level.

    Args:
        level: Logging level or level name (default: INFO).
        log_file: Optional log file; rotated at 512 KiB and always
            written at DEBUG level.
    """
    numeric_level = parse_level(level)
    logger.setLevel(min(numeric_level, logging.DEBUG) if log_file else numeric_level)

    if logger.handlers:
        for handler in logger.handlers:
            if not isinstance(handler, RotatingFileHandler):
                handler.setLevel(numeric_level)
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=_LOG_FILE_MAX_BYTES, backupCount=_LOG_FILE_BACKUPS, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
