"""Formatting and filesystem helpers for the details pane."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

logger = logging.getLogger("steamgames.format_utils")

__all__ = ["drive_of", "format_bytes", "get_directory_size"]

_DRIVE_RE = re.compile(r"^[A-Za-z]:")
_SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


def drive_of(path: str | Path) -> str | None:
    """Returns the upper-case drive prefix ("D:") of a Windows path, or None."""
    match = _DRIVE_RE.match(str(path))
    return match.group(0).upper() if match else None


def format_bytes(size: int) -> str:
    """Formats a byte count with binary units, e.g. ``1536`` -> ``"1.5 KB"``."""
    if size <= 0:
        return "0 Bytes"
    exponent = 0
    while size >= 1024 ** (exponent + 1) and exponent < len(_SIZE_UNITS) - 1:
        exponent += 1
    value = round(size / 1024**exponent, 2)
    return f"{value:g} {_SIZE_UNITS[exponent]}"


def get_directory_size(path: str | Path) -> int:
    """Sums the sizes of all files below path.

    Unreadable entries are skipped; a missing directory has size 0.
    """
    total = 0
    for root, _dirs, files in os.walk(path, onerror=lambda e: logger.debug("Skipping %s: %s", e.filename, e)):
        for name in files:
            try:
                total += os.path.getsize(os.path.join(root, name))
            except OSError:
                continue
    return total
