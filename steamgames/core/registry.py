"""Windows registry reads through ``reg.exe``.

Every failure (non-Windows host, missing key, command error, unexpected
output) is reported as an absent value.
"""

from __future__ import annotations

import logging
import re
import subprocess

logger = logging.getLogger("steamgames.registry")

__all__ = ["STEAM_USER_KEY", "parse_reg_query_output", "read_registry_string"]

STEAM_USER_KEY = r"HKCU\Software\Valve\Steam"

_QUERY_TIMEOUT = 10


def parse_reg_query_output(output: str, value: str) -> str | None:
    """Extracts a value's data from ``reg query`` output.

    A matching line looks like ``    SteamPath    REG_SZ    c:/program files (x86)/steam``.

    Args:
        output: The raw stdout of ``reg query``.
        value: The value name that anchors the match.

    Returns:
        The trimmed data string, or None if no line matches or the data is empty.
    """
    pattern = re.compile(rf"^\s*{re.escape(value)}\s+REG_\w+\s+(.+)$", re.IGNORECASE)
    for line in output.splitlines():
        match = pattern.match(line)
        if match:
            data = match.group(1).strip()
            return data or None
    return None


def read_registry_string(key: str, value: str) -> str | None:
    """Reads a single registry value.

    Args:
        key: Full key path, e.g. ``HKCU\\Software\\Valve\\Steam``.
        value: Value name, e.g. ``SteamPath``.

    Returns:
        The value's data, or None on any failure.
    """
    try:
        result = subprocess.run(
            ["reg", "query", key, "/v", value],
            capture_output=True,
            text=True,
            timeout=_QUERY_TIMEOUT,
            check=True,
        )
    except FileNotFoundError:
        logger.debug("reg.exe not available, cannot read %s\\%s", key, value)
        return None
    except (subprocess.SubprocessError, OSError) as e:
        logger.debug("Registry query %s\\%s failed: %s", key, value, e)
        return None

    return parse_reg_query_output(result.stdout or "", value)
