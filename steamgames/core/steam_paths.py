"""Steam installation discovery.

Locates the Steam root through the registry, trying each source in order and
stopping at the first non-empty answer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from steamgames.core.registry import STEAM_USER_KEY, read_registry_string

logger = logging.getLogger("steamgames.steam_paths")

__all__ = ["STEAM_INSTALL_SOURCES", "SteamInstallation", "locate_steam_installation"]

RegistryReader = Callable[[str, str], "str | None"]

# (key, value) pairs in lookup order; the WOW6432Node redirect precedes the native key.
STEAM_INSTALL_SOURCES: tuple[tuple[str, str], ...] = (
    (STEAM_USER_KEY, "SteamPath"),
    (r"HKLM\SOFTWARE\WOW6432Node\Valve\Steam", "InstallPath"),
    (r"HKLM\SOFTWARE\Valve\Steam", "InstallPath"),
)


@dataclass(frozen=True)
class SteamInstallation:
    """Paths of a Steam installation.

    Attributes:
        steam_path: Root of the Steam install.
        steam_exe: ``<root>/steam.exe``.
        config_path: ``<root>/config``.
    """

    steam_path: Path
    steam_exe: Path
    config_path: Path

    @classmethod
    def from_root(cls, root: str | Path) -> SteamInstallation:
        """Builds the installation paths for a Steam root directory."""
        root_path = Path(root)
        return cls(steam_path=root_path, steam_exe=root_path / "steam.exe", config_path=root_path / "config")


def locate_steam_installation(read_registry: RegistryReader = read_registry_string) -> SteamInstallation | None:
    """Finds the Steam installation from the registry.

    Args:
        read_registry: Reader used for each (key, value) lookup.

    Returns:
        The installation, or None if every registry source is empty.
    """
    root = next(
        (found for key, value in STEAM_INSTALL_SOURCES if (found := read_registry(key, value))),
        None,
    )
    if not root:
        logger.info("Steam installation not found in registry")
        return None

    logger.debug("Steam root resolved to %s", root)
    return SteamInstallation.from_root(root)
