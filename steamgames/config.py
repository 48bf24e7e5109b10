"""
Configuration - settings persistence and Steam path resolution.

Settings live in a small JSON file in the data directory. A ``.env`` file or
environment variables can override the Steam path, data directory and log
level.
"""

from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from steamgames.core.steam_paths import SteamInstallation, locate_steam_installation
from steamgames.services.game_list_service import DEFAULT_FILTER_MODE, FILTER_MODES

logger = logging.getLogger("steamgames.config")


__all__ = ["Config", "config"]


def _default_data_dir() -> Path:
    """Per-user data directory: %APPDATA%\\SteamGames on Windows, ~/.config/steamgames elsewhere."""
    if platform.system() == "Windows" and os.getenv("APPDATA"):
        return Path(os.environ["APPDATA"]) / "SteamGames"
    return Path.home() / ".config" / "steamgames"


@dataclass
class Config:
    """
    Central configuration handling for the application.
    Manages paths, the Steam path override, favorites and the list filter mode.
    """

    DATA_DIR: Path = field(default_factory=_default_data_dir)
    SETTINGS_FILE: Path | None = None
    LOG_FILE: Path | None = None
    LOG_LEVEL: str = "INFO"

    # Overrides registry discovery when set
    STEAM_PATH: Path | None = None

    FAVORITES: list[str] = field(default_factory=list)
    FILTER_MODE: str = DEFAULT_FILTER_MODE

    RESTART_DELAY: float = 2.0

    def __post_init__(self):
        """Apply environment overrides and load settings after instantiation."""
        load_dotenv()

        env_data_dir = os.getenv("STEAMGAMES_DATA_DIR")
        if env_data_dir:
            self.DATA_DIR = Path(env_data_dir)

        if self.SETTINGS_FILE is None:
            self.SETTINGS_FILE = self.DATA_DIR / "settings.json"
        if self.LOG_FILE is None:
            self.LOG_FILE = self.DATA_DIR / "steamgames.log"

        self.LOG_LEVEL = os.getenv("STEAMGAMES_LOG_LEVEL", self.LOG_LEVEL)

        self._load_settings()

        # Environment wins over the settings file
        env_steam_path = os.getenv("STEAM_PATH")
        if env_steam_path:
            self.STEAM_PATH = Path(env_steam_path)

    def _load_settings(self) -> None:
        """Load settings from JSON file."""
        if not self.SETTINGS_FILE.exists():
            return

        try:
            with open(self.SETTINGS_FILE, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Could not load settings from %s: %s", self.SETTINGS_FILE, e)
            return

        if not isinstance(data, dict):
            logger.error("Ignoring malformed settings file %s", self.SETTINGS_FILE)
            return

        steam_path = data.get("steam_path")
        if steam_path:
            self.STEAM_PATH = Path(steam_path)

        favorites = data.get("favorites", [])
        if isinstance(favorites, list):
            self.FAVORITES = [str(appid) for appid in favorites]

        filter_mode = data.get("filter_mode")
        if filter_mode in FILTER_MODES:
            self.FILTER_MODE = filter_mode

    def save(self) -> None:
        """Save current configuration to JSON file."""
        data = {
            "steam_path": str(self.STEAM_PATH) if self.STEAM_PATH else "",
            "favorites": self.FAVORITES,
            "filter_mode": self.FILTER_MODE,
        }

        try:
            self.SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True)
            with open(self.SETTINGS_FILE, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.error("Could not save settings to %s: %s", self.SETTINGS_FILE, e)

    def is_favorite(self, appid: str) -> bool:
        return appid in self.FAVORITES

    def toggle_favorite(self, appid: str) -> bool:
        """Adds or removes a favorite and saves.

        Returns:
            True if the app is a favorite afterwards.
        """
        if appid in self.FAVORITES:
            self.FAVORITES.remove(appid)
            now_favorite = False
        else:
            self.FAVORITES.append(appid)
            now_favorite = True
        self.save()
        return now_favorite

    def set_filter_mode(self, mode: str) -> None:
        """Persists the list filter mode; unknown modes are ignored."""
        if mode not in FILTER_MODES:
            logger.warning("Ignoring unknown filter mode %r", mode)
            return
        self.FILTER_MODE = mode
        self.save()

    def resolve_installation(self) -> SteamInstallation | None:
        """Returns the Steam installation, preferring the configured override."""
        if self.STEAM_PATH:
            return SteamInstallation.from_root(self.STEAM_PATH)
        return locate_steam_installation()


# Global instance
config = Config()
