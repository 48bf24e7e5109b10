# steamgames/ui/actions/game_actions.py

"""
Action handler for game-specific operations.

  - launch(item)              (steam:// protocol, steam.exe fallback)
  - open_game_folder(item)    (install directory in Explorer)
  - launch_big_picture()
  - toggle_favorite(item)
  - open_store_page(item)
  - copy_app_id(item)

Failures are reported to the user; nothing here raises.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PyQt6.QtWidgets import QApplication

from steamgames.core import steam_launcher
from steamgames.core.errors import SteamActionError
from steamgames.services.game_list_service import GameItem, GameListService
from steamgames.ui.widgets.ui_helper import UIHelper

if TYPE_CHECKING:
    from steamgames.ui.main_window import MainWindow

logger = logging.getLogger("steamgames.game_actions")


class GameActions:
    """Handles all game-specific actions.

    Attributes:
        mw: Back-reference to the owning MainWindow instance.
    """

    def __init__(self, main_window: "MainWindow") -> None:
        """Initializes the GameActions handler.

        Args:
            main_window: The MainWindow instance that owns these actions.
        """
        self.mw: "MainWindow" = main_window

    def launch(self, item: GameItem) -> None:
        """Launches a game and reports the outcome in the status bar."""
        self.mw.set_status(f"Launching {item.title}...")
        try:
            steam_launcher.launch_game(item.appid, self.mw.installation)
        except SteamActionError as e:
            logger.error("Launch of %s (%s) failed: %s", item.title, item.appid, e)
            self.mw.set_status(f"Launch failed: {item.title}")
            UIHelper.show_error(self.mw, str(e), f"Launch failed: {item.title}")
            return
        self.mw.set_status(f"Launched {item.title}")

    def open_game_folder(self, item: GameItem) -> None:
        """Opens the game's install directory."""
        try:
            steam_launcher.open_folder(item.install_path)
        except SteamActionError as e:
            logger.warning("Could not open %s: %s", item.install_path, e)
            UIHelper.show_error(self.mw, str(e), "Failed to open folder")

    def launch_big_picture(self) -> None:
        """Opens Steam in Big Picture mode."""
        try:
            steam_launcher.launch_big_picture()
        except SteamActionError as e:
            logger.warning("Big Picture launch failed: %s", e)
            UIHelper.show_error(self.mw, str(e), "Failed to launch Big Picture")
            return
        self.mw.set_status("Launching Big Picture mode")

    def toggle_favorite(self, item: GameItem) -> None:
        """Stars or un-stars a game and refreshes the list in place."""
        now_favorite = self.mw.config.toggle_favorite(item.appid)
        self.mw.items = GameListService.apply_favorites(self.mw.items, self.mw.config.FAVORITES)
        self.mw.populate(select_appid=item.appid)
        verb = "Added to" if now_favorite else "Removed from"
        self.mw.set_status(f"{verb} favorites: {item.title}")

    def open_store_page(self, item: GameItem) -> None:
        """Opens the game's Steam Store page."""
        try:
            steam_launcher.open_store_page(item.appid)
        except SteamActionError as e:
            logger.warning("Could not open store page for %s: %s", item.appid, e)
            UIHelper.show_error(self.mw, str(e), "Failed to open store page")

    def copy_app_id(self, item: GameItem) -> None:
        """Copies the app ID to the clipboard."""
        QApplication.clipboard().setText(item.appid)
        self.mw.set_status(f"Copied App ID {item.appid}")
