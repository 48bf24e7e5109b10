# steamgames/ui/actions/steam_actions.py

"""
Action handler for Steam-level operations.

Handles the entries of the "Steam" list section: opening and restarting the
client and opening the config and library folders.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from steamgames.core import steam_launcher
from steamgames.core.errors import SteamActionError
from steamgames.services.game_list_service import SteamActionItem
from steamgames.ui.widgets.ui_helper import UIHelper
from steamgames.ui.workers.steam_restart_worker import SteamRestartWorker

if TYPE_CHECKING:
    from steamgames.ui.main_window import MainWindow

logger = logging.getLogger("steamgames.steam_actions")


class SteamActions:
    """Handles all Steam actions.

    Attributes:
        mw: Back-reference to the owning MainWindow instance.
        restart_worker: The running or last SteamRestartWorker.
    """

    def __init__(self, main_window: "MainWindow") -> None:
        """Initializes the SteamActions handler.

        Args:
            main_window: The MainWindow instance that owns these actions.
        """
        self.mw: "MainWindow" = main_window
        self.restart_worker: SteamRestartWorker | None = None

    def run(self, action: SteamActionItem) -> None:
        """Dispatches a Steam list entry to its handler."""
        if action.kind == "open_steam":
            self.open_steam()
        elif action.kind == "restart_steam":
            self.restart_steam()
        elif action.kind == "open_config":
            self.open_config_folder()
        elif action.kind == "open_folder" and action.path is not None:
            self.open_library_folder(action.path)
        else:
            logger.warning("Unknown Steam action %r", action.key)

    def open_steam(self) -> None:
        """Starts the Steam client."""
        try:
            steam_launcher.open_steam(self.mw.installation)
        except SteamActionError as e:
            logger.error("Could not open Steam: %s", e)
            UIHelper.show_error(self.mw, str(e), "Failed to open Steam")
            return
        self.mw.set_status("Opening Steam")

    def restart_steam(self) -> None:
        """Restarts Steam in the background after asking for confirmation."""
        if self.restart_worker is not None and self.restart_worker.isRunning():
            self.mw.set_status("Steam is already restarting")
            return
        if not UIHelper.confirm(self.mw, "Restart Steam?", action_text="Restart"):
            return

        self.mw.set_status("Restarting Steam...")
        self.restart_worker = SteamRestartWorker(self.mw.installation, self.mw.config.RESTART_DELAY)
        self.restart_worker.restarted.connect(self._on_restarted)
        self.restart_worker.restart_failed.connect(self._on_restart_failed)
        self.restart_worker.start()

    def _on_restarted(self) -> None:
        self.mw.set_status("Steam restarted")

    def _on_restart_failed(self, message: str) -> None:
        self.mw.set_status("Failed to restart Steam")
        UIHelper.show_error(self.mw, message, "Failed to restart Steam")

    def open_config_folder(self) -> None:
        """Opens Steam's config directory."""
        try:
            steam_launcher.open_config_folder(self.mw.installation)
        except SteamActionError as e:
            logger.warning("Could not open config folder: %s", e)
            UIHelper.show_error(self.mw, str(e), "Failed to open folder")

    def open_library_folder(self, path: Path) -> None:
        """Opens a library's steamapps/common directory."""
        try:
            steam_launcher.open_folder(path)
        except SteamActionError as e:
            logger.warning("Could not open %s: %s", path, e)
            UIHelper.show_error(self.mw, str(e), "Failed to open folder")
