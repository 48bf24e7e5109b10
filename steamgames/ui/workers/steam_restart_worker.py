"""
Worker thread for restarting Steam.

The restart pauses between killing the client and starting it again, so it
runs outside the UI thread to keep the window responsive.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QThread, pyqtSignal

from steamgames.core import steam_launcher
from steamgames.core.errors import SteamActionError
from steamgames.core.steam_paths import SteamInstallation

logger = logging.getLogger("steamgames.steam_restart_worker")


class SteamRestartWorker(QThread):
    """Background thread running steam_launcher.restart_steam.

    Attributes:
        installation: Steam paths; located by the launcher when None.
        delay: Seconds to wait between kill and start.

    Signals:
        restarted: Emitted once Steam has been started again.
        restart_failed: Emitted with an error message if the restart failed.
    """

    restarted = pyqtSignal()
    restart_failed = pyqtSignal(str)

    def __init__(self, installation: SteamInstallation | None, delay: float):
        super().__init__()
        self.installation = installation
        self.delay = delay

    def run(self) -> None:
        """Kills and restarts Steam, then reports the outcome."""
        try:
            steam_launcher.restart_steam(self.installation, delay=self.delay)
        except SteamActionError as e:
            logger.error("Steam restart failed: %s", e)
            self.restart_failed.emit(str(e))
            return
        self.restarted.emit()
