"""
Worker thread for loading games in the background.

Discovery reads every manifest on every library, which can take a moment on
slow drives, so it runs outside the UI thread.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PyQt6.QtCore import QThread, pyqtSignal

if TYPE_CHECKING:
    from steamgames.services.game_list_service import GameListService

logger = logging.getLogger("steamgames.game_load_worker")


class GameLoadWorker(QThread):
    """Background thread running GameListService.load.

    Attributes:
        service: The GameListService to load from.
        favorites: App IDs to flag as favorites.

    Signals:
        games_loaded: Emitted with the LoadResult on success.
        load_failed: Emitted with an error message if loading raised.
    """

    games_loaded = pyqtSignal(object)
    load_failed = pyqtSignal(str)

    def __init__(self, service: GameListService, favorites: list[str]):
        """Initializes the game load worker.

        Args:
            service: The GameListService instance to use for loading.
            favorites: App IDs to flag as favorites.
        """
        super().__init__()
        self.service = service
        self.favorites = list(favorites)

    def run(self) -> None:
        """Loads the game list and emits the result."""
        try:
            result = self.service.load(self.favorites)
        except Exception as e:
            logger.exception("Failed to list Steam games")
            self.load_failed.emit(str(e) or "Failed to list Steam games")
            return
        self.games_loaded.emit(result)
