"""UI worker threads package.

Contains background worker threads for long-running operations.
"""

from __future__ import annotations

from steamgames.ui.workers.game_load_worker import GameLoadWorker
from steamgames.ui.workers.steam_restart_worker import SteamRestartWorker

__all__ = [
    "GameLoadWorker",
    "SteamRestartWorker",
]
