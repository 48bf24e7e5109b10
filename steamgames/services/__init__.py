from __future__ import annotations

from steamgames.services.game_list_service import GameListService

__all__: list[str] = [
    "GameListService",
]
