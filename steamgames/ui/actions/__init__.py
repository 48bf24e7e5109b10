# steamgames/ui/actions/__init__.py

"""UI Action Handler classes for Steam Games.

Each handler is responsible for one group of list actions.
They hold no persistent state beyond a back-reference to MainWindow.
"""

from steamgames.ui.actions.game_actions import GameActions
from steamgames.ui.actions.steam_actions import SteamActions

__all__ = [
    "GameActions",
    "SteamActions",
]
