"""Exception types raised by Steam actions."""

from __future__ import annotations

__all__ = ["SteamGamesError", "SteamActionError", "SteamNotFoundError"]


class SteamGamesError(Exception):
    """Base class for all application errors."""


class SteamActionError(SteamGamesError):
    """A Steam action (launch, open, restart) could not be carried out."""


class SteamNotFoundError(SteamActionError):
    """The Steam installation could not be located."""

    def __init__(self, message: str = "Steam installation not found") -> None:
        super().__init__(message)
