"""
Steam Account data structure.

This module defines the AccountRecord dataclass which represents one entry
of Steam's loginusers.vdf.
"""
from __future__ import annotations

from dataclasses import dataclass

from steamgames.core.vdf_parser import VdfObject, get_str


@dataclass(frozen=True)
class AccountRecord:
    """Represents a Steam account that has logged in on this machine.

    Attributes:
        steam_id: The SteamID64 the entry is keyed by
        persona_name: The user's profile display name (may be empty)
        account_name: The login name (may be empty)
        most_recent: Whether Steam flagged this account as the last one used
    """
    steam_id: str
    persona_name: str = ""
    account_name: str = ""
    most_recent: bool = False

    def __str__(self) -> str:
        """String representation showing SteamID64 and display name."""
        return f"{self.steam_id} ({self.display_name})"

    @property
    def display_name(self) -> str:
        """Persona name, then account name, then the SteamID64 itself."""
        return self.persona_name or self.account_name or self.steam_id

    @classmethod
    def from_vdf(cls, steam_id: str, entry: VdfObject) -> AccountRecord:
        """Builds a record from one parsed loginusers.vdf entry."""
        return cls(
            steam_id=steam_id,
            persona_name=get_str(entry, "PersonaName").strip(),
            account_name=get_str(entry, "AccountName").strip(),
            most_recent=get_str(entry, "MostRecent").strip() == "1",
        )
