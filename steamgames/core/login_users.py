"""
Steam login user resolution.

This module reads ``config/loginusers.vdf`` to turn SteamID64 values into
display names and to work out which account was used most recently. Every
lookup degrades to a fallback instead of raising.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from steamgames.core.registry import STEAM_USER_KEY, read_registry_string
from steamgames.core.steam_account import AccountRecord
from steamgames.core.steam_paths import SteamInstallation, locate_steam_installation
from steamgames.core.vdf_parser import load_file, unwrap

logger = logging.getLogger("steamgames.login_users")

__all__ = [
    "LOGIN_USERS_FILE",
    "get_current_user",
    "get_user_display_name",
    "load_login_users",
    "resolve_current_user",
]

LOGIN_USERS_FILE = "loginusers.vdf"

RegistryReader = Callable[[str, str], "str | None"]


def load_login_users(config_path: Path) -> list[AccountRecord] | None:
    """Parses loginusers.vdf from a Steam config directory.

    Args:
        config_path: The ``<steam>/config`` directory.

    Returns:
        Accounts in file order, or None if the file is missing or unparsable.
    """
    data = load_file(Path(config_path) / LOGIN_USERS_FILE)
    if data is None:
        return None

    users = unwrap(data, "users")
    return [AccountRecord.from_vdf(steam_id, entry) for steam_id, entry in users.items() if isinstance(entry, dict)]


def get_user_display_name(steam_id: str, installation: SteamInstallation | None = None) -> str:
    """Resolves a SteamID64 to a human-readable name.

    Prefers the persona name, then the account name. Falls back to the ID
    itself when Steam, the file, or the entry cannot be found.

    Args:
        steam_id: The SteamID64 to resolve.
        installation: Steam paths; located through the registry when omitted.

    Returns:
        The display name, or steam_id unchanged.
    """
    installation = installation or locate_steam_installation()
    if installation is None:
        return steam_id

    accounts = load_login_users(installation.config_path)
    if not accounts:
        return steam_id

    match = next((account for account in accounts if account.steam_id == steam_id), None)
    return match.display_name if match else steam_id


def resolve_current_user(accounts: list[AccountRecord], read_registry: RegistryReader = read_registry_string) -> str | None:
    """Picks the current account out of parsed login users.

    Order: the first entry flagged MostRecent, then the AutoLoginUser registry
    value if it names a known entry, then the first entry.

    Args:
        accounts: Parsed loginusers.vdf entries.
        read_registry: Reader used for the AutoLoginUser lookup.

    Returns:
        The SteamID64 of the current account, or None if there are no entries.
    """
    most_recent = next((account.steam_id for account in accounts if account.most_recent), None)
    if most_recent:
        return most_recent

    known_ids = [account.steam_id for account in accounts]
    auto_login = read_registry(STEAM_USER_KEY, "AutoLoginUser")
    if auto_login and auto_login in known_ids:
        return auto_login

    return known_ids[0] if known_ids else None


def get_current_user(
    installation: SteamInstallation | None = None,
    read_registry: RegistryReader = read_registry_string,
) -> str | None:
    """Determines the SteamID64 of the current (most recent) account.

    Args:
        installation: Steam paths; located through the registry when omitted.
        read_registry: Reader used for registry lookups.

    Returns:
        The SteamID64, or None if it cannot be determined.
    """
    installation = installation or locate_steam_installation(read_registry)
    if installation is None:
        return None

    accounts = load_login_users(installation.config_path)
    if accounts is None:
        logger.info("No loginusers.vdf in %s", installation.config_path)
        return None

    return resolve_current_user(accounts, read_registry)
