# steamgames/services/game_list_service.py

"""List model for the game picker.

Turns discovered games into display items (owner names resolved, drive and
favorite flags attached), groups them into sections for the selected filter
mode, and builds the Steam action entries shown above the games.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from pathlib import Path

from steamgames.core.local_games_loader import InstalledGame, LocalGamesLoader
from steamgames.core.login_users import load_login_users, resolve_current_user
from steamgames.core.steam_paths import SteamInstallation
from steamgames.core.steam_process import is_steam_running
from steamgames.utils.format_utils import drive_of

logger = logging.getLogger("steamgames.game_list_service")

__all__ = [
    "DEFAULT_FILTER_MODE",
    "FILTER_MODES",
    "GameItem",
    "GameListService",
    "LoadResult",
    "SteamActionItem",
    "build_steam_actions",
    "filter_actions",
    "filter_items",
    "group_items",
]

FILTER_MODES: tuple[str, ...] = ("all", "drive", "alphabetical", "favorites")
DEFAULT_FILTER_MODE = "drive"

OTHER_DRIVE = "Other"
NON_LETTER_SECTION = "#"

_REGEX_PREFIX = "/"


@dataclass(frozen=True)
class GameItem:
    """A game as displayed in the list.

    Attributes:
        game: The discovered game.
        last_owner_name: Display name of the last owner (falls back to the SteamID64).
        drive: Drive prefix of the library ("D:"), None if the path has none.
        is_favorite: Whether the user starred the game.
        keywords: Lower-case strings the search box matches against.
    """

    game: InstalledGame
    last_owner_name: str | None = None
    drive: str | None = None
    is_favorite: bool = False
    keywords: tuple[str, ...] = ()

    @property
    def appid(self) -> str:
        return self.game.appid

    @property
    def title(self) -> str:
        return self.game.name

    @property
    def install_path(self) -> Path:
        return self.game.install_path


@dataclass(frozen=True)
class SteamActionItem:
    """A Steam-level entry of the list (open/restart Steam, open folders).

    Attributes:
        key: Stable identifier of the entry.
        title: Text shown in the list.
        kind: One of "open_steam", "restart_steam", "open_config", "open_folder".
        path: Target folder for "open_folder" entries.
    """

    key: str
    title: str
    kind: str
    path: Path | None = None


@dataclass
class LoadResult:
    """Everything one load of the list produces."""

    items: list[GameItem] = field(default_factory=list)
    current_user: str | None = None
    current_user_name: str | None = None
    library_roots: list[Path] = field(default_factory=list)
    steam_running: bool = False


def _keywords(game: InstalledGame, owner_name: str | None, drive: str | None) -> tuple[str, ...]:
    values = (game.name, game.appid, owner_name or "", drive or "")
    return tuple(value.lower() for value in values if value)


class GameListService:
    """Builds the game list from a Steam installation."""

    def __init__(self, installation: SteamInstallation):
        """Initializes the service.

        Args:
            installation: The Steam installation to read from.
        """
        self.installation = installation

    def load(self, favorites: Iterable[str] = ()) -> LoadResult:
        """Reads manifests and login users and builds the display items.

        Only installed games are listed. loginusers.vdf is parsed once and
        used for both owner names and the current account.

        Args:
            favorites: App IDs the user starred.

        Returns:
            LoadResult with items sorted by title.
        """
        favorite_ids = set(favorites)
        games = LocalGamesLoader(self.installation.steam_path).get_installed_games()

        accounts = load_login_users(self.installation.config_path)
        names = {account.steam_id: account.display_name for account in accounts or []}
        current_user = resolve_current_user(accounts) if accounts is not None else None

        items = []
        for game in games:
            owner_name = names.get(game.last_owner, game.last_owner) if game.last_owner else None
            drive = drive_of(game.library_path)
            items.append(
                GameItem(
                    game=game,
                    last_owner_name=owner_name,
                    drive=drive,
                    is_favorite=game.appid in favorite_ids,
                    keywords=_keywords(game, owner_name, drive),
                )
            )
        items.sort(key=lambda item: item.title.casefold())

        library_roots = sorted({item.game.library_path for item in items}, key=lambda p: str(p).casefold())

        logger.info("Listed %d installed games from %d libraries", len(items), len(library_roots))
        return LoadResult(
            items=items,
            current_user=current_user,
            current_user_name=names.get(current_user, current_user) if current_user else None,
            library_roots=library_roots,
            steam_running=is_steam_running(),
        )

    @staticmethod
    def apply_favorites(items: list[GameItem], favorites: Iterable[str]) -> list[GameItem]:
        """Returns items with is_favorite refreshed, without re-reading disk."""
        favorite_ids = set(favorites)
        return [replace(item, is_favorite=item.appid in favorite_ids) for item in items]


def _alpha_section(title: str) -> str:
    first = title[:1].upper()
    return first if first.isalpha() else NON_LETTER_SECTION


def group_items(items: list[GameItem], mode: str) -> list[tuple[str, list[GameItem]]]:
    """Groups items into list sections.

    Args:
        items: Items, already sorted by title.
        mode: One of FILTER_MODES; unknown modes behave like "all".

    Returns:
        (section title, items) pairs in display order. Empty sections are omitted.
    """
    if mode == "favorites":
        favorites = [item for item in items if item.is_favorite]
        return [("Favorites", favorites)] if favorites else []

    if mode == "drive":
        groups: dict[str, list[GameItem]] = {}
        for item in items:
            groups.setdefault(item.drive or OTHER_DRIVE, []).append(item)
        order = sorted(groups, key=lambda name: (name == OTHER_DRIVE, name))
        return [(f"Drive {name}" if name != OTHER_DRIVE else OTHER_DRIVE, groups[name]) for name in order]

    if mode == "alphabetical":
        groups = {}
        for item in items:
            groups.setdefault(_alpha_section(item.title), []).append(item)
        order = sorted(groups, key=lambda name: (name == NON_LETTER_SECTION, name))
        return [(name, groups[name]) for name in order]

    return [("All Games", list(items))] if items else []


def filter_items(items: list[GameItem], query: str) -> list[GameItem]:
    """Filters items by a search query.

    Plain text matches case-insensitively against the keywords (name, app
    ID, owner name, drive). A query starting with ``/`` is a regular
    expression matched against the title; an invalid pattern matches nothing.

    Args:
        items: Items to filter.
        query: The search string.

    Returns:
        Matching items in their original order.
    """
    query = query.strip()
    if not query:
        return items

    if query.startswith(_REGEX_PREFIX) and len(query) > 1:
        try:
            compiled = re.compile(query[1:], re.IGNORECASE)
        except re.error as exc:
            logger.warning("Invalid regex pattern '%s': %s", query[1:], exc)
            return []
        return [item for item in items if compiled.search(item.title)]

    lower_query = query.lower()
    return [item for item in items if any(lower_query in keyword for keyword in item.keywords)]


def build_steam_actions(library_roots: list[Path], default_root: Path | None = None) -> list[SteamActionItem]:
    """Builds the Steam action entries.

    One "Open Game Files" entry is added per library; when no library is
    known, a single entry for the default Steam root is added instead.

    Args:
        library_roots: Library roots that contain listed games.
        default_root: Steam root used when library_roots is empty.

    Returns:
        Action entries in display order.
    """
    actions = [
        SteamActionItem(key="open", title="Open Steam", kind="open_steam"),
        SteamActionItem(key="restart", title="Restart Steam", kind="restart_steam"),
        SteamActionItem(key="config", title="Open Steam Config Folder", kind="open_config"),
    ]
    for index, root in enumerate(library_roots):
        actions.append(
            SteamActionItem(
                key=f"open-common-{index}",
                title=f"Open Game Files ({root})",
                kind="open_folder",
                path=root / "steamapps" / "common",
            )
        )
    if not library_roots and default_root is not None:
        actions.append(
            SteamActionItem(
                key="open-common-default",
                title="Open Game Files (Default)",
                kind="open_folder",
                path=default_root / "steamapps" / "common",
            )
        )
    return actions


def filter_actions(actions: list[SteamActionItem], query: str) -> list[SteamActionItem]:
    """Keeps actions whose title contains the query (case-insensitive)."""
    query = query.strip().lower()
    if not query:
        return actions
    return [action for action in actions if query in action.title.lower()]
