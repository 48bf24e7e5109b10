# tests/unit/test_services/test_game_list_service.py

"""Tests for the game list model: loading, grouping, filtering, Steam actions."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from steamgames.core import login_users
from steamgames.core.local_games_loader import InstalledGame
from steamgames.services.game_list_service import (
    GameItem,
    GameListService,
    build_steam_actions,
    filter_actions,
    filter_items,
    group_items,
)

ALICE = "76561198000000001"
BOB = "76561198000000002"


def _item(appid: str, name: str, library: str = "C:/Steam", favorite: bool = False, drive: str | None = "C:") -> GameItem:
    game = InstalledGame(appid=appid, name=name, installdir=name, library_path=Path(library))
    keywords = tuple(v.lower() for v in (name, appid, drive or "") if v)
    return GameItem(game=game, drive=drive, is_favorite=favorite, keywords=keywords)


@pytest.fixture
def items() -> list[GameItem]:
    return [
        _item("70", "Half-Life", "D:/Games", drive="D:"),
        _item("620", "Portal 2", favorite=True),
        _item("400", "portal"),
        _item("1091500", "Cyberpunk 2077", "/mnt/games", drive=None),
        _item("1", "7 Days to Die", "D:/Games", drive="D:"),
    ]


class TestGameListServiceLoad:
    """Tests for GameListService.load against a fake Steam tree."""

    def test_lists_installed_games_sorted(self, installation, steam_root, make_manifest) -> None:
        make_manifest(steam_root, "620", "Portal 2")
        make_manifest(steam_root, "70", "half-life")
        make_manifest(steam_root, "400", "Uninstalled", state_flags="0")

        result = GameListService(installation).load()

        assert [item.title for item in result.items] == ["half-life", "Portal 2"]
        assert result.library_roots == [steam_root]

    def test_owner_names_and_current_user(self, installation, steam_root, make_manifest, write_login_users) -> None:
        write_login_users(
            steam_root,
            [
                {"steam_id": ALICE, "AccountName": "alice", "PersonaName": "Alice"},
                {"steam_id": BOB, "AccountName": "bob", "PersonaName": "", "MostRecent": "1"},
            ],
        )
        make_manifest(steam_root, "620", "Portal 2", last_owner=ALICE)
        make_manifest(steam_root, "70", "Half-Life", last_owner="76561198999999999")
        make_manifest(steam_root, "400", "Portal")

        result = GameListService(installation).load()
        owners = {item.appid: item.last_owner_name for item in result.items}

        assert owners == {"620": "Alice", "70": "76561198999999999", "400": None}
        assert result.current_user == BOB
        assert result.current_user_name == "bob"

    def test_login_users_parsed_once(self, installation, steam_root, make_manifest, write_login_users) -> None:
        write_login_users(steam_root, [{"steam_id": ALICE, "PersonaName": "Alice"}])
        make_manifest(steam_root, "620", "Portal 2", last_owner=ALICE)
        make_manifest(steam_root, "70", "Half-Life", last_owner=ALICE)

        with patch(
            "steamgames.services.game_list_service.load_login_users",
            wraps=login_users.load_login_users,
        ) as spy:
            GameListService(installation).load()

        assert spy.call_count == 1

    def test_without_login_users(self, installation, steam_root, make_manifest) -> None:
        make_manifest(steam_root, "620", "Portal 2", last_owner=ALICE)

        result = GameListService(installation).load()

        assert result.current_user is None
        assert result.current_user_name is None
        assert result.items[0].last_owner_name == ALICE

    def test_favorites_and_keywords(self, installation, steam_root, make_manifest) -> None:
        make_manifest(steam_root, "620", "Portal 2")
        make_manifest(steam_root, "70", "Half-Life")

        result = GameListService(installation).load(favorites=["620"])
        by_id = {item.appid: item for item in result.items}

        assert by_id["620"].is_favorite is True
        assert by_id["70"].is_favorite is False
        assert "portal 2" in by_id["620"].keywords
        assert "620" in by_id["620"].keywords

    @patch("steamgames.services.game_list_service.is_steam_running", return_value=True)
    def test_reports_steam_running(self, _mock_running, installation) -> None:
        assert GameListService(installation).load().steam_running is True

    def test_empty_library(self, installation) -> None:
        result = GameListService(installation).load()
        assert result.items == []
        assert result.library_roots == []

    def test_apply_favorites(self, items) -> None:
        updated = GameListService.apply_favorites(items, ["70"])
        assert [item.is_favorite for item in updated] == [True, False, False, False, False]
        assert items[1].is_favorite is True


class TestGroupItems:
    """Tests for group_items."""

    def test_all(self, items) -> None:
        assert group_items(items, "all") == [("All Games", items)]

    def test_unknown_mode_behaves_like_all(self, items) -> None:
        assert group_items(items, "bogus") == [("All Games", items)]

    def test_empty(self) -> None:
        assert group_items([], "all") == []
        assert group_items([], "drive") == []

    def test_favorites(self, items) -> None:
        sections = group_items(items, "favorites")
        assert [(title, [i.appid for i in section]) for title, section in sections] == [("Favorites", ["620"])]

    def test_no_favorites(self, items) -> None:
        assert group_items(GameListService.apply_favorites(items, []), "favorites") == []

    def test_drive(self, items) -> None:
        sections = group_items(items, "drive")
        assert [title for title, _ in sections] == ["Drive C:", "Drive D:", "Other"]
        assert [i.appid for i in sections[1][1]] == ["70", "1"]

    def test_alphabetical(self, items) -> None:
        sections = group_items(items, "alphabetical")
        assert [title for title, _ in sections] == ["C", "H", "P", "#"]
        assert [i.appid for i in dict(sections)["P"]] == ["620", "400"]


class TestFilterItems:
    """Tests for filter_items."""

    def test_empty_query(self, items) -> None:
        assert filter_items(items, "  ") == items

    def test_substring_case_insensitive(self, items) -> None:
        assert [i.appid for i in filter_items(items, "PORTAL")] == ["620", "400"]

    def test_matches_appid_and_drive(self, items) -> None:
        assert [i.appid for i in filter_items(items, "1091500")] == ["1091500"]
        assert [i.appid for i in filter_items(items, "d:")] == ["70", "1"]

    def test_regex(self, items) -> None:
        assert [i.appid for i in filter_items(items, "/^portal$")] == ["400"]

    def test_invalid_regex_matches_nothing(self, items) -> None:
        assert filter_items(items, "/[unclosed") == []

    def test_lone_slash_is_plain_text(self, items) -> None:
        """A bare "/" is not a regex query."""
        assert filter_items(items, "/") == []


class TestSteamActions:
    """Tests for build_steam_actions and filter_actions."""

    def test_actions_per_library(self) -> None:
        roots = [Path("C:/Steam"), Path("D:/SteamLibrary")]
        actions = build_steam_actions(roots, Path("C:/Steam"))

        assert [a.key for a in actions] == ["open", "restart", "config", "open-common-0", "open-common-1"]
        assert actions[4].path == Path("D:/SteamLibrary") / "steamapps" / "common"
        assert actions[4].kind == "open_folder"

    def test_default_entry_without_libraries(self) -> None:
        actions = build_steam_actions([], Path("C:/Steam"))
        assert actions[-1].key == "open-common-default"
        assert actions[-1].title == "Open Game Files (Default)"
        assert actions[-1].path == Path("C:/Steam") / "steamapps" / "common"

    def test_no_default_without_root(self) -> None:
        assert [a.key for a in build_steam_actions([])] == ["open", "restart", "config"]

    def test_filter_actions(self) -> None:
        actions = build_steam_actions([], Path("C:/Steam"))
        assert [a.key for a in filter_actions(actions, "restart")] == ["restart"]
        assert filter_actions(actions, "") == actions
