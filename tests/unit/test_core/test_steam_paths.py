"""Tests for Steam installation discovery."""

from __future__ import annotations

from pathlib import Path

from steamgames.core.steam_paths import STEAM_INSTALL_SOURCES, SteamInstallation, locate_steam_installation


def _reader(values: dict[tuple[str, str], str]):
    """Registry reader backed by a dict; records every lookup."""
    calls: list[tuple[str, str]] = []

    def read(key: str, value: str) -> str | None:
        calls.append((key, value))
        return values.get((key, value))

    read.calls = calls  # type: ignore[attr-defined]
    return read


class TestSteamInstallation:
    """Tests for SteamInstallation.from_root."""

    def test_derived_paths(self) -> None:
        installation = SteamInstallation.from_root("C:/Steam")
        assert installation.steam_path == Path("C:/Steam")
        assert installation.steam_exe == Path("C:/Steam") / "steam.exe"
        assert installation.config_path == Path("C:/Steam") / "config"


class TestLocateSteamInstallation:
    """Tests for the registry fallback chain."""

    def test_user_key_first(self) -> None:
        read = _reader(
            {
                STEAM_INSTALL_SOURCES[0]: "c:/steam-user",
                STEAM_INSTALL_SOURCES[1]: "c:/steam-wow",
            }
        )
        installation = locate_steam_installation(read)
        assert installation is not None
        assert installation.steam_path == Path("c:/steam-user")
        assert read.calls == [STEAM_INSTALL_SOURCES[0]]

    def test_falls_back_to_wow6432node(self) -> None:
        read = _reader({STEAM_INSTALL_SOURCES[1]: "c:/steam-wow", STEAM_INSTALL_SOURCES[2]: "c:/steam-native"})
        installation = locate_steam_installation(read)
        assert installation.steam_path == Path("c:/steam-wow")

    def test_falls_back_to_native_key(self) -> None:
        read = _reader({STEAM_INSTALL_SOURCES[2]: "c:/steam-native"})
        installation = locate_steam_installation(read)
        assert installation.steam_path == Path("c:/steam-native")
        assert read.calls == list(STEAM_INSTALL_SOURCES)

    def test_not_found(self) -> None:
        assert locate_steam_installation(_reader({})) is None

    def test_source_order(self) -> None:
        """HKCU comes first, the WOW6432Node redirect before the native key."""
        assert STEAM_INSTALL_SOURCES[0] == (r"HKCU\Software\Valve\Steam", "SteamPath")
        assert "WOW6432Node" in STEAM_INSTALL_SOURCES[1][0]
        assert "WOW6432Node" not in STEAM_INSTALL_SOURCES[2][0]
