"""Tests for Steam actions with subprocess and psutil mocked."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from steamgames.core import steam_launcher
from steamgames.core.errors import SteamActionError, SteamNotFoundError
from steamgames.core.steam_paths import SteamInstallation

INSTALLATION = SteamInstallation.from_root(Path("C:/Steam"))


@pytest.fixture
def mock_run():
    with patch("steamgames.core.steam_launcher.subprocess.run") as run:
        yield run


@pytest.fixture
def mock_popen():
    with patch("steamgames.core.steam_launcher.subprocess.Popen") as popen:
        yield popen


def _shell_args(target: str) -> list[str]:
    return ["cmd", "/c", "start", "", target]


class TestLaunchGame:
    """Tests for launch_game."""

    def test_protocol_launch(self, mock_run, mock_popen) -> None:
        steam_launcher.launch_game("620", INSTALLATION)

        assert mock_run.call_args[0][0] == _shell_args("steam://rungameid/620")
        mock_popen.assert_not_called()

    def test_falls_back_to_applaunch(self, mock_run, mock_popen) -> None:
        mock_run.side_effect = subprocess.CalledProcessError(1, ["cmd"])

        steam_launcher.launch_game("620", INSTALLATION)

        assert mock_popen.call_args[0][0] == [str(INSTALLATION.steam_exe), "-applaunch", "620"]

    def test_fallback_without_steam(self, mock_run, mock_popen) -> None:
        mock_run.side_effect = OSError("no shell")

        with patch("steamgames.core.steam_launcher.locate_steam_installation", return_value=None):
            with pytest.raises(SteamNotFoundError):
                steam_launcher.launch_game("620")

        mock_popen.assert_not_called()

    def test_both_methods_fail(self, mock_run, mock_popen) -> None:
        mock_run.side_effect = subprocess.TimeoutExpired(["cmd"], 15)
        mock_popen.side_effect = FileNotFoundError("steam.exe")

        with pytest.raises(SteamActionError):
            steam_launcher.launch_game("620", INSTALLATION)


class TestShellActions:
    """Tests for actions that go through ``cmd /c start``."""

    def test_big_picture(self, mock_run) -> None:
        steam_launcher.launch_big_picture()
        assert mock_run.call_args[0][0] == _shell_args("steam://open/bigpicture")

    def test_store_page(self, mock_run) -> None:
        steam_launcher.open_store_page("620")
        assert mock_run.call_args[0][0] == _shell_args("https://store.steampowered.com/app/620")

    def test_shell_failure_raises(self, mock_run) -> None:
        mock_run.side_effect = subprocess.CalledProcessError(1, ["cmd"])
        with pytest.raises(SteamActionError):
            steam_launcher.launch_big_picture()

    def test_open_folder(self, mock_run, tmp_path) -> None:
        steam_launcher.open_folder(tmp_path)
        assert mock_run.call_args[0][0] == _shell_args(str(tmp_path))

    def test_open_missing_folder(self, mock_run, tmp_path) -> None:
        with pytest.raises(SteamActionError, match="Folder not found"):
            steam_launcher.open_folder(tmp_path / "missing")
        mock_run.assert_not_called()

    def test_open_config_folder(self, mock_run, installation) -> None:
        steam_launcher.open_config_folder(installation)
        assert mock_run.call_args[0][0] == _shell_args(str(installation.config_path))


class TestOpenAndRestartSteam:
    """Tests for open_steam and restart_steam."""

    def test_open_steam_uses_explorer(self, mock_popen) -> None:
        steam_launcher.open_steam(INSTALLATION)
        assert mock_popen.call_args[0][0] == ["explorer.exe", str(INSTALLATION.steam_exe)]

    def test_open_steam_not_found(self, mock_popen) -> None:
        with patch("steamgames.core.steam_launcher.locate_steam_installation", return_value=None):
            with pytest.raises(SteamNotFoundError):
                steam_launcher.open_steam()
        mock_popen.assert_not_called()

    @patch("steamgames.core.steam_launcher.time.sleep")
    @patch("steamgames.core.steam_launcher.kill_steam_process", return_value=True)
    def test_restart_kills_waits_and_starts(self, mock_kill, mock_sleep, mock_popen) -> None:
        order = MagicMock()
        order.attach_mock(mock_kill, "kill")
        order.attach_mock(mock_sleep, "sleep")
        order.attach_mock(mock_popen, "popen")

        steam_launcher.restart_steam(INSTALLATION, delay=0.5)

        assert [c[0] for c in order.mock_calls] == ["kill", "sleep", "popen"]
        mock_sleep.assert_called_once_with(0.5)

    @patch("steamgames.core.steam_launcher.time.sleep")
    @patch("steamgames.core.steam_launcher.kill_steam_process", return_value=False)
    def test_restart_when_not_running(self, _mock_kill, mock_sleep, mock_popen) -> None:
        """No delay when nothing was killed; Steam is still started."""
        steam_launcher.restart_steam(INSTALLATION)

        mock_sleep.assert_not_called()
        mock_popen.assert_called_once()

    @patch("steamgames.core.steam_launcher.kill_steam_process")
    def test_restart_without_steam(self, mock_kill) -> None:
        with patch("steamgames.core.steam_launcher.locate_steam_installation", return_value=None):
            with pytest.raises(SteamNotFoundError):
                steam_launcher.restart_steam()
        mock_kill.assert_not_called()

    def test_default_delay(self) -> None:
        assert steam_launcher.RESTART_DELAY == 2.0
