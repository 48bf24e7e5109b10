# tests/conftest.py
import os
import tempfile
from pathlib import Path
from typing import Callable

# Ensure Qt can run headless (CI runners have no display server)
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
# Keep the global config away from the real user profile
os.environ.setdefault("STEAMGAMES_DATA_DIR", tempfile.mkdtemp(prefix="steamgames-tests-"))

import pytest
from PyQt6.QtWidgets import QApplication
from pytestqt.qtbot import QtBot

from steamgames.core.steam_paths import SteamInstallation


@pytest.fixture(scope="session")
def qapp():
    """QApplication instance for all Qt tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def qtbot(qapp, request):
    """Provide qtbot fixture with automatic cleanup."""
    bot = QtBot(request)
    yield bot
    if hasattr(bot, "cleanup"):
        bot.cleanup()


@pytest.fixture
def steam_root(tmp_path) -> Path:
    """Empty Steam installation: <root>/steamapps and <root>/config."""
    root = tmp_path / "Steam"
    (root / "steamapps").mkdir(parents=True)
    (root / "config").mkdir()
    return root


@pytest.fixture
def installation(steam_root) -> SteamInstallation:
    """SteamInstallation for the fake Steam root."""
    return SteamInstallation.from_root(steam_root)


@pytest.fixture
def make_manifest() -> Callable[..., Path]:
    """Writes appmanifest_<appid>.acf files into a library root."""

    def _write(
        library_root: Path,
        appid: str,
        name: str,
        installdir: str | None = None,
        state_flags: str | None = "4",
        last_owner: str | None = None,
    ) -> Path:
        lines = ['"AppState"', "{", f'\t"appid"\t\t"{appid}"', f'\t"name"\t\t"{name}"']
        lines.append(f'\t"installdir"\t\t"{installdir or name}"')
        if state_flags is not None:
            lines.append(f'\t"StateFlags"\t\t"{state_flags}"')
        if last_owner is not None:
            lines.append(f'\t"LastOwner"\t\t"{last_owner}"')
        lines.append("}")

        steamapps = library_root / "steamapps"
        steamapps.mkdir(parents=True, exist_ok=True)
        path = steamapps / f"appmanifest_{appid}.acf"
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_library_folders() -> Callable[[Path, list[Path]], Path]:
    """Writes a current-format libraryfolders.vdf listing extra libraries."""

    def _write(steam_root: Path, libraries: list[Path]) -> Path:
        entries = [f'\t"0"\n\t{{\n\t\t"path"\t\t"{_escape(steam_root)}"\n\t}}']
        for index, library in enumerate(libraries, start=1):
            entries.append(f'\t"{index}"\n\t{{\n\t\t"path"\t\t"{_escape(library)}"\n\t}}')
        content = '"libraryfolders"\n{\n' + "\n".join(entries) + "\n}\n"
        path = steam_root / "steamapps" / "libraryfolders.vdf"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_login_users() -> Callable[[Path, list[dict]], Path]:
    """Writes config/loginusers.vdf from a list of user dicts.

    Each dict needs "steam_id" and may carry "PersonaName", "AccountName"
    and "MostRecent".
    """

    def _write(steam_root: Path, users: list[dict]) -> Path:
        blocks = []
        for user in users:
            fields = "".join(f'\t\t"{key}"\t\t"{value}"\n' for key, value in user.items() if key != "steam_id")
            blocks.append(f'\t"{user["steam_id"]}"\n\t{{\n{fields}\t}}\n')
        path = steam_root / "config" / "loginusers.vdf"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text('"users"\n{\n' + "".join(blocks) + "}\n", encoding="utf-8")
        return path

    return _write


def _escape(path: Path) -> str:
    return str(path).replace("\\", "\\\\")
