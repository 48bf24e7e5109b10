# steamgames/core/steam_launcher.py

"""Steam actions: launching games, opening Steam and folders.

All commands are handed to the Windows shell and not waited on beyond the
shell's own exit. Failures raise SteamActionError so that the caller can
report them to the user.
"""

from __future__ import annotations

import logging
import subprocess
import time
from pathlib import Path

from steamgames.core.errors import SteamActionError, SteamNotFoundError
from steamgames.core.steam_paths import SteamInstallation, locate_steam_installation
from steamgames.core.steam_process import kill_steam_process

logger = logging.getLogger("steamgames.launcher")

__all__ = [
    "RESTART_DELAY",
    "launch_big_picture",
    "launch_game",
    "open_config_folder",
    "open_folder",
    "open_steam",
    "open_store_page",
    "restart_steam",
]

RESTART_DELAY = 2.0

RUN_GAME_URI = "steam://rungameid/{appid}"
BIG_PICTURE_URI = "steam://open/bigpicture"
STORE_PAGE_URL = "https://store.steampowered.com/app/{appid}"

_SHELL_TIMEOUT = 15


def _shell_start(target: str) -> None:
    """Opens a URI or path through ``cmd /c start``.

    ``start`` returns a reliable exit code, unlike ``explorer.exe`` which
    reports failure even when the window opened.

    Raises:
        SteamActionError: If the shell could not be run or reported failure.
    """
    try:
        subprocess.run(
            ["cmd", "/c", "start", "", target],
            capture_output=True,
            timeout=_SHELL_TIMEOUT,
            check=True,
        )
    except (OSError, subprocess.SubprocessError) as e:
        raise SteamActionError(f"Could not open {target}: {e}") from e


def _spawn(args: list[str]) -> None:
    """Starts a process without waiting for it.

    Raises:
        SteamActionError: If the process could not be spawned.
    """
    try:
        subprocess.Popen(args, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except OSError as e:
        raise SteamActionError(f"Could not run {args[0]}: {e}") from e


def _require_installation(installation: SteamInstallation | None) -> SteamInstallation:
    installation = installation or locate_steam_installation()
    if installation is None:
        raise SteamNotFoundError()
    return installation


def launch_game(appid: str, installation: SteamInstallation | None = None) -> None:
    """Launches a game through the steam:// protocol.

    Falls back to ``steam.exe -applaunch <appid>`` when the protocol handler
    fails (e.g. blocked by policy).

    Args:
        appid: The Steam application ID.
        installation: Steam paths for the fallback; located when omitted.

    Raises:
        SteamNotFoundError: If the protocol failed and Steam cannot be located.
        SteamActionError: If both launch methods failed.
    """
    try:
        _shell_start(RUN_GAME_URI.format(appid=appid))
        logger.info("Launched app %s via steam:// protocol", appid)
        return
    except SteamActionError as e:
        logger.warning("Protocol launch of %s failed, trying steam.exe: %s", appid, e)

    installation = _require_installation(installation)
    _spawn([str(installation.steam_exe), "-applaunch", str(appid)])
    logger.info("Launched app %s via %s", appid, installation.steam_exe)


def launch_big_picture() -> None:
    """Opens Steam in Big Picture mode."""
    _shell_start(BIG_PICTURE_URI)


def open_steam(installation: SteamInstallation | None = None) -> None:
    """Starts the Steam client.

    Goes through explorer.exe so Steam runs with the user's shell context
    instead of inheriting this process's environment.
    """
    installation = _require_installation(installation)
    _spawn(["explorer.exe", str(installation.steam_exe)])
    logger.info("Started Steam from %s", installation.steam_exe)


def restart_steam(installation: SteamInstallation | None = None, delay: float = RESTART_DELAY) -> None:
    """Kills Steam, waits a fixed delay and starts it again.

    The delay is a plain pause; it does not confirm that Steam has exited.

    Args:
        installation: Steam paths; located when omitted.
        delay: Seconds to wait after killing Steam.

    Raises:
        SteamNotFoundError: If Steam cannot be located.
        SteamActionError: If Steam could not be started again.
    """
    installation = _require_installation(installation)
    if kill_steam_process():
        time.sleep(delay)
    open_steam(installation)


def open_folder(path: str | Path) -> None:
    """Opens a folder in Explorer.

    Raises:
        SteamActionError: If the folder does not exist or could not be opened.
    """
    folder = Path(path)
    if not folder.is_dir():
        raise SteamActionError(f"Folder not found: {folder}")
    _shell_start(str(folder))


def open_config_folder(installation: SteamInstallation | None = None) -> None:
    """Opens Steam's config directory."""
    installation = _require_installation(installation)
    open_folder(installation.config_path)


def open_store_page(appid: str) -> None:
    """Opens the Steam Store page of an app in the default browser."""
    _shell_start(STORE_PAGE_URL.format(appid=appid))
