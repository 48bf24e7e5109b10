"""
Steam process detection and termination.

Uses psutil to find and kill the Steam client by image name.
"""

from __future__ import annotations

import logging

import psutil

logger = logging.getLogger("steamgames.steam_process")

__all__ = ["STEAM_PROCESS_NAMES", "is_steam_running", "kill_steam_process"]

STEAM_PROCESS_NAMES = ("steam.exe", "steam")
_STEAM_HELPER_NAMES = ("steamwebhelper.exe", "steamwebhelper")


def is_steam_running() -> bool:
    """Check if Steam is currently running.

    Looks for the Steam client or its web helper process.

    Returns:
        True if Steam is running, False otherwise
    """
    names = STEAM_PROCESS_NAMES + _STEAM_HELPER_NAMES
    try:
        for proc in psutil.process_iter(["name"]):
            try:
                proc_name = (proc.info["name"] or "").lower()
                if proc_name in names:
                    return True
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                continue
        return False

    except psutil.Error as e:
        logger.error("Could not check for a running Steam process: %s", e)
        return False


def kill_steam_process() -> bool:
    """Forcefully terminate the Steam client.

    Steam is closed without saving state. The caller is responsible for
    waiting before relaunching.

    Returns:
        True if at least one Steam process was killed, False otherwise
    """
    killed = False
    try:
        for proc in psutil.process_iter(["name", "pid"]):
            try:
                proc_name = (proc.info["name"] or "").lower()
                if proc_name in STEAM_PROCESS_NAMES:
                    logger.info("Killing Steam process (PID %s)", proc.info["pid"])
                    proc.kill()
                    killed = True
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                continue

    except psutil.Error as e:
        logger.error("Could not terminate Steam: %s", e)
        return killed

    if not killed:
        logger.info("No Steam process to terminate")
    return killed
