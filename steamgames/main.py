#!/usr/bin/env python3
"""Steam Games - Main Entry Point (PyQt6 Version)."""

from __future__ import annotations

import sys
import traceback
from typing import TextIO

from PyQt6.QtWidgets import QApplication

from steamgames.config import Config, config
from steamgames.core.logging import logger, setup_logging
from steamgames.core.steam_paths import SteamInstallation
from steamgames.services.game_list_service import GameListService
from steamgames.ui.main_window import MainWindow
from steamgames.version import __app_name__, __version__

__all__ = ["list_games", "main"]


def list_games(installation: SteamInstallation | None, out: TextIO | None = None) -> int:
    """Prints installed games as tab-separated ``appid  name  library`` lines.

    Args:
        installation: The Steam installation to read, None if not found.
        out: Output stream (default: stdout).

    Returns:
        Exit code (0 = success, 1 = Steam not found).
    """
    out = out or sys.stdout
    if installation is None:
        print("Steam installation not found. Is Steam installed?", file=sys.stderr)
        return 1

    result = GameListService(installation).load()
    for item in result.items:
        print(f"{item.appid}\t{item.title}\t{item.game.library_path}", file=out)
    return 0


def main(app_config: Config | None = None) -> None:
    """Main application execution flow."""
    app_config = app_config or config

    # 1. Setup logging
    setup_logging(app_config.LOG_LEVEL, app_config.LOG_FILE)

    # 2. Console listing (no GUI needed)
    if "--list" in sys.argv:
        sys.exit(list_games(app_config.resolve_installation()))

    # 3. Create QApplication
    app = QApplication(sys.argv)
    app.setApplicationName(__app_name__)
    app.setApplicationVersion(__version__)

    # 4. Startup logs
    logger.info("=" * 60)
    logger.info("%s %s", __app_name__, __version__)
    logger.info("=" * 60)

    try:
        window = MainWindow(app_config)
        window.show()

        sys.exit(app.exec())

    except Exception as e:
        logger.critical("Unexpected error: %s", e)
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
