# steamgames/core/local_games_loader.py

"""
Scans local Steam library folders to find installed games.

This module reads ``libraryfolders.vdf`` to discover every configured library
and parses the ``appmanifest_*.acf`` files inside each library's ``steamapps``
directory. Results are rebuilt from disk on every call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from steamgames.core.vdf_parser import get_str, load_file, unwrap

logger = logging.getLogger("steamgames.local_loader")

__all__ = ["InstalledGame", "LibraryFolder", "LocalGamesLoader"]

MANIFEST_PREFIX = "appmanifest_"
MANIFEST_SUFFIX = ".acf"

# Reserved key in legacy libraryfolders.vdf files
_LIBRARY_TIME_KEY = "time"


@dataclass(frozen=True)
class LibraryFolder:
    """A Steam library root and its steamapps directory."""

    path: Path
    steamapps: Path

    @classmethod
    def from_root(cls, root: str | Path) -> LibraryFolder:
        root_path = Path(root)
        return cls(path=root_path, steamapps=root_path / "steamapps")


@dataclass(frozen=True)
class InstalledGame:
    """A game described by an appmanifest file.

    Attributes:
        appid: Steam application ID (string form).
        name: Display name.
        installdir: Folder name under ``<library>/steamapps/common``.
        library_path: Root of the owning library.
        installed: False only when StateFlags is exactly "0".
        last_owner: SteamID64 of the account that last owned the install, if recorded.
    """

    appid: str
    name: str
    installdir: str
    library_path: Path
    installed: bool = True
    last_owner: str | None = None

    @property
    def install_path(self) -> Path:
        return self.library_path / "steamapps" / "common" / self.installdir


class LocalGamesLoader:
    """
    Loads installed games from local Steam files.

    Scans every library folder listed in libraryfolders.vdf and parses the
    appmanifest files found there.
    """

    def __init__(self, steam_path: Path):
        """
        Initializes the LocalGamesLoader.

        Args:
            steam_path (Path): Path to the Steam installation directory.
        """
        self.steam_path = Path(steam_path)
        self.steamapps_path = self.steam_path / "steamapps"
        self.libraryfolders_vdf = self.steamapps_path / "libraryfolders.vdf"

    def get_library_folders(self) -> list[LibraryFolder]:
        """
        Finds all Steam library folders.

        The Steam root is always the first (primary) library. Both the legacy
        layout ("1" "D:\\\\Games") and the current layout ("1" { "path" ... })
        are understood. Duplicate roots are dropped case-insensitively and only
        libraries whose steamapps directory exists are returned.

        Returns:
            list[LibraryFolder]: Libraries in discovery order.
        """
        candidates = [LibraryFolder.from_root(self.steam_path)]

        data = load_file(self.libraryfolders_vdf)
        if data is None:
            logger.info("No usable libraryfolders.vdf, using primary library only")
        else:
            candidates.extend(self._parse_library_entries(unwrap(data, "libraryfolders")))

        seen: set[str] = set()
        libraries: list[LibraryFolder] = []
        for library in candidates:
            key = str(library.path).lower()
            if key in seen:
                continue
            seen.add(key)
            try:
                has_steamapps = library.steamapps.is_dir()
            except OSError as e:
                logger.warning("Skipping unreadable library %s: %s", library.path, e)
                continue
            if not has_steamapps:
                logger.info("Skipping library without steamapps: %s", library.path)
                continue
            libraries.append(library)

        logger.info("Found %d Steam libraries", len(libraries))
        return libraries

    @staticmethod
    def _parse_library_entries(root: dict) -> list[LibraryFolder]:
        entries = []
        for key, entry in root.items():
            if key == _LIBRARY_TIME_KEY:
                continue
            if isinstance(entry, str):
                path_str = entry
            else:
                path_str = get_str(entry, "path")
            if path_str:
                entries.append(LibraryFolder.from_root(path_str))
        return entries

    def get_games_from_library(self, library: LibraryFolder) -> list[InstalledGame]:
        """
        Reads all appmanifest_*.acf files of one library.

        Malformed or incomplete manifests are skipped so that one bad file
        never hides the rest of the library.

        Args:
            library (LibraryFolder): The library to scan.

        Returns:
            list[InstalledGame]: Games ordered by manifest file name.
        """
        try:
            names = sorted(entry.name for entry in library.steamapps.iterdir())
        except OSError as e:
            logger.warning("Cannot list %s: %s", library.steamapps, e)
            return []

        games = []
        for name in names:
            if not (name.startswith(MANIFEST_PREFIX) and name.endswith(MANIFEST_SUFFIX)):
                continue
            game = self._parse_manifest(library.steamapps / name, library.path)
            if game:
                games.append(game)

        if games:
            logger.info("Found %d manifests in %s", len(games), library.path)
        return games

    def get_all_games(self) -> list[InstalledGame]:
        """
        Aggregates the games of every library.

        When the same appid appears in several libraries, the first library
        in discovery order wins.

        Returns:
            list[InstalledGame]: Unique games across all libraries.
        """
        all_games: dict[str, InstalledGame] = {}
        for library in self.get_library_folders():
            for game in self.get_games_from_library(library):
                all_games.setdefault(game.appid, game)

        logger.info("Loaded %d games from local manifests", len(all_games))
        return list(all_games.values())

    def get_installed_games(self) -> list[InstalledGame]:
        """Returns only games whose manifest marks them as installed."""
        return [game for game in self.get_all_games() if game.installed]

    @staticmethod
    def _parse_manifest(manifest_path: Path, library_path: Path) -> InstalledGame | None:
        """
        Parses a single appmanifest_*.acf file.

        Args:
            manifest_path (Path): Path to the appmanifest file.
            library_path (Path): Root of the library the manifest belongs to.

        Returns:
            InstalledGame | None: The game, or None if the manifest is unusable.
        """
        data = load_file(manifest_path)
        if data is None:
            return None

        app_state = unwrap(data, "AppState")
        appid = get_str(app_state, "appid").strip()
        name = get_str(app_state, "name").strip()
        if not appid or not name:
            logger.debug("Manifest %s lacks appid or name", manifest_path.name)
            return None

        # StateFlags absent means installed; present means installed unless "0"
        state_flags = get_str(app_state, "StateFlags").strip()
        installed = state_flags != "0" if state_flags else True

        return InstalledGame(
            appid=appid,
            name=name,
            installdir=get_str(app_state, "installdir").strip(),
            library_path=library_path,
            installed=installed,
            last_owner=get_str(app_state, "LastOwner").strip() or None,
        )
