"""
Main application window for Steam Games.

Shows the installed games as a searchable, sectioned list with a "Steam"
section of client actions underneath, and a details pane for the selected
game. Loading runs on a worker thread; actions are delegated to the
GameActions and SteamActions handlers.
"""

from __future__ import annotations

import html
import logging
from pathlib import Path

from PyQt6.QtCore import QPoint, Qt
from PyQt6.QtGui import QCloseEvent, QKeyEvent
from PyQt6.QtWidgets import (
    QApplication,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMenu,
    QPushButton,
    QSplitter,
    QTreeWidget,
    QTreeWidgetItem,
    QVBoxLayout,
    QWidget,
)

from steamgames.config import Config, config
from steamgames.core.steam_paths import SteamInstallation
from steamgames.services.game_list_service import (
    DEFAULT_FILTER_MODE,
    GameItem,
    GameListService,
    LoadResult,
    SteamActionItem,
    build_steam_actions,
    filter_actions,
    filter_items,
    group_items,
)
from steamgames.ui.actions import GameActions, SteamActions
from steamgames.ui.handlers import KeyboardHandler
from steamgames.ui.workers import GameLoadWorker
from steamgames.utils.format_utils import format_bytes, get_directory_size
from steamgames.version import __app_name__

logger = logging.getLogger("steamgames.main_window")

__all__ = ["MainWindow"]

FILTER_LABELS: dict[str, str] = {
    "drive": "By Drive",
    "all": "All Games",
    "alphabetical": "Alphabetical",
    "favorites": "Favorites",
}

STEAM_NOT_FOUND = "Steam installation not found. Is Steam installed?"

ENTRY_ROLE = Qt.ItemDataRole.UserRole
GAME_ENTRY = "game"
ACTION_ENTRY = "action"


class MainWindow(QMainWindow):
    """Primary application window.

    Attributes:
        config: Settings (favorites, filter mode, Steam path override).
        installation: The Steam installation of the last load, if found.
        items: All listed games of the last load.
        library_roots: Library roots that contain listed games.
        selected_item: The game under the cursor, if any.
        selected_action: The Steam action under the cursor, if any.
        load_worker: The running or last GameLoadWorker.
    """

    def __init__(self, app_config: Config | None = None, auto_load: bool = True):
        """Initializes the window.

        Args:
            app_config: Settings to use; the global config when omitted.
            auto_load: Start loading games immediately.
        """
        super().__init__()
        self.config: Config = app_config or config
        self.installation: SteamInstallation | None = None
        self.items: list[GameItem] = []
        self.library_roots: list[Path] = []
        self.current_user_name: str | None = None
        self.selected_item: GameItem | None = None
        self.selected_action: SteamActionItem | None = None
        self.load_worker: GameLoadWorker | None = None

        self._items_by_appid: dict[str, GameItem] = {}
        self._actions_by_key: dict[str, SteamActionItem] = {}
        self._sizes: dict[str, int] = {}

        self.game_actions = GameActions(self)
        self.steam_actions = SteamActions(self)

        self._build_ui()

        self.keyboard_handler = KeyboardHandler(self)
        self.keyboard_handler.register_shortcuts()

        if auto_load:
            self.refresh_data()

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        self.setWindowTitle(__app_name__)
        self.resize(1000, 640)

        central = QWidget()
        layout = QVBoxLayout(central)

        top_row = QHBoxLayout()
        self.search_entry = QLineEdit()
        self.search_entry.setPlaceholderText("Search games and Steam actions...")
        self.search_entry.setClearButtonEnabled(True)
        self.search_entry.textChanged.connect(lambda _text: self.populate())
        self.search_entry.returnPressed.connect(self.activate_current)
        top_row.addWidget(self.search_entry, 1)

        self.filter_combo = QComboBox()
        for mode, label in FILTER_LABELS.items():
            self.filter_combo.addItem(label, mode)
        index = self.filter_combo.findData(self.config.FILTER_MODE)
        self.filter_combo.setCurrentIndex(index if index >= 0 else self.filter_combo.findData(DEFAULT_FILTER_MODE))
        self.filter_combo.currentIndexChanged.connect(self._on_filter_changed)
        top_row.addWidget(self.filter_combo)
        layout.addLayout(top_row)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        self.tree = QTreeWidget()
        self.tree.setHeaderHidden(True)
        self.tree.setColumnCount(1)
        self.tree.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.tree.currentItemChanged.connect(self._on_current_item_changed)
        self.tree.itemActivated.connect(self._on_item_activated)
        self.tree.customContextMenuRequested.connect(self._show_context_menu)
        splitter.addWidget(self.tree)

        details = QWidget()
        details_layout = QVBoxLayout(details)
        self.details_label = QLabel()
        self.details_label.setTextFormat(Qt.TextFormat.RichText)
        self.details_label.setWordWrap(True)
        self.details_label.setAlignment(Qt.AlignmentFlag.AlignTop | Qt.AlignmentFlag.AlignLeft)
        self.details_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        details_layout.addWidget(self.details_label)

        self.size_button = QPushButton("Calculate Size")
        self.size_button.setEnabled(False)
        self.size_button.clicked.connect(self._calculate_size)
        details_layout.addWidget(self.size_button)
        details_layout.addStretch()
        splitter.addWidget(details)

        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 2)
        layout.addWidget(splitter, 1)

        self.setCentralWidget(central)

        self.statusbar = self.statusBar()
        self.user_label = QLabel()
        self.statusbar.addPermanentWidget(self.user_label)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def refresh_data(self) -> None:
        """Re-discovers Steam and reloads the game list in the background."""
        if self.load_worker is not None and self.load_worker.isRunning():
            return

        self.installation = self.config.resolve_installation()
        if self.installation is None:
            logger.warning("Steam installation not found")
            self.items = []
            self.library_roots = []
            self.populate()
            self.set_status(STEAM_NOT_FOUND)
            return

        self.set_status("Loading games...")
        self.load_worker = GameLoadWorker(GameListService(self.installation), self.config.FAVORITES)
        self.load_worker.games_loaded.connect(self._on_games_loaded)
        self.load_worker.load_failed.connect(self._on_load_failed)
        self.load_worker.start()

    def _on_games_loaded(self, result: LoadResult) -> None:
        self.items = result.items
        self.library_roots = result.library_roots
        self.current_user_name = result.current_user_name
        self._sizes.clear()
        self.user_label.setText(f"Steam user: {result.current_user_name}" if result.current_user_name else "")
        self.populate()
        status = f"{len(self.items)} installed games"
        self.set_status(status if result.steam_running else f"{status} (Steam is not running)")

    def _on_load_failed(self, message: str) -> None:
        self.items = []
        self.library_roots = []
        self.populate()
        self.set_status(message)

    # ------------------------------------------------------------------
    # List
    # ------------------------------------------------------------------

    def populate(self, select_appid: str | None = None) -> None:
        """Rebuilds the list from items, the search text and the filter mode.

        Args:
            select_appid: Game to select afterwards; defaults to the first game.
        """
        query = self.search_entry.text()
        mode = self.filter_combo.currentData() or DEFAULT_FILTER_MODE

        self.tree.clear()
        self._items_by_appid.clear()
        self._actions_by_key.clear()

        first_entry: QTreeWidgetItem | None = None
        target: QTreeWidgetItem | None = None

        for title, section_items in group_items(filter_items(self.items, query), mode):
            section = self._add_section(f"{title} ({len(section_items)})")
            for item in section_items:
                label = f"★ {item.title}" if item.is_favorite else item.title
                child = QTreeWidgetItem([label])
                child.setData(0, ENTRY_ROLE, (GAME_ENTRY, item.appid))
                child.setToolTip(0, str(item.install_path))
                section.addChild(child)
                self._items_by_appid[item.appid] = item
                if first_entry is None:
                    first_entry = child
                if item.appid == select_appid:
                    target = child

        default_root = self.installation.steam_path if self.installation else None
        actions = filter_actions(build_steam_actions(self.library_roots, default_root), query)
        if actions:
            section = self._add_section("Steam")
            for action in actions:
                child = QTreeWidgetItem([action.title])
                child.setData(0, ENTRY_ROLE, (ACTION_ENTRY, action.key))
                section.addChild(child)
                self._actions_by_key[action.key] = action
                if first_entry is None:
                    first_entry = child

        self.tree.expandAll()

        target = target or first_entry
        if target is not None:
            self.tree.setCurrentItem(target)
        else:
            self._on_current_item_changed(None, None)

    def _add_section(self, title: str) -> QTreeWidgetItem:
        section = QTreeWidgetItem([title])
        section.setFlags(Qt.ItemFlag.ItemIsEnabled)
        font = section.font(0)
        font.setBold(True)
        section.setFont(0, font)
        self.tree.addTopLevelItem(section)
        return section

    def _entry_of(self, tree_item: QTreeWidgetItem | None) -> tuple[GameItem | None, SteamActionItem | None]:
        data = tree_item.data(0, ENTRY_ROLE) if tree_item is not None else None
        if not data:
            return None, None
        kind, key = data
        if kind == GAME_ENTRY:
            return self._items_by_appid.get(key), None
        return None, self._actions_by_key.get(key)

    def _on_current_item_changed(self, current: QTreeWidgetItem | None, _previous: QTreeWidgetItem | None) -> None:
        self.selected_item, self.selected_action = self._entry_of(current)
        self._show_details(self.selected_item)

    def _on_item_activated(self, tree_item: QTreeWidgetItem, _column: int = 0) -> None:
        game, action = self._entry_of(tree_item)
        if game is not None:
            self.game_actions.launch(game)
        elif action is not None:
            self.steam_actions.run(action)

    def activate_current(self) -> None:
        """Runs the default action of the current entry (launch or Steam action)."""
        current = self.tree.currentItem()
        if current is not None:
            self._on_item_activated(current)

    def _on_filter_changed(self, _index: int) -> None:
        mode = self.filter_combo.currentData()
        if mode:
            self.config.set_filter_mode(mode)
        self.populate(select_appid=self.selected_item.appid if self.selected_item else None)

    def _show_context_menu(self, pos: QPoint) -> None:
        game, _action = self._entry_of(self.tree.itemAt(pos))
        if game is None:
            return

        menu = QMenu(self)
        menu.addAction("Launch Game", lambda: self.game_actions.launch(game))
        menu.addAction("Open Game Folder", lambda: self.game_actions.open_game_folder(game))
        menu.addAction("Launch in Big Picture Mode", self.game_actions.launch_big_picture)
        menu.addSeparator()
        favorite_text = "Remove from Favorites" if game.is_favorite else "Add to Favorites"
        menu.addAction(favorite_text, lambda: self.game_actions.toggle_favorite(game))
        menu.addAction("Open Steam Store Page", lambda: self.game_actions.open_store_page(game))
        menu.addAction("Copy App ID", lambda: self.game_actions.copy_app_id(game))
        menu.exec(self.tree.viewport().mapToGlobal(pos))

    # ------------------------------------------------------------------
    # Details
    # ------------------------------------------------------------------

    def _show_details(self, item: GameItem | None) -> None:
        if item is None:
            self.details_label.setText("")
            self.size_button.setEnabled(False)
            return

        size = self._sizes.get(item.appid)
        rows = [
            ("App ID", item.appid),
            ("Status", "Favorite" if item.is_favorite else "Installed"),
            ("Install Drive", item.drive or "Unknown"),
            ("Install Directory", str(item.install_path)),
        ]
        if item.last_owner_name:
            rows.append(("Last Owner", item.last_owner_name))
        rows.append(("Size", format_bytes(size) if size is not None else "Not calculated"))

        body = "<br>".join(f"<b>{html.escape(label)}:</b> {html.escape(value)}" for label, value in rows)
        self.details_label.setText(f"<h3>{html.escape(item.title)}</h3>{body}")
        self.size_button.setEnabled(size is None)

    def _calculate_size(self) -> None:
        item = self.selected_item
        if item is None:
            return
        QApplication.setOverrideCursor(Qt.CursorShape.WaitCursor)
        try:
            self._sizes[item.appid] = get_directory_size(item.install_path)
        finally:
            QApplication.restoreOverrideCursor()
        self._show_details(item)

    # ------------------------------------------------------------------
    # Window
    # ------------------------------------------------------------------

    def set_status(self, text: str) -> None:
        """Updates the status bar message.

        Args:
            text (str): The status message to display.
        """
        self.statusbar.showMessage(text)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        """Lets the keyboard handler see key presses before Qt does."""
        if not self.keyboard_handler.handle_key_press(event):
            super().keyPressEvent(event)

    def closeEvent(self, event: QCloseEvent) -> None:
        """Waits for a running load or restart before the window goes away."""
        for worker in (self.load_worker, self.steam_actions.restart_worker):
            if worker is not None and worker.isRunning():
                worker.wait()
        super().closeEvent(event)
