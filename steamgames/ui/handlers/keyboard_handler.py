"""Keyboard shortcut handler for MainWindow."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QKeyEvent, QKeySequence, QShortcut

if TYPE_CHECKING:
    from steamgames.services.game_list_service import GameItem
    from steamgames.ui.main_window import MainWindow

__all__ = ["KeyboardHandler"]


class KeyboardHandler:
    """Manages keyboard shortcuts and key events.

    Shortcuts: Ctrl+R refresh, Ctrl+L search, Ctrl+F open game folder,
    Ctrl+B Big Picture, Ctrl+H favorite, Ctrl+S store page,
    Ctrl+Shift+C copy app ID. ESC clears the search.

    Attributes:
        _mw: The parent MainWindow instance.
    """

    def __init__(self, mw: MainWindow) -> None:
        self._mw = mw

    def register_shortcuts(self) -> None:
        """Registers the window-wide keyboard shortcuts."""
        mw = self._mw
        bindings: list[tuple[str, Callable[[], None]]] = [
            ("Ctrl+R", mw.refresh_data),
            ("Ctrl+L", lambda: mw.search_entry.setFocus()),
            ("Ctrl+F", self._with_selected_game(mw.game_actions.open_game_folder)),
            ("Ctrl+B", mw.game_actions.launch_big_picture),
            ("Ctrl+H", self._with_selected_game(mw.game_actions.toggle_favorite)),
            ("Ctrl+S", self._with_selected_game(mw.game_actions.open_store_page)),
            ("Ctrl+Shift+C", self._with_selected_game(mw.game_actions.copy_app_id)),
        ]
        for sequence, slot in bindings:
            QShortcut(QKeySequence(sequence), mw).activated.connect(slot)

    def handle_key_press(self, event: QKeyEvent) -> bool:
        """Handles key press events for MainWindow.

        Args:
            event: The key press event.

        Returns:
            True if event was handled, False to pass through.
        """
        mw = self._mw
        key = event.key()

        if key == Qt.Key.Key_Escape:
            if mw.search_entry.text():
                mw.search_entry.clear()
                return True
            return False

        if key == Qt.Key.Key_Down and mw.search_entry.hasFocus():
            mw.tree.setFocus()
            return True

        return False

    def _with_selected_game(self, action: Callable[[GameItem], None]) -> Callable[[], None]:
        """Wraps a game action so it runs on the selected game."""

        def run() -> None:
            item = self._mw.selected_item
            if item is None:
                self._mw.set_status("No game selected")
                return
            action(item)

        return run
