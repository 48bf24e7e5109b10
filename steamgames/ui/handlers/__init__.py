"""UI handler package.

Handlers own a slice of MainWindow's event logic and receive a
back-reference to the window.
"""

from __future__ import annotations

from steamgames.ui.handlers.keyboard_handler import KeyboardHandler

__all__ = [
    "KeyboardHandler",
]
