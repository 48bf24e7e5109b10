"""
UI Widgets Package.

- UIHelper: Static utility methods for message and confirmation dialogs
"""

from __future__ import annotations

from steamgames.ui.widgets.ui_helper import UIHelper

__all__ = [
    "UIHelper",
]
