# steamgames/ui/widgets/ui_helper.py

"""
Provides static helper methods for standard message dialogs.

Centralizes QMessageBox handling so every action reports failures the same way.
"""

from __future__ import annotations

from PyQt6.QtWidgets import QMessageBox, QWidget

from steamgames.version import __app_name__

__all__ = ["UIHelper"]


class UIHelper:
    """A static helper class for common UI dialog interactions."""

    @staticmethod
    def _show_message(
        parent: QWidget,
        message: str,
        title: str,
        icon: QMessageBox.Icon,
    ) -> None:
        msg = QMessageBox(parent)
        msg.setWindowTitle(title)
        msg.setText(message)
        msg.setIcon(icon)
        msg.setStandardButtons(QMessageBox.StandardButton.Ok)
        msg.exec()

    @staticmethod
    def show_error(parent: QWidget, message: str, title: str | None = None) -> None:
        """Displays a critical error message box.

        Args:
            parent: The parent widget for the dialog.
            message: The main error message to display.
            title: The title for the dialog window. Defaults to 'Error'.
        """
        UIHelper._show_message(parent, message, title or "Error", QMessageBox.Icon.Critical)

    @staticmethod
    def confirm(parent: QWidget, question: str, title: str | None = None, action_text: str = "Yes") -> bool:
        """Displays a confirmation dialog.

        Args:
            parent: The parent widget for the dialog.
            question: The question to ask the user.
            title: The title bar text. Defaults to the app title.
            action_text: Label of the confirming button.

        Returns:
            True if the user confirmed, False otherwise.
        """
        msg = QMessageBox(parent)
        msg.setWindowTitle(title or __app_name__)
        msg.setText(question)
        msg.setIcon(QMessageBox.Icon.Question)

        confirm_btn = msg.addButton(action_text, QMessageBox.ButtonRole.DestructiveRole)
        cancel_btn = msg.addButton("Cancel", QMessageBox.ButtonRole.RejectRole)
        msg.setDefaultButton(cancel_btn)

        msg.exec()
        return msg.clickedButton() == confirm_btn
