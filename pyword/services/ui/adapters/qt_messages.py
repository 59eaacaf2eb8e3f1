from __future__ import annotations

from typing import Any

from PyQt6.QtWidgets import QMessageBox

from pyword.services.ui.ports.messages import IMessageService


def split_message(text: str) -> tuple[str, str]:
    """First line becomes the headline, the rest the informative text."""
    head, _, rest = text.partition("\n")
    return head, rest.strip()


class QtMessageService(IMessageService):
    """
    QMessageBox-backed messages. Multi-line texts such as
    "Failed to open document:\\n<error>" show the first line as the headline and
    the error detail underneath.
    """

    def _show(self, icon: QMessageBox.Icon, parent: Any | None, title: str, text: str) -> None:
        head, detail = split_message(text)
        box = QMessageBox(icon, title, head, QMessageBox.StandardButton.Ok, parent)
        if detail:
            box.setInformativeText(detail)
        box.exec()

    def info(self, parent: Any | None, title: str, text: str) -> None:
        self._show(QMessageBox.Icon.Information, parent, title, text)

    def warning(self, parent: Any | None, title: str, text: str) -> None:
        self._show(QMessageBox.Icon.Warning, parent, title, text)

    def error(self, parent: Any | None, title: str, text: str) -> None:
        self._show(QMessageBox.Icon.Critical, parent, title, text)

    def confirm(self, parent: Any | None, title: str, text: str) -> bool:
        # Default to No: the only caller asks before discarding unsaved changes.
        resp = QMessageBox.question(
            parent,
            title,
            text,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return resp == QMessageBox.StandardButton.Yes
