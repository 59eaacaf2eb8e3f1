from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from loguru import logger

from pyword.domain.errors import (
    DocumentError,
    DocumentIOError,
    ExportNotImplementedError,
    SavePathNotSetError,
)
from pyword.domain.interfaces import ISettingsService
from pyword.domain.models import Document
from pyword.services import navigation
from pyword.services.document_adapter import DocumentAdapter
from pyword.services.document_manager import DocumentManager
from pyword.services.ui.ports.dialogs import IFileDialogService
from pyword.services.ui.ports.messages import IMessageService
from pyword.utils.constants import APP_NAME, OPEN_FILTER, PDF_FILTER, SAVE_FILTER


@runtime_checkable
class IMainView(Protocol):
    """Very small surface for a passive view (implemented by the Qt MainWindow)."""

    def set_title(self, title: str) -> None: ...
    def refresh_tree(self) -> None: ...
    def show_content(self, text: str) -> None: ...
    def show_status(self, text: str, msec: int = 3000) -> None: ...
    def set_recents(self, items: list[str]) -> None: ...


class MainPresenter:
    """
    Coordinates the document manager and the view.

    The view asks for tree children/labels and forwards node selection here;
    after every mutating operation the presenter tells the view to re-query.
    Document errors are reported through the message port and never escape.
    """

    def __init__(
        self,
        view: IMainView,
        manager: DocumentManager,
        dialogs: IFileDialogService,
        messages: IMessageService,
        settings: ISettingsService,
        *,
        app_title: str = APP_NAME,
    ) -> None:
        self.view = view
        self.manager = manager
        self.dialogs = dialogs
        self.messages = messages
        self.settings = settings
        self.app_title = app_title
        self.selected_node = "title"

    # ---------- tree / content queries ----------

    def adapter(self) -> DocumentAdapter | None:
        doc = self.manager.current
        return DocumentAdapter(doc) if doc is not None else None

    def child_ids(self, node_id: str) -> list[str]:
        return navigation.child_ids(node_id, self.adapter())

    def label_for(self, node_id: str) -> str:
        return navigation.node_label(node_id, self.adapter())

    def select_node(self, node_id: str) -> None:
        self.selected_node = node_id
        self.view.show_content(navigation.node_content(node_id, self.adapter()))

    def window_title(self) -> str:
        doc = self.manager.current
        if doc is None:
            return self.app_title
        star = " •" if doc.modified else ""
        return f"{doc.display_name}{star} - {self.app_title}"

    def refresh(self) -> None:
        self.view.set_title(self.window_title())
        self.view.refresh_tree()
        self.select_node(self.selected_node)

    def start(self) -> None:
        self.view.set_recents(self.settings.get_recent())
        self.refresh()

    # ---------- file operations ----------

    def new_document(self) -> None:
        doc = self.manager.new()
        self.selected_node = "title"
        self.refresh()
        self.view.show_status(f"Created {doc.display_name}")

    def open_path(self, path: Path) -> None:
        try:
            doc = self.manager.open(path)
        except DocumentError as e:
            if isinstance(e, DocumentIOError) and isinstance(e.cause, FileNotFoundError):
                self.view.set_recents(self.settings.drop_recent(str(path)))
            self.messages.error(None, "Open Error", f"Failed to open document:\n{e}")
            return
        self.selected_node = "title"
        self.view.set_recents(self.settings.push_recent(str(doc.path)))
        self.refresh()
        self.view.show_status(f"Opened: {doc.path}")

    def open_via_dialog(self) -> None:
        path = self.dialogs.get_open_file(None, "Open Document", None, OPEN_FILTER)
        if path is not None:
            self.open_path(path)

    def save(self) -> bool:
        doc = self._require_current("save")
        if doc is None:
            return False
        try:
            self.manager.save(doc)
        except SavePathNotSetError:
            return self.save_as_via_dialog()
        except DocumentError as e:
            self.messages.error(None, "Save Error", f"Failed to save document:\n{e}")
            return False
        self.refresh()
        self.view.show_status(f"Saved: {doc.path}")
        return True

    def save_as_via_dialog(self) -> bool:
        doc = self._require_current("save")
        if doc is None:
            return False
        start = str(doc.path) if doc.path is not None else doc.display_name
        path = self.dialogs.get_save_file(None, "Save As", start, SAVE_FILTER)
        if path is None:
            return False
        try:
            self.manager.save_as(doc, path)
        except DocumentError as e:
            self.messages.error(None, "Save Error", f"Failed to save document:\n{e}")
            return False
        self.view.set_recents(self.settings.push_recent(str(doc.path)))
        self.refresh()
        self.view.show_status(f"Saved: {doc.path}")
        return True

    def export_pdf_via_dialog(self) -> None:
        doc = self._require_current("export")
        if doc is None:
            return
        default = Path(doc.display_name).with_suffix(".pdf").name
        path = self.dialogs.get_save_file(None, "Export PDF", default, PDF_FILTER)
        if path is None:
            return
        try:
            self.manager.export_to_pdf(doc, path)
        except ExportNotImplementedError as e:
            self.messages.warning(
                None,
                "Export PDF",
                "PDF export is not available yet.\n"
                f"The document was saved to {e.fallback_path} instead.",
            )
            self.refresh()
        except DocumentError as e:
            self.messages.error(None, "Export Error", f"Failed to export:\n{e}")

    def close_current(self) -> None:
        doc = self.manager.current
        if doc is None:
            return
        if doc.modified and not self.messages.confirm(
            None, "Discard changes?", f"{doc.display_name} has unsaved changes. Close anyway?"
        ):
            return
        self.manager.close(doc)
        self.selected_node = "title"
        self.refresh()

    def confirm_quit(self) -> bool:
        dirty = [d.display_name for d in self.manager.get_open_documents() if d.modified]
        if not dirty:
            return True
        return self.messages.confirm(
            None, "Discard changes?", f"Unsaved changes in: {', '.join(dirty)}. Quit anyway?"
        )

    # ---------- content operations ----------

    def add_paragraph(self, text: str) -> None:
        doc = self._require_current("edit")
        if doc is None:
            return
        try:
            doc.add_paragraph(text)
        except DocumentError as e:
            self.messages.error(None, "Edit Error", str(e))
            return
        self.refresh()

    def add_paragraph_via_dialog(self) -> None:
        text = self.dialogs.get_text(None, "Add Paragraph", "Paragraph text:")
        if text is not None:
            self.add_paragraph(text)

    def set_title(self, title: str) -> None:
        doc = self._require_current("edit")
        if doc is None:
            return
        try:
            doc.set_title(title)
        except DocumentError as e:
            self.messages.error(None, "Edit Error", str(e))
            return
        self.refresh()

    def set_title_via_dialog(self) -> None:
        adapter = self.adapter()
        if adapter is None:
            return
        title = self.dialogs.get_text(None, "Document Title", "Title:", adapter.get_title())
        if title is not None:
            self.set_title(title)

    def _require_current(self, action: str) -> Document | None:
        doc = self.manager.current
        if doc is None:
            logger.debug("No current document to {}", action)
            self.messages.info(None, "No document", f"There is no document to {action}.")
        return doc
