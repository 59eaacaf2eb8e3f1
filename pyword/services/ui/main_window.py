from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QByteArray, Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QApplication,
    QMainWindow,
    QMenu,
    QSplitter,
    QStatusBar,
    QTextBrowser,
    QToolBar,
    QTreeWidget,
    QTreeWidgetItem,
)

from pyword.domain.interfaces import ISettingsService
from pyword.services.navigation import ROOT
from pyword.services.ui.presenters.main_presenter import MainPresenter
from pyword.utils.constants import MAX_RECENTS

NODE_ID_ROLE = Qt.ItemDataRole.UserRole


class MainWindow(QMainWindow):
    """Thin PyQt window: a document tree and a content pane driven by MainPresenter."""

    def __init__(
        self,
        settings: ISettingsService,
        *,
        app_title: str = "PyWord Viewer",
    ) -> None:
        super().__init__()
        self.setWindowTitle(app_title)
        self.resize(1200, 800)

        self.settings = settings
        self.presenter: MainPresenter | None = None
        self.recents: list[str] = []
        self._refreshing = False

        # Widgets
        self.tree = QTreeWidget(self)
        self.tree.setHeaderHidden(True)
        self.content = QTextBrowser(self)

        self.splitter = QSplitter(self)
        self.splitter.setOrientation(Qt.Orientation.Horizontal)
        self.splitter.addWidget(self.tree)
        self.splitter.addWidget(self.content)
        self.splitter.setStretchFactor(0, 3)
        self.splitter.setStretchFactor(1, 7)
        self.setCentralWidget(self.splitter)

        self.tree.currentItemChanged.connect(self._on_current_item_changed)

        # UI
        self._build_actions()
        self._build_toolbar()
        self._build_menu()
        self.setStatusBar(QStatusBar(self))

        # Restore UI state
        geo = self.settings.get_geometry()
        if isinstance(geo, (bytes, bytearray)):
            self.restoreGeometry(QByteArray(geo))
        split = self.settings.get_splitter()
        if isinstance(split, (bytes, bytearray)):
            self.splitter.restoreState(QByteArray(split))

        self.setAcceptDrops(True)

    def attach_presenter(self, presenter: MainPresenter) -> None:
        self.presenter = presenter
        presenter.start()

    # ---------- UI creation ----------
    def _build_actions(self):
        self.act_new = QAction(
            "New", self, shortcut=QKeySequence.StandardKey.New, triggered=self._new_document
        )
        self.act_open = QAction(
            "Open…", self, shortcut=QKeySequence.StandardKey.Open, triggered=self._open_dialog
        )
        self.act_save = QAction(
            "Save", self, shortcut=QKeySequence.StandardKey.Save, triggered=self._save
        )
        self.act_save_as = QAction(
            "Save As…", self, shortcut=QKeySequence.StandardKey.SaveAs, triggered=self._save_as
        )
        self.act_export_pdf = QAction("Export PDF…", self, triggered=self._export_pdf)
        self.act_close = QAction(
            "Close", self, shortcut=QKeySequence.StandardKey.Close, triggered=self._close_document
        )
        self.act_quit = QAction(
            "Quit", self, shortcut=QKeySequence.StandardKey.Quit, triggered=self._quit
        )

        self.act_add_paragraph = QAction(
            "Add Paragraph…", self, shortcut="Ctrl+Shift+P", triggered=self._add_paragraph
        )
        self.act_set_title = QAction("Set Title…", self, triggered=self._set_title)
        self.act_refresh = QAction("Refresh", self, shortcut="F5", triggered=self._refresh)

        self.recent_menu = QMenu("Open Recent", self)

    def _build_toolbar(self):
        tb = QToolBar("Main", self)
        tb.setMovable(False)
        for a in (self.act_new, self.act_open, self.act_save, self.act_export_pdf):
            tb.addAction(a)
        tb.addSeparator()
        tb.addAction(self.act_add_paragraph)
        tb.addAction(self.act_set_title)
        self.addToolBar(tb)

    def _build_menu(self):
        m = self.menuBar()
        filem = m.addMenu("&File")
        filem.addAction(self.act_new)
        filem.addAction(self.act_open)
        filem.addMenu(self.recent_menu)
        filem.addSeparator()
        filem.addAction(self.act_save)
        filem.addAction(self.act_save_as)
        filem.addAction(self.act_export_pdf)
        filem.addSeparator()
        filem.addAction(self.act_close)
        filem.addAction(self.act_quit)
        self._refresh_recent_menu()

        editm = m.addMenu("&Edit")
        editm.addAction(self.act_add_paragraph)
        editm.addAction(self.act_set_title)

        viewm = m.addMenu("&View")
        viewm.addAction(self.act_refresh)

    def _refresh_recent_menu(self):
        self.recent_menu.clear()
        if not self.recents:
            na = QAction("(empty)", self)
            na.setEnabled(False)
            self.recent_menu.addAction(na)
            return
        for p in self.recents[:MAX_RECENTS]:
            self.recent_menu.addAction(
                QAction(p, self, triggered=lambda chk=False, x=p: self._open_path(Path(x)))
            )

    # ---------- IMainView ----------
    def set_title(self, title: str) -> None:
        self.setWindowTitle(title)

    def refresh_tree(self) -> None:
        if self.presenter is None:
            return
        self._refreshing = True
        try:
            self.tree.clear()
            for node_id in self.presenter.child_ids(ROOT):
                item = self._make_item(node_id)
                self.tree.addTopLevelItem(item)
                for child_id in self.presenter.child_ids(node_id):
                    item.addChild(self._make_item(child_id))
        finally:
            self._refreshing = False

    def show_content(self, text: str) -> None:
        self.content.setPlainText(text)

    def show_status(self, text: str, msec: int = 3000) -> None:
        self.statusBar().showMessage(text, msec)

    def set_recents(self, items: list[str]) -> None:
        self.recents = list(items)
        self._refresh_recent_menu()

    # ---------- helpers ----------
    def _make_item(self, node_id: str) -> QTreeWidgetItem:
        item = QTreeWidgetItem([self.presenter.label_for(node_id)])
        item.setData(0, NODE_ID_ROLE, node_id)
        return item

    def _on_current_item_changed(self, current, _previous):
        if self._refreshing or current is None or self.presenter is None:
            return
        node_id = current.data(0, NODE_ID_ROLE)
        if isinstance(node_id, str):
            self.presenter.select_node(node_id)

    # ---------- Actions ----------
    def _new_document(self):
        if self.presenter:
            self.presenter.new_document()

    def _open_dialog(self):
        if self.presenter:
            self.presenter.open_via_dialog()

    def _open_path(self, path: Path):
        if self.presenter:
            self.presenter.open_path(path)

    def _save(self):
        if self.presenter:
            self.presenter.save()

    def _save_as(self):
        if self.presenter:
            self.presenter.save_as_via_dialog()

    def _export_pdf(self):
        if self.presenter:
            self.presenter.export_pdf_via_dialog()

    def _close_document(self):
        if self.presenter:
            self.presenter.close_current()

    def _add_paragraph(self):
        if self.presenter:
            self.presenter.add_paragraph_via_dialog()

    def _set_title(self):
        if self.presenter:
            self.presenter.set_title_via_dialog()

    def _refresh(self):
        if self.presenter:
            self.presenter.refresh()

    def _quit(self):
        if not self.close():
            return
        app = QApplication.instance()
        if app is not None:
            app.quit()

    # ---------- DnD ----------
    def dragEnterEvent(self, e):
        if e.mimeData().hasUrls():
            e.acceptProposedAction()

    def dropEvent(self, e):
        urls = e.mimeData().urls()
        if not urls:
            return
        local = urls[0].toLocalFile()
        if local:
            self._open_path(Path(local))

    # ---------- Close ----------
    def closeEvent(self, event):
        if self.presenter is not None and not self.presenter.confirm_quit():
            event.ignore()
            return
        self.settings.set_geometry(bytes(self.saveGeometry()))
        self.settings.set_splitter(bytes(self.splitter.saveState()))
        super().closeEvent(event)
