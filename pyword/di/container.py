from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QSettings

from pyword.domain.interfaces import IDocumentBackend, IFileService, ISettingsService
from pyword.services.config.app_config import AppConfig, build_app_config
from pyword.services.document_manager import DocumentManager
from pyword.services.docx_backend import DocxBackend
from pyword.services.file_service import FileService
from pyword.services.settings_service import SettingsService
from pyword.services.ui.adapters import QtFileDialogService, QtMessageService
from pyword.services.ui.main_window import MainWindow
from pyword.services.ui.ports.dialogs import IFileDialogService
from pyword.services.ui.ports.messages import IMessageService
from pyword.services.ui.presenters.main_presenter import MainPresenter
from pyword.utils.constants import APP_NAME, APP_ORG


class Container:
    """
    Lightweight DI container:
      - Wires default services if not provided
      - Builds the document manager from config (default style, untitled name)
      - Builds the main window with its presenter attached
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        files: IFileService | None = None,
        backend: IDocumentBackend | None = None,
        settings: ISettingsService | None = None,
        qsettings: QSettings | None = None,
        dialogs: IFileDialogService | None = None,
        messages: IMessageService | None = None,
    ) -> None:
        self.config: AppConfig = config or build_app_config()
        self.file_service: IFileService = files or FileService()
        self.backend: IDocumentBackend = backend or DocxBackend()
        self.settings_service: ISettingsService = settings or SettingsService(
            qsettings or QSettings()
        )
        self.dialogs: IFileDialogService = dialogs or QtFileDialogService()
        self.messages: IMessageService = messages or QtMessageService()

        self.manager = DocumentManager(
            self.file_service,
            self.backend,
            default_style=self.config.default_style,
            untitled_name=self.config.untitled_name,
        )

    @staticmethod
    def default(
        qsettings: QSettings | None = None,
        *,
        organization: str = APP_ORG,
        application: str = APP_NAME,
        explicit_ini: Path | None = None,
    ) -> Container:
        if qsettings is None:
            qsettings = QSettings(organization, application)
        return Container(config=build_app_config(explicit_ini=explicit_ini), qsettings=qsettings)

    # ---------- UI factories ----------

    def build_main_presenter(self, view, *, app_title: str = APP_NAME) -> MainPresenter:
        return MainPresenter(
            view=view,
            manager=self.manager,
            dialogs=self.dialogs,
            messages=self.messages,
            settings=self.settings_service,
            app_title=app_title,
        )

    def build_main_window(
        self,
        *,
        start_path: Path | None = None,
        app_title: str = APP_NAME,
    ) -> MainWindow:
        """Create the Qt MainWindow, attach its presenter and open `start_path` if given."""
        window = MainWindow(settings=self.settings_service, app_title=app_title)
        presenter = self.build_main_presenter(view=window, app_title=app_title)
        window.attach_presenter(presenter)
        if start_path is not None:
            presenter.open_path(start_path)
        return window
