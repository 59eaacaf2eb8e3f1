from __future__ import annotations

import os

# Run Qt headless when no display is available.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from pathlib import Path

import pytest
from PyQt6.QtCore import QSettings
from PyQt6.QtWidgets import QApplication

from pyword.services.document_manager import DocumentManager
from pyword.services.docx_backend import DocxBackend
from pyword.services.file_service import FileService
from pyword.services.settings_service import SettingsService


# --- Fallback QApplication fixture (works with or without pytest-qt) ---
@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt widgets.
    Creates one if not present; reuses existing otherwise.
    """
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        if created:
            app.quit()


@pytest.fixture()
def tmp_settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.ini"


@pytest.fixture()
def qsettings(tmp_settings_path: Path) -> QSettings:
    # Use an INI file so we don't touch system registry / platform stores
    s = QSettings(str(tmp_settings_path), QSettings.Format.IniFormat)
    s.clear()
    return s


@pytest.fixture()
def settings_service(qsettings: QSettings) -> SettingsService:
    return SettingsService(qsettings)


@pytest.fixture()
def file_service() -> FileService:
    return FileService()


@pytest.fixture()
def backend() -> DocxBackend:
    return DocxBackend()


@pytest.fixture()
def manager(file_service: FileService, backend: DocxBackend) -> DocumentManager:
    return DocumentManager(file_service, backend)


@pytest.fixture()
def saved_docx(tmp_path: Path, manager: DocumentManager) -> Path:
    """A .docx on disk with two paragraphs ("First", "Second"); not left open."""
    path = tmp_path / "existing.docx"
    doc = manager.new()
    doc.add_paragraph("First")
    doc.add_paragraph("Second")
    manager.save_as(doc, path)
    manager.close(doc)
    return path
