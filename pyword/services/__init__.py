"""Concrete service implementations: documents, files, settings and navigation."""

from .document_adapter import DocumentAdapter
from .document_manager import DocumentManager
from .docx_backend import DocxBackend
from .file_service import FileService
from .settings_service import SettingsService

__all__ = [
    "DocumentAdapter",
    "DocumentManager",
    "DocxBackend",
    "FileService",
    "SettingsService",
]
