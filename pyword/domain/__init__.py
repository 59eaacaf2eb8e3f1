"""Domain layer: error kinds, interfaces and the Document model."""

from .errors import (
    DocumentAlreadyOpenError,
    DocumentError,
    DocumentIOError,
    DocumentNotOpenError,
    ExportNotImplementedError,
    InvalidContentError,
    SavePathNotSetError,
    UnsupportedFormatError,
    WriterNotInitializedError,
)
from .interfaces import (
    IBestEffortProjection,
    IDocumentBackend,
    IDocumentReader,
    IDocumentWriter,
    IFileService,
    ISettingsService,
)
from .models import Document, TableSummary

__all__ = [
    "Document",
    "TableSummary",
    "DocumentError",
    "DocumentAlreadyOpenError",
    "DocumentIOError",
    "DocumentNotOpenError",
    "ExportNotImplementedError",
    "InvalidContentError",
    "SavePathNotSetError",
    "UnsupportedFormatError",
    "WriterNotInitializedError",
    "IBestEffortProjection",
    "IDocumentBackend",
    "IDocumentReader",
    "IDocumentWriter",
    "IFileService",
    "ISettingsService",
]
