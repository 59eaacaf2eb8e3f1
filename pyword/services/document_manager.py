from __future__ import annotations

import itertools
import os
from pathlib import Path

from loguru import logger

from pyword.domain.errors import (
    DocumentAlreadyOpenError,
    DocumentIOError,
    ExportNotImplementedError,
    SavePathNotSetError,
    UnsupportedFormatError,
    WriterNotInitializedError,
)
from pyword.domain.interfaces import IDocumentBackend, IFileService
from pyword.domain.models import Document
from pyword.services.docx_backend import PARSE_ERRORS
from pyword.utils.constants import (
    DEFAULT_PARAGRAPH_STYLE,
    FALLBACK_EXPORT_EXTENSION,
    PDF_EXTENSION,
    SUPPORTED_EXTENSIONS,
    TEMP_KEY_PREFIX,
    UNTITLED_NAME,
)


def is_word_document(path: Path | str) -> bool:
    return Path(path).suffix.lower() in SUPPORTED_EXTENSIONS


def normalize_pdf_path(path: Path | str) -> Path:
    p = Path(path)
    if p.suffix.lower() == PDF_EXTENSION:
        return p
    return p.with_name(p.name + PDF_EXTENSION)


def _key_for_path(path: Path) -> str:
    return str(path)


class DocumentManager:
    """
    Owns every open document and the "current document" pointer.

    Documents are keyed by absolute path, or by a temporary `untitled://<n>` key
    until their first Save As. Not reentrant: callers serialize access.
    """

    def __init__(
        self,
        files: IFileService,
        backend: IDocumentBackend,
        *,
        default_style: str = DEFAULT_PARAGRAPH_STYLE,
        untitled_name: str = UNTITLED_NAME,
    ) -> None:
        self._files = files
        self._backend = backend
        self._default_style = default_style
        self._untitled_name = untitled_name
        self._documents: dict[str, Document] = {}
        self._current: Document | None = None
        self._temp_ids = itertools.count(1)

    # ---------- queries ----------

    @property
    def current(self) -> Document | None:
        return self._current

    def get_current_document(self) -> Document | None:
        return self._current

    def get_open_documents(self) -> list[Document]:
        return [d for d in self._documents.values() if d.is_open]

    def key_of(self, doc: Document) -> str | None:
        for key, d in self._documents.items():
            if d is doc:
                return key
        return None

    # ---------- lifecycle ----------

    def open(self, path: Path | str, *, read_only: bool = False) -> Document:
        if not is_word_document(path):
            raise UnsupportedFormatError(path)

        abs_path = Path(os.path.abspath(path))
        key = _key_for_path(abs_path)
        existing = self._documents.get(key)
        if existing is not None:
            self._current = existing
            return existing

        logger.info("Opening document: {}", abs_path)
        try:
            data = self._files.read_bytes(abs_path)
            reader, writer = self._backend.parse(data, writable=not read_only)
        except (OSError, *PARSE_ERRORS) as e:
            raise DocumentIOError("open", abs_path, e) from e

        doc = Document(
            path=abs_path,
            reader=reader,
            writer=writer,
            untitled_name=self._untitled_name,
            default_style=self._default_style,
        )
        self._documents[key] = doc
        self._current = doc
        logger.info("Document opened: {}", abs_path)
        return doc

    def new(self) -> Document:
        writer = self._backend.create()
        writer.set_title(self._untitled_name)
        doc = Document(
            path=None,
            title=self._untitled_name,
            modified=True,
            writer=writer,
            untitled_name=self._untitled_name,
            default_style=self._default_style,
        )
        key = f"{TEMP_KEY_PREFIX}{next(self._temp_ids)}"
        self._documents[key] = doc
        self._current = doc
        logger.info("New document created under {}", key)
        return doc

    def save(self, doc: Document) -> None:
        if not doc.can_write:
            raise WriterNotInitializedError("save")
        if doc.path is None:
            raise SavePathNotSetError()

        self._persist(doc, doc.path, "save")
        doc.modified = False
        logger.info("Document saved: {}", doc.path)

    def save_as(self, doc: Document, new_path: Path | str) -> None:
        if not is_word_document(new_path):
            raise UnsupportedFormatError(new_path)
        if not doc.can_write:
            raise WriterNotInitializedError("save as")

        abs_path = Path(os.path.abspath(new_path))
        new_key = _key_for_path(abs_path)
        occupant = self._documents.get(new_key)
        if occupant is not None and occupant is not doc:
            raise DocumentAlreadyOpenError(abs_path)

        self._persist(doc, abs_path, "save as")

        old_key = self.key_of(doc)
        if old_key is not None and old_key != new_key:
            # Insert first so the document is never missing from the table.
            self._documents[new_key] = doc
            del self._documents[old_key]
        doc.path = abs_path
        doc.modified = False
        logger.info("Document saved as: {}", abs_path)

    def export_to_pdf(self, doc: Document, output_path: Path | str) -> None:
        pdf_path = normalize_pdf_path(output_path)
        if not doc.can_write:
            raise WriterNotInitializedError("export to PDF")

        fallback = pdf_path.with_suffix(FALLBACK_EXPORT_EXTENSION)
        occupant = self._documents.get(_key_for_path(Path(os.path.abspath(fallback))))
        if occupant is not None and occupant is not doc:
            raise DocumentAlreadyOpenError(fallback)

        logger.info("Exporting PDF: {} (writing {} instead)", pdf_path, fallback)
        self._persist(doc, fallback, "export")
        if occupant is doc:
            # The fallback is the document's own file, so this was a save.
            doc.modified = False
        raise ExportNotImplementedError(pdf_path, fallback)

    def close(self, doc: Document | None) -> None:
        if doc is None:
            return
        key = self.key_of(doc)
        if key is None and not doc.is_open:
            return

        if doc.modified:
            logger.warning("Closing {} with unsaved changes", doc.display_name)

        if doc.reader is not None:
            try:
                doc.reader.close()
            except Exception as e:
                logger.warning("Error releasing {}: {}", doc.display_name, e)
        doc.reader = None
        doc.writer = None
        doc.is_open = False

        if key is not None:
            del self._documents[key]
        if self._current is doc:
            self._current = None
        logger.info("Document closed: {}", doc.display_name)

    # ---------- internals ----------

    def _persist(self, doc: Document, path: Path, operation: str) -> None:
        writer = doc.writer
        if writer is None:
            raise WriterNotInitializedError(operation)
        try:
            data = writer.to_bytes()
            self._files.write_bytes_atomic(path, data)
        except OSError as e:
            raise DocumentIOError(operation, path, e) from e

        # Once persisted the content is readable without reopening.
        if doc.reader is None:
            doc.reader = self._backend.reader_for(writer)
