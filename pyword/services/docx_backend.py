from __future__ import annotations

import io
import zipfile

import docx
from docx.document import Document as DocxDocument
from docx.opc.exceptions import PackageNotFoundError
from loguru import logger

from pyword.domain.interfaces import IDocumentBackend, IDocumentReader, IDocumentWriter
from pyword.domain.models import TableSummary

# Errors python-docx raises for bytes that are not a readable OOXML package.
PARSE_ERRORS: tuple[type[BaseException], ...] = (
    PackageNotFoundError,
    zipfile.BadZipFile,
    KeyError,
    ValueError,
)


def _summarize_tables(doc: DocxDocument) -> list[TableSummary]:
    return [TableSummary(rows=len(t.rows), columns=len(t.columns)) for t in doc.tables]


class DocxReader(IDocumentReader):
    """Read handle over a parsed python-docx document."""

    def __init__(self, doc: DocxDocument) -> None:
        self._doc: DocxDocument | None = doc

    def _require(self) -> DocxDocument:
        if self._doc is None:
            raise ValueError("read handle has been released")
        return self._doc

    def get_text(self) -> str:
        return "\n".join(self.paragraphs())

    def paragraphs(self) -> list[str]:
        return [p.text for p in self._require().paragraphs]

    def tables(self) -> list[TableSummary]:
        return _summarize_tables(self._require())

    def images(self) -> list[object]:
        # Image extraction is not available yet.
        return []

    def styles(self) -> list[object]:
        # Style extraction is not available yet.
        return []

    def metadata(self) -> dict[str, str]:
        # Metadata extraction is not available yet.
        return {}

    def close(self) -> None:
        self._doc = None


class DocxWriter(IDocumentWriter):
    """Builder over a live python-docx document; a fresh one starts from the default template."""

    def __init__(self, doc: DocxDocument | None = None) -> None:
        self.document: DocxDocument = doc if doc is not None else docx.Document()

    def add_paragraph(self, text: str, style: str | None = None) -> None:
        paragraph = self.document.add_paragraph()
        if text:
            try:
                paragraph.add_run(text)
            except ValueError:
                # lxml rejects non-XML characters after the paragraph is attached.
                p = paragraph._p
                p.getparent().remove(p)
                raise
        if style is None:
            return
        try:
            paragraph.style = style
        except KeyError:
            # Templates from other tools do not always define the requested style.
            logger.warning("Style {!r} missing from document; using default style", style)

    def set_title(self, title: str) -> None:
        self.document.core_properties.title = title

    def paragraph_texts(self) -> list[str]:
        return [p.text for p in self.document.paragraphs]

    def tables(self) -> list[TableSummary]:
        return _summarize_tables(self.document)

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        self.document.save(buf)
        return buf.getvalue()


class DocxBackend(IDocumentBackend):
    """Builds read/write handles on top of python-docx."""

    def parse(
        self, data: bytes, *, writable: bool = True
    ) -> tuple[DocxReader, DocxWriter | None]:
        doc = docx.Document(io.BytesIO(data))
        reader = DocxReader(doc)
        writer = DocxWriter(doc) if writable else None
        return reader, writer

    def create(self) -> DocxWriter:
        return DocxWriter()

    def reader_for(self, writer: IDocumentWriter) -> DocxReader:
        if isinstance(writer, DocxWriter):
            return DocxReader(writer.document)
        # Foreign writer: go through its serialized form.
        reader, _ = self.parse(writer.to_bytes(), writable=False)
        return reader
