from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

from loguru import logger

from pyword.domain.interfaces import IBestEffortProjection
from pyword.domain.models import Document, TableSummary
from pyword.utils.constants import UNKNOWN_DOCUMENT

T = TypeVar("T")

EMPTY_PARAGRAPH = "(empty paragraph)"

# Placeholder metadata shown until real metadata extraction exists.
PLACEHOLDER_METADATA: dict[str, str] = {
    "Author": "Unknown",
    "Pages": "1",
    "Words": "0",
    "Characters": "0",
    "Created": "Unknown",
    "Modified": "Unknown",
}


def _unavailable(kind: str, index: int) -> str:
    return f"{kind} {index + 1} is not available"


class DocumentAdapter(IBestEffortProjection):
    """
    Read-only projection of a Document for the tree and content views.

    Every query prefers the writer's live structure and falls back to the reader.
    Nothing here raises: failures become 0 for counts and a diagnostic string for
    text, so rendering code never has to guard against a half-populated document.
    """

    def __init__(self, document: Document | None) -> None:
        self._doc = document

    # ---------- best-effort plumbing ----------

    def _attempt(self, what: str, query: Callable[[], T], fallback: Callable[[Exception], T]) -> T:
        try:
            return query()
        except Exception as e:
            logger.debug("Adapter query '{}' failed: {}", what, e)
            return fallback(e)

    def _count(self, what: str, items: Callable[[], Sequence[object]]) -> int:
        return self._attempt(what, lambda: len(items()), lambda _e: 0)

    def _has_source(self) -> bool:
        doc = self._doc
        return doc is not None and (doc.can_write or doc.can_read)

    def _paragraphs(self) -> list[str]:
        doc = self._doc
        if doc is None:
            return []
        if doc.writer is not None:
            return doc.writer.paragraph_texts()
        if doc.can_read:
            return doc.get_paragraphs()
        return []

    def _tables(self) -> list[TableSummary]:
        doc = self._doc
        if doc is None:
            return []
        if doc.writer is not None:
            return doc.writer.tables()
        if doc.can_read:
            return doc.get_tables()
        return []

    def _images(self) -> list[object]:
        doc = self._doc
        if doc is None or not doc.can_read:
            return []
        return doc.get_images()

    def _styles(self) -> list[object]:
        doc = self._doc
        if doc is None or not doc.can_read:
            return []
        return doc.get_styles()

    # ---------- title / text ----------

    def get_title(self) -> str:
        doc = self._doc
        if doc is None:
            return UNKNOWN_DOCUMENT
        return doc.title or doc.display_name or UNKNOWN_DOCUMENT

    def get_text(self) -> str:
        doc = self._doc
        if doc is None or not self._has_source():
            return ""

        def query() -> str:
            if doc.writer is not None:
                return "\n".join(doc.writer.paragraph_texts())
            return doc.get_text()

        return self._attempt("text", query, lambda e: f"Error reading text: {e}")

    # ---------- paragraphs ----------

    def get_paragraph_count(self) -> int:
        return self._count("paragraph count", self._paragraphs)

    def get_paragraph_text(self, index: int) -> str:
        if not self._has_source():
            return ""

        def query() -> str:
            paragraphs = self._paragraphs()
            if not 0 <= index < len(paragraphs):
                return _unavailable("Paragraph", index)
            return paragraphs[index] or EMPTY_PARAGRAPH

        return self._attempt("paragraph text", query, lambda e: f"Error reading paragraphs: {e}")

    # ---------- tables ----------

    def get_table_count(self) -> int:
        return self._count("table count", self._tables)

    def get_table_info(self, index: int) -> str:
        if not self._has_source():
            return ""

        def query() -> str:
            tables = self._tables()
            if not 0 <= index < len(tables):
                return _unavailable("Table", index)
            t = tables[index]
            return f"{t.rows} rows x {t.columns} columns"

        return self._attempt("table info", query, lambda e: f"Error reading tables: {e}")

    # ---------- images / styles ----------

    def get_image_count(self) -> int:
        return self._count("image count", self._images)

    def get_image_info(self, index: int) -> str:
        if not self._has_source():
            return ""

        def query() -> str:
            images = self._images()
            if not 0 <= index < len(images):
                return _unavailable("Image", index)
            return str(images[index])

        return self._attempt("image info", query, lambda e: f"Error reading images: {e}")

    def get_style_count(self) -> int:
        return self._count("style count", self._styles)

    def get_style_info(self, index: int) -> str:
        if not self._has_source():
            return ""

        def query() -> str:
            styles = self._styles()
            if not 0 <= index < len(styles):
                return _unavailable("Style", index)
            return str(styles[index])

        return self._attempt("style info", query, lambda e: f"Error reading styles: {e}")

    # ---------- metadata ----------

    def get_metadata_info(self) -> dict[str, str]:
        doc = self._doc
        if doc is None:
            return {}
        if not self._has_source():
            return {"Title": self.get_title()}

        def query() -> dict[str, str]:
            if doc.writer is None:
                doc.get_metadata()
            info = {"Title": self.get_title()}
            info.update(PLACEHOLDER_METADATA)
            return info

        return self._attempt(
            "metadata", query, lambda e: {"Error": f"Error reading metadata: {e}"}
        )
