from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from pyword.domain.errors import (
    DocumentNotOpenError,
    InvalidContentError,
    WriterNotInitializedError,
)
from pyword.utils.constants import DEFAULT_PARAGRAPH_STYLE, UNTITLED_NAME

if TYPE_CHECKING:
    from pyword.domain.interfaces import IDocumentReader, IDocumentWriter


@dataclass(frozen=True)
class TableSummary:
    rows: int
    columns: int


@dataclass(eq=False)
class Document:
    """
    One open document: identity, path, modification state and its backing handles.

    `reader` answers read queries and `writer` takes mutations and persistence.
    Either may be missing, so callers branch on `can_read` / `can_write`.
    Documents compare by identity.
    """

    path: Path | None = None
    title: str = ""
    modified: bool = False
    is_open: bool = True
    reader: IDocumentReader | None = None
    writer: IDocumentWriter | None = None
    untitled_name: str = UNTITLED_NAME
    default_style: str = DEFAULT_PARAGRAPH_STYLE

    # ---------- capabilities ----------

    @property
    def can_read(self) -> bool:
        return self.reader is not None

    @property
    def can_write(self) -> bool:
        return self.writer is not None

    @property
    def display_name(self) -> str:
        return self.path.name if self.path is not None else self.untitled_name

    # ---------- content operations ----------

    def add_paragraph(self, text: str) -> None:
        if self.writer is None:
            raise WriterNotInitializedError("add paragraph")
        logger.debug("Adding paragraph to {}: {}", self.display_name, _truncate(text, 30))
        try:
            self.writer.add_paragraph(text, style=self.default_style)
        except ValueError as e:
            raise InvalidContentError("add paragraph", e) from e
        self.modified = True

    def add_text(self, text: str) -> None:
        # No inline-run semantics yet; text lands in its own paragraph.
        self.add_paragraph(text)

    def set_title(self, title: str) -> None:
        logger.debug("Setting title of {} to {!r}", self.display_name, title)
        if self.writer is not None:
            try:
                self.writer.set_title(title)
            except ValueError as e:
                raise InvalidContentError("set title", e) from e
        self.title = title
        self.modified = True

    # ---------- read queries ----------

    def _require_reader(self, operation: str) -> IDocumentReader:
        if self.reader is None:
            raise DocumentNotOpenError(operation)
        return self.reader

    def get_text(self) -> str:
        return self._require_reader("get text").get_text()

    def get_paragraphs(self) -> list[str]:
        return self._require_reader("get paragraphs").paragraphs()

    def get_tables(self) -> list[TableSummary]:
        return self._require_reader("get tables").tables()

    def get_images(self) -> list[object]:
        return self._require_reader("get images").images()

    def get_styles(self) -> list[object]:
        return self._require_reader("get styles").styles()

    def get_metadata(self) -> dict[str, str]:
        return self._require_reader("get metadata").metadata()


def _truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
