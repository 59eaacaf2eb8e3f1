from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping, Protocol, runtime_checkable

from pyword.domain.models import TableSummary


class IDocumentReader(Protocol):
    """Read-oriented handle into a parsed document."""

    def get_text(self) -> str: ...
    def paragraphs(self) -> list[str]: ...
    def tables(self) -> list[TableSummary]: ...
    def images(self) -> list[object]: ...
    def styles(self) -> list[object]: ...
    def metadata(self) -> dict[str, str]: ...
    def close(self) -> None: ...


class IDocumentWriter(Protocol):
    """Mutable builder used to construct and persist a document."""

    def add_paragraph(self, text: str, style: str | None = None) -> None: ...
    def set_title(self, title: str) -> None: ...
    def paragraph_texts(self) -> list[str]: ...
    def tables(self) -> list[TableSummary]: ...
    def to_bytes(self) -> bytes: ...


class IDocumentBackend(Protocol):
    """Factory for handles; the only place that knows the concrete document library."""

    def parse(
        self, data: bytes, *, writable: bool = True
    ) -> tuple[IDocumentReader, IDocumentWriter | None]: ...
    def create(self) -> IDocumentWriter: ...
    def reader_for(self, writer: IDocumentWriter) -> IDocumentReader: ...


class IFileService(Protocol):
    """Read/write binary files. Writes should be atomic when possible."""

    def read_bytes(self, path: Path) -> bytes: ...
    def write_bytes_atomic(self, path: Path, data: bytes) -> None: ...


class ISettingsService(Protocol):
    """Persist and retrieve lightweight UI state."""

    def get_geometry(self) -> bytes | None: ...
    def set_geometry(self, blob: bytes) -> None: ...
    def get_splitter(self) -> bytes | None: ...
    def set_splitter(self, blob: bytes) -> None: ...
    def get_recent(self) -> list[str]: ...
    def set_recent(self, recent: Iterable[str]) -> None: ...
    def push_recent(self, path: str) -> list[str]: ...
    def drop_recent(self, path: str) -> list[str]: ...


@runtime_checkable
class IConfigService(Protocol):
    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_path(self, section: str, key: str) -> Path | None: ...
    def as_dict(self) -> Mapping[str, Mapping[str, str]]: ...
    def app_version(self) -> str: ...

    @property
    def loaded_from(self) -> Path | None: ...


@runtime_checkable
class IBestEffortProjection(Protocol):
    """
    Presentation-safe view of a document. Implementations never raise: counts
    degrade to 0 and text queries to "" or a diagnostic string.
    """

    def get_title(self) -> str: ...
    def get_text(self) -> str: ...
    def get_paragraph_count(self) -> int: ...
    def get_paragraph_text(self, index: int) -> str: ...
    def get_table_count(self) -> int: ...
    def get_table_info(self, index: int) -> str: ...
    def get_image_count(self) -> int: ...
    def get_image_info(self, index: int) -> str: ...
    def get_style_count(self) -> int: ...
    def get_style_info(self, index: int) -> str: ...
    def get_metadata_info(self) -> dict[str, str]: ...
