from __future__ import annotations

from pathlib import Path


class DocumentError(Exception):
    """Base class for every recoverable document lifecycle failure."""


class UnsupportedFormatError(DocumentError):
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        ext = self.path.suffix or "(none)"
        super().__init__(f"Unsupported file format: {ext}")


class DocumentNotOpenError(DocumentError):
    """A read query was made against a document without a read handle."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Document is not open for reading ({operation})")


class WriterNotInitializedError(DocumentError):
    """A mutating or saving operation was made against a document without a writer."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Document writer is not initialized ({operation})")


class SavePathNotSetError(DocumentError):
    def __init__(self) -> None:
        super().__init__("Document has no save path yet; use Save As first")


class ExportNotImplementedError(DocumentError):
    """
    PDF generation is not available. The source document was still written next to
    the requested output, so callers can point the user at `fallback_path`.
    """

    def __init__(self, pdf_path: Path, fallback_path: Path) -> None:
        self.pdf_path = pdf_path
        self.fallback_path = fallback_path
        super().__init__(
            f"PDF export is not implemented; document saved to {fallback_path} instead"
        )


class DocumentIOError(DocumentError):
    def __init__(self, operation: str, path: Path | str, cause: BaseException) -> None:
        self.operation = operation
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{operation} failed for {self.path}: {cause}")


class DocumentAlreadyOpenError(DocumentError):
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Another open document already uses {self.path}")


class InvalidContentError(DocumentError):
    """Text the document format cannot store, e.g. NUL or other control characters."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} rejected the text: {cause}")
