from __future__ import annotations

from pathlib import Path

import docx
import pytest
from loguru import logger

from pyword.domain.errors import (
    DocumentAlreadyOpenError,
    DocumentIOError,
    ExportNotImplementedError,
    InvalidContentError,
    SavePathNotSetError,
    UnsupportedFormatError,
    WriterNotInitializedError,
)
from pyword.domain.models import Document
from pyword.services.document_manager import DocumentManager, normalize_pdf_path
from pyword.services.docx_backend import DocxBackend
from pyword.services.file_service import FileService
from pyword.utils.constants import TEMP_KEY_PREFIX, UNTITLED_NAME


# ------------------------------
# Fakes & helpers
# ------------------------------


class CountingBackend(DocxBackend):
    def __init__(self) -> None:
        self.parse_calls = 0

    def parse(self, data: bytes, *, writable: bool = True):
        self.parse_calls += 1
        return super().parse(data, writable=writable)


class FailingWriteFiles(FileService):
    def write_bytes_atomic(self, path: Path, data: bytes) -> None:
        raise OSError("disk full")


class ExplodingReader:
    def close(self) -> None:
        raise RuntimeError("handle already gone")


# ------------------------------
# Open
# ------------------------------


@pytest.mark.parametrize("name", ["notes.txt", "report.pdf", "README", "old.docx.bak", "sheet.xlsx"])
def test_open_rejects_unsupported_extensions(manager: DocumentManager, tmp_path, name):
    with pytest.raises(UnsupportedFormatError):
        manager.open(tmp_path / name)
    assert manager.get_open_documents() == []


@pytest.mark.parametrize("name", ["notes.txt", "report.pdf", "README"])
def test_save_as_rejects_unsupported_extensions(manager: DocumentManager, tmp_path, name):
    doc = manager.new()
    with pytest.raises(UnsupportedFormatError):
        manager.save_as(doc, tmp_path / name)
    assert doc.path is None
    assert doc.modified is True


def test_open_extension_check_is_case_insensitive(manager: DocumentManager, saved_docx: Path):
    upper = saved_docx.with_name("UPPER.DOCX")
    upper.write_bytes(saved_docx.read_bytes())

    doc = manager.open(upper)
    assert doc.path == upper
    assert doc.can_read and doc.can_write


def test_open_twice_returns_same_instance_without_reparsing(tmp_path, file_service, saved_docx):
    backend = CountingBackend()
    mgr = DocumentManager(file_service, backend)

    first = mgr.open(saved_docx)
    second = mgr.open(saved_docx)

    assert first is second
    assert backend.parse_calls == 1
    assert mgr.get_current_document() is first
    assert len(mgr.get_open_documents()) == 1


def test_reopen_makes_existing_document_current(manager: DocumentManager, saved_docx: Path):
    opened = manager.open(saved_docx)
    manager.new()
    assert manager.current is not opened

    assert manager.open(saved_docx) is opened
    assert manager.current is opened


def test_open_registers_under_absolute_path(manager: DocumentManager, saved_docx: Path):
    doc = manager.open(saved_docx)
    assert doc.path == saved_docx
    assert manager.key_of(doc) == str(saved_docx)
    assert doc.modified is False
    assert doc.display_name == saved_docx.name


def test_open_read_only_has_no_writer(manager: DocumentManager, saved_docx: Path):
    doc = manager.open(saved_docx, read_only=True)
    assert doc.can_read
    assert not doc.can_write
    with pytest.raises(WriterNotInitializedError):
        manager.save(doc)


def test_open_missing_file_wraps_io_error(manager: DocumentManager, tmp_path):
    missing = tmp_path / "missing.docx"
    with pytest.raises(DocumentIOError) as ei:
        manager.open(missing)
    assert ei.value.operation == "open"
    assert ei.value.path == missing
    assert isinstance(ei.value.cause, FileNotFoundError)
    assert manager.current is None


def test_open_corrupt_file_wraps_parse_error(manager: DocumentManager, tmp_path):
    bad = tmp_path / "bad.docx"
    bad.write_text("definitely not a zip package", encoding="utf-8")
    with pytest.raises(DocumentIOError):
        manager.open(bad)
    assert manager.get_open_documents() == []


# ------------------------------
# New
# ------------------------------


def test_new_document_is_unsaved_and_modified(manager: DocumentManager):
    doc = manager.new()
    assert doc.modified is True
    assert doc.path is None
    assert doc.display_name == UNTITLED_NAME
    assert doc.title == UNTITLED_NAME
    assert doc.can_write
    assert manager.current is doc
    assert manager.key_of(doc).startswith(TEMP_KEY_PREFIX)

    with pytest.raises(SavePathNotSetError):
        manager.save(doc)
    assert doc.modified is True


def test_new_uses_fresh_temp_keys_that_are_never_reused(manager: DocumentManager):
    a = manager.new()
    b = manager.new()
    key_a, key_b = manager.key_of(a), manager.key_of(b)
    assert key_a != key_b

    manager.close(a)
    c = manager.new()
    assert manager.key_of(c) not in (key_a, key_b)
    assert len(manager.get_open_documents()) == 2


def test_new_honours_configured_names(file_service, backend):
    mgr = DocumentManager(file_service, backend, untitled_name="Draft.docx")
    doc = mgr.new()
    assert doc.display_name == "Draft.docx"
    assert doc.title == "Draft.docx"


# ------------------------------
# Save / Save As
# ------------------------------


def test_save_as_rebinds_key_and_clears_modified(manager: DocumentManager, tmp_path):
    doc = manager.new()
    old_key = manager.key_of(doc)
    target = tmp_path / "report.docx"

    manager.save_as(doc, target)

    assert doc.path == target
    assert doc.display_name == "report.docx"
    assert doc.modified is False
    assert target.exists()
    assert manager.key_of(doc) == str(target)
    assert old_key not in [manager.key_of(d) for d in manager.get_open_documents()]
    assert manager.get_open_documents() == [doc]


def test_save_as_twice_leaves_single_entry(manager: DocumentManager, tmp_path):
    doc = manager.new()
    manager.save_as(doc, tmp_path / "one.docx")
    doc.add_paragraph("more")
    manager.save_as(doc, tmp_path / "two.docx")

    assert manager.get_open_documents() == [doc]
    assert manager.key_of(doc) == str(tmp_path / "two.docx")
    assert (tmp_path / "one.docx").exists()
    assert (tmp_path / "two.docx").exists()


def test_save_as_onto_other_open_document_is_refused(manager: DocumentManager, saved_docx: Path):
    opened = manager.open(saved_docx)
    draft = manager.new()

    with pytest.raises(DocumentAlreadyOpenError):
        manager.save_as(draft, saved_docx)

    assert manager.key_of(opened) == str(saved_docx)
    assert draft.path is None
    assert len(manager.get_open_documents()) == 2


def test_save_after_save_as_writes_to_same_path(manager: DocumentManager, tmp_path):
    doc = manager.new()
    target = tmp_path / "doc.docx"
    manager.save_as(doc, target)

    doc.add_paragraph("later edit")
    assert doc.modified is True
    manager.save(doc)

    assert doc.modified is False
    assert "later edit" in [p.text for p in docx.Document(str(target)).paragraphs]


def test_save_failure_is_wrapped_and_keeps_modified(tmp_path, backend):
    mgr = DocumentManager(FailingWriteFiles(), backend)
    doc = mgr.new()
    key = mgr.key_of(doc)

    with pytest.raises(DocumentIOError) as ei:
        mgr.save_as(doc, tmp_path / "x.docx")

    assert ei.value.operation == "save as"
    assert "disk full" in str(ei.value)
    assert doc.modified is True
    assert doc.path is None
    assert mgr.key_of(doc) == key


def test_save_without_writer_fails(manager: DocumentManager, tmp_path):
    doc = Document(path=tmp_path / "x.docx")
    with pytest.raises(WriterNotInitializedError):
        manager.save(doc)
    with pytest.raises(WriterNotInitializedError):
        manager.save_as(doc, tmp_path / "y.docx")


def test_round_trip_new_add_save_reopen(manager: DocumentManager, tmp_path):
    target = tmp_path / "roundtrip.docx"
    doc = manager.new()
    doc.add_paragraph("A")
    doc.add_paragraph("B")
    manager.save_as(doc, target)
    manager.close(doc)

    reopened = manager.open(target)
    text = reopened.get_text()

    assert reopened is not doc
    assert "A" in text and "B" in text
    assert text.index("A") < text.index("B")


def test_saved_document_is_readable_without_reopening(manager: DocumentManager, tmp_path):
    doc = manager.new()
    assert not doc.can_read
    doc.add_paragraph("A")
    manager.save_as(doc, tmp_path / "live.docx")

    same = manager.open(tmp_path / "live.docx")
    assert same is doc
    assert doc.can_read
    assert doc.get_paragraphs()[-1] == "A"


def test_set_title_is_persisted_in_core_properties(manager: DocumentManager, tmp_path):
    target = tmp_path / "titled.docx"
    doc = manager.new()
    doc.set_title("Quarterly Report")
    manager.save_as(doc, target)

    assert docx.Document(str(target)).core_properties.title == "Quarterly Report"


def test_untitled_title_is_persisted(manager: DocumentManager, tmp_path):
    target = tmp_path / "untitled.docx"
    manager.save_as(manager.new(), target)

    assert docx.Document(str(target)).core_properties.title == UNTITLED_NAME


def test_invalid_paragraph_text_leaves_document_unchanged(manager: DocumentManager, saved_docx: Path):
    doc = manager.open(saved_docx)
    before = doc.writer.paragraph_texts()

    with pytest.raises(InvalidContentError):
        doc.add_paragraph("a\x00b")

    assert doc.writer.paragraph_texts() == before
    assert doc.modified is False


def test_invalid_title_leaves_document_unchanged(manager: DocumentManager, saved_docx: Path):
    doc = manager.open(saved_docx)

    with pytest.raises(InvalidContentError):
        doc.set_title("bad\x00title")

    assert doc.title == ""
    assert doc.modified is False


# ------------------------------
# Export
# ------------------------------


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("out", "out.pdf"),
        ("out.pdf", "out.pdf"),
        ("OUT.PDF", "OUT.PDF"),
        ("notes.docx", "notes.docx.pdf"),
    ],
)
def test_normalize_pdf_path(tmp_path, raw, expected):
    assert normalize_pdf_path(tmp_path / raw) == tmp_path / expected


def test_export_to_pdf_writes_fallback_and_reports_not_implemented(manager: DocumentManager, tmp_path):
    doc = manager.new()
    doc.add_paragraph("export me")

    with pytest.raises(ExportNotImplementedError) as ei:
        manager.export_to_pdf(doc, tmp_path / "report")

    err = ei.value
    assert err.pdf_path == tmp_path / "report.pdf"
    assert err.fallback_path == tmp_path / "report.docx"
    assert err.fallback_path.exists()
    assert not err.pdf_path.exists()
    # Export is not a save: identity and dirty state are untouched.
    assert doc.path is None
    assert doc.modified is True


def test_export_refuses_fallback_owned_by_another_document(manager: DocumentManager, tmp_path):
    owner = manager.new()
    owner.add_paragraph("KEEP ME")
    manager.save_as(owner, tmp_path / "report.docx")

    other = manager.new()
    other.add_paragraph("other")
    with pytest.raises(DocumentAlreadyOpenError):
        manager.export_to_pdf(other, tmp_path / "report.pdf")

    on_disk = docx.Document(str(tmp_path / "report.docx"))
    assert on_disk.paragraphs[-1].text == "KEEP ME"
    assert other.modified is True
    assert manager.key_of(owner) == str(tmp_path / "report.docx")


def test_export_onto_own_file_counts_as_save(manager: DocumentManager, saved_docx: Path):
    doc = manager.open(saved_docx)
    doc.add_paragraph("unsaved edit")

    with pytest.raises(ExportNotImplementedError) as ei:
        manager.export_to_pdf(doc, saved_docx.with_suffix(".pdf"))

    assert ei.value.fallback_path == saved_docx
    assert docx.Document(str(saved_docx)).paragraphs[-1].text == "unsaved edit"
    assert doc.modified is False
    assert doc.path == saved_docx


def test_export_without_writer_fails(manager: DocumentManager, saved_docx: Path, tmp_path):
    doc = manager.open(saved_docx, read_only=True)
    with pytest.raises(WriterNotInitializedError):
        manager.export_to_pdf(doc, tmp_path / "out.pdf")


# ------------------------------
# Close
# ------------------------------


def test_close_current_clears_current_and_table(manager: DocumentManager, saved_docx: Path):
    doc = manager.open(saved_docx)
    manager.close(doc)

    assert manager.current is None
    assert manager.get_current_document() is None
    assert manager.key_of(doc) is None
    assert manager.get_open_documents() == []
    assert doc.is_open is False
    assert not doc.can_read and not doc.can_write

    # Second close is a no-op
    manager.close(doc)
    assert manager.get_open_documents() == []


def test_close_none_is_noop(manager: DocumentManager):
    manager.new()
    manager.close(None)
    assert len(manager.get_open_documents()) == 1


def test_close_non_current_keeps_current(manager: DocumentManager, saved_docx: Path):
    opened = manager.open(saved_docx)
    draft = manager.new()
    manager.close(opened)
    assert manager.current is draft
    assert manager.get_open_documents() == [draft]


def test_close_logs_but_does_not_raise_on_release_error(manager: DocumentManager, tmp_path):
    doc = manager.new()
    manager.save_as(doc, tmp_path / "x.docx")
    doc.reader = ExplodingReader()

    messages: list[str] = []
    sink_id = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        manager.close(doc)
    finally:
        logger.remove(sink_id)

    assert any("handle already gone" in m for m in messages)
    assert manager.key_of(doc) is None
    assert doc.is_open is False


def test_close_warns_about_unsaved_changes(manager: DocumentManager):
    doc = manager.new()
    messages: list[str] = []
    sink_id = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        manager.close(doc)
    finally:
        logger.remove(sink_id)
    assert any("unsaved changes" in m for m in messages)


def test_get_open_documents_filters_closed(manager: DocumentManager):
    a = manager.new()
    b = manager.new()
    a.is_open = False
    assert manager.get_open_documents() == [b]
