from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QIODevice, QSaveFile

from pyword.domain.interfaces import IFileService


class FileService(IFileService):
    """Atomic reads/writes for binary document files."""

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def write_bytes_atomic(self, path: Path, data: bytes) -> None:
        sf = QSaveFile(str(path))
        if not sf.open(QIODevice.OpenModeFlag.WriteOnly):
            raise OSError(f"Cannot open for write: {path}")
        sf.write(data)
        if not sf.commit():
            raise OSError(f"Commit failed for: {path}")
