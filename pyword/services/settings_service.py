from __future__ import annotations

from typing import Iterable

from PyQt6.QtCore import QByteArray, QSettings

from pyword.domain.interfaces import ISettingsService
from pyword.utils.constants import (
    MAX_RECENTS,
    SETTINGS_GEOMETRY,
    SETTINGS_RECENTS,
    SETTINGS_SPLITTER,
)


class SettingsService(ISettingsService):
    """QSettings-backed UI state: window layout and the recent documents list."""

    def __init__(self, qsettings: QSettings) -> None:
        self._s = qsettings

    def _get_blob(self, key: str) -> bytes | None:
        v = self._s.value(key)
        return bytes(v) if isinstance(v, QByteArray) else None

    def get_geometry(self) -> bytes | None:
        return self._get_blob(SETTINGS_GEOMETRY)

    def set_geometry(self, blob: bytes) -> None:
        self._s.setValue(SETTINGS_GEOMETRY, QByteArray(blob))

    def get_splitter(self) -> bytes | None:
        return self._get_blob(SETTINGS_SPLITTER)

    def set_splitter(self, blob: bytes) -> None:
        self._s.setValue(SETTINGS_SPLITTER, QByteArray(blob))

    # ---------- recent documents ----------

    def get_recent(self) -> list[str]:
        v = self._s.value(SETTINGS_RECENTS, [])
        # INI-backed QSettings hands a one-element list back as a plain string.
        if isinstance(v, str):
            return [v] if v else []
        return [str(x) for x in v] if isinstance(v, list) else []

    def set_recent(self, recent: Iterable[str]) -> None:
        self._s.setValue(SETTINGS_RECENTS, list(recent)[:MAX_RECENTS])

    def push_recent(self, path: str) -> list[str]:
        """Move `path` to the front of the recent list and return the new list."""
        items = [p for p in self.get_recent() if p != path]
        items.insert(0, path)
        self.set_recent(items)
        return items[:MAX_RECENTS]

    def drop_recent(self, path: str) -> list[str]:
        items = [p for p in self.get_recent() if p != path]
        self.set_recent(items)
        return items
