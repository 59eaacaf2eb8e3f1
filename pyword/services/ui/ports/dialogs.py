from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IFileDialogService(Protocol):
    """
    UI port for picking document paths. Keeps the presenter decoupled from Qt.
    """

    def get_open_file(
            self,
            parent: Any | None,
            caption: str,
            start_dir: str | None,
            filter_str: str,
    ) -> Path | None:
        """Return a selected document path or None if cancelled."""
        ...

    def get_save_file(
            self,
            parent: Any | None,
            caption: str,
            start_path: str | None,
            filter_str: str,
    ) -> Path | None:
        """Return a selected destination path or None if cancelled."""
        ...

    def get_text(
            self,
            parent: Any | None,
            caption: str,
            label: str,
            initial: str = "",
    ) -> str | None:
        """Ask for a line of text; None if cancelled."""
        ...
