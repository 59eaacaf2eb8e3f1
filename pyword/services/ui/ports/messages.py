from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IMessageService(Protocol):
    """
    UI port for user-facing messages about document operations.

    `text` may span several lines; the first line is the summary.
    """

    def info(self, parent: Any | None, title: str, text: str) -> None: ...
    def warning(self, parent: Any | None, title: str, text: str) -> None: ...
    def error(self, parent: Any | None, title: str, text: str) -> None: ...

    def confirm(self, parent: Any | None, title: str, text: str) -> bool:
        """Yes/No question defaulting to No; True for Yes."""
        ...
