"""Process-wide error message slot shown to the user until dismissed."""

from __future__ import annotations

from typing import Optional


class ErrorBanner:
    def __init__(self) -> None:
        self._message: Optional[str] = None

    @property
    def message(self) -> Optional[str]:
        return self._message

    def show(self, message: str) -> None:
        """Replace whatever message is currently displayed."""
        self._message = message

    def dismiss(self) -> None:
        self._message = None
