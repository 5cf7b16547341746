"""Status line reporting for search results and errors."""

from __future__ import annotations

import logging
from typing import Callable

from .errors import ErrorCode, VimError

logger = logging.getLogger(__name__)


class StatusLine:
    """Holds the latest one-line status message.

    Reports are fire-and-forget: nothing in the engine reads them back to
    make decisions. ``revision`` increments on every report so callers can
    tell whether a key produced one.
    """

    def __init__(self) -> None:
        self.text = ""
        self.is_error = False
        self.revision = 0
        self._callback: Callable[[str, bool], None] | None = None

    def set_callback(self, callback: Callable[[str, bool], None] | None) -> None:
        """Set callback for status changes: callback(text, is_error)."""
        self._callback = callback

    def report_search(self, index: int, total: int) -> None:
        self._set(f"[{index}/{total}]", is_error=False)

    def display_error(self, error: VimError | ErrorCode, *args: str) -> None:
        if isinstance(error, ErrorCode):
            error = VimError.from_code(error, *args)
        logger.debug("status error: %s", error.message)
        self._set(error.message, is_error=True)

    def display_message(self, text: str, is_error: bool = False) -> None:
        self._set(text, is_error=is_error)

    def clear(self) -> None:
        self._set("", is_error=False)

    def _set(self, text: str, is_error: bool) -> None:
        self.text = text
        self.is_error = is_error
        self.revision += 1
        if self._callback:
            self._callback(text, is_error)
