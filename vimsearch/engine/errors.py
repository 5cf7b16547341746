"""Vim error codes and messages.

Errors are never allowed to crash key handling: they are reported through
the status line and the operation that hit them becomes a no-op.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    """Vim error numbers used by the search and command-line engine."""

    NO_PREVIOUS_REGULAR_EXPRESSION = 35
    NO_STRING_UNDER_CURSOR = 348
    NOTHING_IN_REGISTER = 353
    INVALID_SEARCH_STRING = 383
    SEARCH_HIT_TOP = 384
    SEARCH_HIT_BOTTOM = 385
    NOT_AN_EDITOR_COMMAND = 492


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.NO_PREVIOUS_REGULAR_EXPRESSION: "No previous regular expression",
    ErrorCode.NO_STRING_UNDER_CURSOR: "No string under cursor",
    ErrorCode.NOTHING_IN_REGISTER: "Nothing in register",
    ErrorCode.INVALID_SEARCH_STRING: "Invalid search string:",
    ErrorCode.SEARCH_HIT_TOP: "Search hit TOP without match for:",
    ErrorCode.SEARCH_HIT_BOTTOM: "Search hit BOTTOM without match for:",
    ErrorCode.NOT_AN_EDITOR_COMMAND: "Not an editor command:",
}


class VimError(Exception):
    """A Vim-style error, e.g. ``E348: No string under cursor``."""

    def __init__(self, code: ErrorCode, *args: str) -> None:
        self.code = code
        self.args_text = " ".join(args)
        super().__init__(self.message)

    @classmethod
    def from_code(cls, code: ErrorCode, *args: str) -> VimError:
        return cls(code, *args)

    @property
    def message(self) -> str:
        """The one-line status message."""
        text = f"E{self.code.value}: {ERROR_MESSAGES[self.code]}"
        if self.args_text:
            text += f" {self.args_text}"
        return text

    def __str__(self) -> str:
        return self.message
