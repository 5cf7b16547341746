"""Document wrapper for TextArea.

Provides the position arithmetic and text access the search engine needs
on top of Textual's TextArea widget.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import TYPE_CHECKING, Callable

from .pattern import is_word_char

if TYPE_CHECKING:
    from textual.widgets import TextArea

Location = tuple[int, int]


class DocumentWrapper:
    """Wraps a TextArea to provide vim-style document operations.

    Positions are ``(row, col)`` tuples. Searches run over the full text,
    so the wrapper also converts between positions and string offsets.
    """

    def __init__(self, text_area: TextArea) -> None:
        self._ta = text_area

    # ─────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────

    @property
    def text(self) -> str:
        """Full document text."""
        return self._ta.text

    @property
    def lines(self) -> list[str]:
        """Document as list of lines."""
        return self.text.split("\n")

    @property
    def cursor_location(self) -> Location:
        """Current cursor position as (row, col)."""
        return self._ta.cursor_location

    @property
    def selection_range(self) -> tuple[Location, Location]:
        """Current selection as (start, end), ordered."""
        selection = self._ta.selection
        start, end = selection.start, selection.end
        if start > end:
            start, end = end, start
        return start, end

    @property
    def current_line(self) -> str:
        """Text of the current line."""
        row = self.cursor_location[0]
        lines = self.lines
        if 0 <= row < len(lines):
            return lines[row]
        return ""

    def char_at(self, pos: Location) -> str:
        """Character at position, or empty string past the end of a line."""
        row, col = pos
        lines = self.lines
        if 0 <= row < len(lines) and 0 <= col < len(lines[row]):
            return lines[row][col]
        return ""

    # ─────────────────────────────────────────────────────────────────
    # Offsets
    # ─────────────────────────────────────────────────────────────────

    def _line_starts(self) -> list[int]:
        starts = [0]
        for line in self.lines[:-1]:
            starts.append(starts[-1] + len(line) + 1)
        return starts

    def location_to_offset(self, pos: Location) -> int:
        """Convert (row, col) to an offset into ``text``."""
        starts = self._line_starts()
        row = max(0, min(pos[0], len(starts) - 1))
        return starts[row] + max(0, pos[1])

    def offset_to_location(self, offset: int) -> Location:
        """Convert an offset into ``text`` to (row, col)."""
        return self.offset_converter()(offset)

    def offset_converter(self) -> Callable[[int], Location]:
        """Offset to (row, col) conversion for the current text.

        The line table is built once per call; the returned function is
        stale after an edit.
        """
        starts = self._line_starts()
        length = len(self.text)

        def to_location(offset: int) -> Location:
            offset = max(0, min(offset, length))
            row = bisect_right(starts, offset) - 1
            return (row, offset - starts[row])

        return to_location

    # ─────────────────────────────────────────────────────────────────
    # Position arithmetic
    # ─────────────────────────────────────────────────────────────────

    def get_left(self, pos: Location) -> Location:
        """One column left, staying on the line."""
        return (pos[0], max(0, pos[1] - 1))

    def get_right(self, pos: Location) -> Location:
        """One column right, staying on the line."""
        row, col = pos
        lines = self.lines
        line_len = len(lines[row]) if 0 <= row < len(lines) else 0
        return (row, min(line_len, col + 1))

    def left_through_line_breaks(self, pos: Location) -> Location:
        """One character back, moving to the previous line's last character."""
        row, col = pos
        if col > 0:
            return (row, col - 1)
        if row == 0:
            return (0, 0)
        previous = self.lines[row - 1]
        return (row - 1, max(0, len(previous) - 1))

    # ─────────────────────────────────────────────────────────────────
    # Tokens
    # ─────────────────────────────────────────────────────────────────

    def get_word_at(self, pos: Location) -> tuple[int, int] | None:
        """Column span of the token vim's ``*`` would search for.

        The run of word (or of other non-blank) characters under the cursor,
        otherwise the next such run on the line. Returns ``(start, end)``
        with ``end`` exclusive, or None for a blank line tail.
        """
        row, col = pos
        lines = self.lines
        if not 0 <= row < len(lines):
            return None
        line = lines[row]

        # Skip blanks to the next token on the line
        start = max(0, col)
        while start < len(line) and line[start].isspace():
            start += 1
        if start >= len(line):
            return None

        word = is_word_char(line[start])
        while start > 0 and self._same_class(line[start - 1], word):
            start -= 1
        end = start
        while end < len(line) and self._same_class(line[end], word):
            end += 1
        return (start, end)

    @staticmethod
    def _same_class(char: str, word: bool) -> bool:
        if word:
            return is_word_char(char)
        return not char.isspace() and not is_word_char(char)

    # ─────────────────────────────────────────────────────────────────
    # Text Manipulation
    # ─────────────────────────────────────────────────────────────────

    def move_cursor(self, pos: Location, select: bool = False) -> None:
        """Move cursor to position."""
        self._ta.move_cursor(pos, select=select)

    def set_selection(self, start: Location, end: Location) -> None:
        """Set the selection range explicitly.

        Args:
            start: Selection anchor (where selection started)
            end: Selection cursor (where cursor is now)
        """
        from textual.document._document import Selection
        self._ta.selection = Selection(start, end)

    def get_text_between(self, start: Location, end: Location) -> str:
        """Get text between two positions (end exclusive)."""
        if start > end:
            start, end = end, start
        return self.text[self.location_to_offset(start):self.location_to_offset(end)]

    def delete_range(self, start: Location, end: Location) -> str:
        """Delete text between start and end positions. Returns deleted text."""
        if start > end:
            start, end = end, start
        deleted = self.get_text_between(start, end)
        self._ta.replace("", start, end)
        return deleted

    def get_line_range(self, start_row: int, end_row: int) -> str:
        """Get complete lines from start_row to end_row (inclusive)."""
        lines = self.lines
        start_row = max(0, start_row)
        end_row = min(len(lines) - 1, end_row)
        return "\n".join(lines[start_row : end_row + 1])

    def delete_lines(self, start_row: int, end_row: int) -> str:
        """Delete complete lines from start_row to end_row (inclusive)."""
        lines = self.lines
        start_row = max(0, start_row)
        end_row = min(len(lines) - 1, end_row)
        deleted = "\n".join(lines[start_row : end_row + 1])

        start = (start_row, 0)
        if end_row + 1 < len(lines):
            # Not deleting last line - include the newline
            end = (end_row + 1, 0)
        else:
            if start_row > 0:
                # Include newline from previous line
                start = (start_row - 1, len(lines[start_row - 1]))
            end = (end_row, len(lines[end_row]))

        self._ta.replace("", start, end)
        return deleted
