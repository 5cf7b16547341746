"""Single-line text with a cursor, used by the command line."""

from __future__ import annotations


def _char_class(char: str) -> int:
    """Get character class: 0=whitespace, 1=word, 2=punctuation."""
    if char.isspace():
        return 0
    if char.isalnum() or char == "_":
        return 1
    return 2


class LineBuffer:
    """Editable text with a cursor index always within ``[0, len(text)]``."""

    def __init__(self, text: str = "", cursor_index: int | None = None) -> None:
        self._text = text
        self._cursor = len(text)
        if cursor_index is not None:
            self.cursor_index = cursor_index

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        self._text = value
        self._cursor = min(self._cursor, len(value))

    @property
    def cursor_index(self) -> int:
        return self._cursor

    @cursor_index.setter
    def cursor_index(self, value: int) -> None:
        self._cursor = max(0, min(value, len(self._text)))

    @property
    def text_before_cursor(self) -> str:
        return self._text[: self._cursor]

    @property
    def text_after_cursor(self) -> str:
        return self._text[self._cursor :]

    def set(self, text: str, cursor_index: int | None = None) -> None:
        """Replace the text; the cursor goes to the end unless given."""
        self._text = text
        self.cursor_index = len(text) if cursor_index is None else cursor_index

    # ─────────────────────────────────────────────────────────────────
    # Editing
    # ─────────────────────────────────────────────────────────────────

    def insert(self, text: str) -> None:
        """Insert at the cursor and move the cursor past the insertion."""
        self._text = self.text_before_cursor + text + self.text_after_cursor
        self._cursor += len(text)

    def backspace(self) -> bool:
        """Delete the character before the cursor. Returns False if nothing was deleted."""
        if self._cursor == 0:
            return False
        self._text = self._text[: self._cursor - 1] + self.text_after_cursor
        self._cursor -= 1
        return True

    def delete(self) -> bool:
        """Delete the character under the cursor."""
        if self._cursor >= len(self._text):
            return False
        self._text = self.text_before_cursor + self._text[self._cursor + 1 :]
        return True

    def delete_word(self) -> None:
        """Delete the word before the cursor, and the whitespace after it (<C-w>)."""
        start = self._word_start_before(self._cursor)
        self._text = self._text[:start] + self.text_after_cursor
        self._cursor = start

    def delete_to_start(self) -> None:
        """Delete everything before the cursor (<C-u>)."""
        self._text = self.text_after_cursor
        self._cursor = 0

    # ─────────────────────────────────────────────────────────────────
    # Cursor motion
    # ─────────────────────────────────────────────────────────────────

    def left(self) -> None:
        self.cursor_index = self._cursor - 1

    def right(self) -> None:
        self.cursor_index = self._cursor + 1

    def home(self) -> None:
        self._cursor = 0

    def end(self) -> None:
        self._cursor = len(self._text)

    def word_left(self) -> None:
        """Move to the start of the previous WORD (<C-Left>)."""
        col = self._cursor
        while col > 0 and self._text[col - 1].isspace():
            col -= 1
        while col > 0 and not self._text[col - 1].isspace():
            col -= 1
        self._cursor = col

    def word_right(self) -> None:
        """Move to the start of the next WORD, or the end (<C-Right>)."""
        col = self._cursor
        length = len(self._text)
        while col < length and not self._text[col].isspace():
            col += 1
        while col < length and self._text[col].isspace():
            col += 1
        self._cursor = col

    def _word_start_before(self, col: int) -> int:
        while col > 0 and self._text[col - 1].isspace():
            col -= 1
        if col == 0:
            return 0
        char_class = _char_class(self._text[col - 1])
        while col > 0 and _char_class(self._text[col - 1]) == char_class:
            col -= 1
        return col
