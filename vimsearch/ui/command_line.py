"""Command-line widget for the : / ? prompts."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

CURSOR_STYLE = "reverse"
ERROR_STYLE = "bold red"


def render_command_line(text: str, cursor_index: int) -> Text:
    """Render prompt text with the cell under the cursor reversed.

    A cursor past the end of the text is drawn on a trailing space.
    """
    cursor_index = max(0, min(cursor_index, len(text)))
    rendered = Text(text + " " if cursor_index == len(text) else text)
    rendered.stylize(CURSOR_STYLE, cursor_index, cursor_index + 1)
    return rendered


class VimCommandLine(Static):
    """One-line prompt shown below the editor while : / ? is open.

    Between prompts it shows the latest status message instead.
    """

    DEFAULT_CSS = """
    VimCommandLine {
        height: 1;
        width: 1fr;
        padding: 0 1;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__("", *args, **kwargs)
        self._text = ""
        self._cursor_index = 0
        self.active = False

    def set_command(self, text: str, cursor_index: int | None = None) -> None:
        """Show prompt text with the cursor at ``cursor_index`` (default: end)."""
        self._text = text
        self._cursor_index = len(text) if cursor_index is None else cursor_index
        self.active = True
        self.update(render_command_line(self._text, self._cursor_index))

    def set_status(self, message: str, is_error: bool = False) -> None:
        """Show a status message (only while no prompt is open)."""
        if self.active:
            return
        self.update(Text(message, style=ERROR_STYLE if is_error else ""))

    def show(self) -> None:
        self.display = True

    def hide(self) -> None:
        """Close the prompt; the widget stays for status messages."""
        self.active = False
        self._text = ""
        self.update("")
