"""TextArea with vim search and command-line keys."""

from __future__ import annotations

from typing import Any

from textual.css.query import NoMatches
from textual.events import Key
from textual.message import Message
from textual.widgets import TextArea

from ..engine import CommandAction, KeyResult, SearchSettings, VimEngine, VimMode
from .command_line import VimCommandLine


def convert_key(event: Key) -> str:
    """Convert a Textual Key event to vim key format."""
    key = event.key

    # Handle special keys
    if key == "ctrl+left_square_bracket":
        return "ctrl+["
    if key == "escape":
        return "escape"
    if key in ("enter", "return"):
        return "enter"
    if key in ("backspace", "ctrl+h"):
        return "backspace"
    if key in ("tab", "shift+tab"):
        return key

    # Handle character keys
    if event.character and len(event.character) == 1 and event.character.isprintable():
        return event.character

    return key


class VimTextArea(TextArea):
    """TextArea that routes keys through a VimEngine.

    The prompt is drawn by the ``VimCommandLine`` with id ``command_line_id``
    when one is mounted; ex commands are posted as ``CommandIssued``.
    """

    class CommandIssued(Message):
        """An ex command such as :w or :e {file} was run."""

        def __init__(self, action: CommandAction, argument: str = "") -> None:
            self.action = action
            self.argument = argument
            super().__init__()

    def __init__(
        self,
        text: str = "",
        *,
        settings: SearchSettings | None = None,
        command_line_id: str = "vim-command-line",
        engine_options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(text, **kwargs)
        self.command_line_id = command_line_id
        self.engine = VimEngine(self, settings=settings, **(engine_options or {}))
        self.engine.set_mode_callback(self._on_mode_change)
        self.engine.set_command_callback(self._on_command_start)
        self.engine.set_command_update_callback(self._on_command_update)
        self.engine.set_status_callback(self._on_status)
        self.read_only = True

    def _command_line(self) -> VimCommandLine | None:
        try:
            return self.screen.query_one(f"#{self.command_line_id}", VimCommandLine)
        except NoMatches:
            return None

    async def _on_key(self, event: Key) -> None:
        """Give the engine first refusal on every key."""
        result = await self.engine.handle_key(convert_key(event))
        if result.consumed:
            event.prevent_default()
            event.stop()
            self._handle_result(result)
            return

        await super()._on_key(event)

    def _handle_result(self, result: KeyResult) -> None:
        # Messages raised while a prompt closed are shown once it is gone
        if result.message:
            self._on_status(result.message, result.error)
        if result.command_action and result.command_action != CommandAction.NONE:
            self.post_message(self.CommandIssued(result.command_action, result.command_argument))

    def _on_mode_change(self, mode: VimMode) -> None:
        """Only insert mode edits text directly."""
        self.read_only = mode != VimMode.INSERT
        cmd_line = self._command_line()
        if cmd_line is None:
            return
        if mode in (VimMode.COMMAND, VimMode.SEARCH):
            cmd_line.show()
        else:
            cmd_line.hide()

    def _on_command_start(self, text: str) -> None:
        cmd_line = self._command_line()
        if cmd_line is not None:
            cmd_line.set_command(text)
            cmd_line.show()

    def _on_command_update(self, text: str, cursor_index: int) -> None:
        cmd_line = self._command_line()
        if cmd_line is not None:
            cmd_line.set_command(text, cursor_index)

    def _on_status(self, text: str, is_error: bool) -> None:
        cmd_line = self._command_line()
        if cmd_line is not None:
            cmd_line.set_status(text, is_error)
