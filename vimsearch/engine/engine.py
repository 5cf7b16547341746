"""Vim emulation engine.

The VimEngine is the main controller that:
- Handles key events from the TextArea
- Manages vim state (mode, pending operator, open prompt, etc.)
- Dispatches to motions, operators, text objects and the command line
- Coordinates with the TextArea for cursor movement and text changes

Key handling is async because a few command-line keys wait on a
collaborator (path listing for <Tab>, the clipboard for <C-v>). Keys are
still handled one at a time; a prompt cancelled while such a key is
waiting drops that key's result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from .clipboard import Clipboard, SystemClipboard
from .command import CommandAction, VimCommandHandler
from .command_line import CommandLine, ExCommandLine, SearchCommandLine
from .completion import CompletionEngine, DirectoryLister
from .document import DocumentWrapper
from .errors import VimError
from .keymap import BindingType, get_vim_keymap
from .motions import get_motion_handler
from .operators import get_operator_handler
from .settings import SearchSettings
from .state import SearchDirection, TextObjectType, VimMode, VimState
from .text_objects import get_text_object_handler

if TYPE_CHECKING:
    from textual.widgets import TextArea

    from .search import MatchRange

logger = logging.getLogger(__name__)

ESCAPE_KEYS = ("escape", "ctrl+[", "ctrl+c")
COMPLETION_HANDLERS = ("cmdline_complete_next", "cmdline_complete_previous")


@dataclass
class KeyResult:
    """Result of processing a key event."""

    consumed: bool = True           # Was the key handled?
    enter_insert: bool = False      # Should we enter insert mode?
    show_command_line: bool = False # Should we show command input?
    command_text: str = ""          # Prompt text, e.g. ":" or "/"
    command_action: CommandAction | None = None  # Action from command mode
    command_argument: str = ""      # Argument of the action, e.g. the file for :e
    message: str = ""               # Message to display to user
    error: bool = False             # Is the message an error?


class VimEngine:
    """Main vim emulation controller.

    This class sits between key events and the TextArea, translating
    vim search and command-line keys into TextArea operations.
    """

    def __init__(
        self,
        text_area: TextArea,
        settings: SearchSettings | None = None,
        clipboard: Clipboard | None = None,
        lister: DirectoryLister | None = None,
        command_handler: VimCommandHandler | None = None,
    ) -> None:
        self._text_area = text_area
        self._doc = DocumentWrapper(text_area)
        self._state = VimState(settings=settings or SearchSettings())
        self._keymap = get_vim_keymap()

        # Buffer for multi-char sequences (g*, gn, etc.)
        self._key_buffer: str = ""

        # Waiting for the register name after <C-r>
        self._pending_register_insert = False

        self._command_handler = command_handler or VimCommandHandler()
        self._clipboard = clipboard or SystemClipboard()
        self._completion = CompletionEngine(self._command_handler.command_names, lister)
        self._command_line: CommandLine | None = None

        # Callbacks for mode changes, command mode, etc.
        self._on_mode_change: Callable[[VimMode], None] | None = None
        self._on_command_mode: Callable[[str], None] | None = None
        self._on_command_update: Callable[[str, int], None] | None = None

    @property
    def mode(self) -> VimMode:
        """Current vim mode."""
        return self._state.mode

    @property
    def state(self) -> VimState:
        """Current vim state."""
        return self._state

    @property
    def document(self) -> DocumentWrapper:
        return self._doc

    @property
    def command_line(self) -> CommandLine | None:
        """The open prompt, if any."""
        return self._command_line

    @property
    def search_preview(self) -> MatchRange | None:
        """Match the open search prompt would jump to (incsearch)."""
        if isinstance(self._command_line, SearchCommandLine):
            return self._command_line.preview(self._doc)
        return None

    def highlighted_matches(self) -> list[MatchRange]:
        """Matches of the last search, unless highlighting is off."""
        search = self._state.search
        if not search.highlight or search.last_search is None:
            return []
        try:
            return search.last_search.match_ranges(self._doc)
        except VimError:
            return []

    def set_mode_callback(self, callback: Callable[[VimMode], None]) -> None:
        """Set callback for mode changes."""
        self._on_mode_change = callback

    def set_command_callback(self, callback: Callable[[str], None]) -> None:
        """Set callback for command/search prompt entry."""
        self._on_command_mode = callback

    def set_command_update_callback(self, callback: Callable[[str, int], None]) -> None:
        """Set callback for prompt updates: callback(display_text, cursor_index)."""
        self._on_command_update = callback

    def set_status_callback(self, callback: Callable[[str, bool], None]) -> None:
        """Set callback for status messages: callback(text, is_error)."""
        self._state.status.set_callback(callback)

    def _notify_mode_change(self) -> None:
        """Notify callback of mode change."""
        if self._on_mode_change:
            self._on_mode_change(self._state.mode)

    def _notify_command_update(self) -> None:
        """Notify callback of command buffer update."""
        cmdline = self._command_line
        if self._on_command_update and cmdline is not None and not cmdline.closed:
            # +1 for the prompt character
            self._on_command_update(cmdline.display, cmdline.cursor_index + 1)

    # ─────────────────────────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────────────────────────

    async def handle_key(self, key: str) -> KeyResult:
        """Process a key event.

        Args:
            key: The key that was pressed (e.g., "n", "*", "escape")

        Returns:
            KeyResult indicating how the key was handled
        """
        status = self._state.status
        revision = status.revision

        result = await self._dispatch(key)

        if status.revision != revision and not result.message:
            result.message = status.text
            result.error = status.is_error
        return result

    async def _dispatch(self, key: str) -> KeyResult:
        mode = self._state.mode

        # Handle based on current mode
        if mode == VimMode.INSERT:
            return self._handle_insert_mode(key)
        elif mode == VimMode.NORMAL:
            return self._handle_normal_mode(key)
        elif mode in (VimMode.VISUAL, VimMode.VISUAL_LINE):
            return self._handle_visual_mode(key)
        elif mode == VimMode.OPERATOR_PENDING:
            return self._handle_operator_pending(key)
        elif mode in (VimMode.COMMAND, VimMode.SEARCH):
            return await self._handle_command_line(key)

        return KeyResult(consumed=False)

    def enter_insert_mode(self) -> None:
        """Enter insert mode."""
        self._state.enter_mode(VimMode.INSERT)
        self._notify_mode_change()

    def exit_insert_mode(self) -> None:
        """Exit insert mode, return to normal mode."""
        self._state.enter_mode(VimMode.NORMAL)
        # Move cursor back one (vim behavior)
        row, col = self._doc.cursor_location
        if col > 0:
            self._doc.move_cursor((row, col - 1))
        self._notify_mode_change()

    def enter_visual_mode(self, line_mode: bool = False) -> None:
        """Enter visual mode."""
        anchor = self._doc.cursor_location
        if line_mode:
            self._state.start_visual(anchor, VimMode.VISUAL_LINE)
            # In visual line mode, immediately select the entire current line
            row = anchor[0]
            self._doc.set_selection((row, 0), (row, len(self._doc.lines[row])))
        else:
            self._state.start_visual(anchor, VimMode.VISUAL)
        self._notify_mode_change()

    def exit_visual_mode(self) -> None:
        """Exit visual mode."""
        self._state.enter_mode(VimMode.NORMAL)
        # Clear selection by moving cursor to current position without selecting
        self._doc.move_cursor(self._doc.cursor_location)
        self._notify_mode_change()

    # ─────────────────────────────────────────────────────────────────
    # Insert Mode
    # ─────────────────────────────────────────────────────────────────

    def _handle_insert_mode(self, key: str) -> KeyResult:
        """Handle keys in insert mode."""
        if key in ESCAPE_KEYS:
            self.exit_insert_mode()
            return KeyResult(consumed=True)

        # Let TextArea handle all other keys in insert mode
        return KeyResult(consumed=False)

    # ─────────────────────────────────────────────────────────────────
    # Normal Mode
    # ─────────────────────────────────────────────────────────────────

    def _handle_normal_mode(self, key: str) -> KeyResult:
        """Handle keys in normal mode."""
        # Handle multi-char sequences (g*, gn, etc.)
        if self._key_buffer:
            return self._handle_key_buffer(key)

        # Check for count prefix
        if self._state.accumulate_digit(key):
            return KeyResult(consumed=True)

        binding = self._keymap.lookup(key, "normal")

        if binding is None:
            # Check for keys that start multi-char sequences
            if self._keymap.is_prefix(key):
                self._key_buffer = key
                return KeyResult(consumed=True)
            if key in ESCAPE_KEYS:
                self._state.reset_counts()
                return KeyResult(consumed=True)
            logger.debug("unbound key in normal mode: %r", key)
            return KeyResult(consumed=False)

        # Handle based on binding type
        if binding.type == BindingType.MOTION:
            return self._execute_motion(binding.handler)

        elif binding.type == BindingType.OPERATOR:
            return self._start_operator(binding.handler, key)

        elif binding.type == BindingType.MODE_SWITCH:
            return self._execute_mode_switch(binding.handler)

        return KeyResult(consumed=False)

    def _handle_key_buffer(self, key: str) -> KeyResult:
        """Handle multi-character key sequences."""
        sequence = self._key_buffer + key
        self._key_buffer = ""
        visual = self._state.is_visual_mode()

        binding = self._keymap.get_visual_motion(sequence) if visual else self._keymap.get_motion(sequence)
        if binding:
            if visual:
                return self._execute_visual_motion(binding.handler)
            return self._execute_motion(binding.handler)

        binding = self._keymap.get_text_object(sequence)
        if binding:
            return self._execute_text_object(binding.handler)

        # Not a valid sequence
        logger.debug("unbound key sequence: %r", sequence)
        self._state.reset_counts()
        return KeyResult(consumed=True)

    # ─────────────────────────────────────────────────────────────────
    # Motion Execution
    # ─────────────────────────────────────────────────────────────────

    def _execute_motion(self, handler_name: str) -> KeyResult:
        """Execute a motion command."""
        handler = get_motion_handler(handler_name)
        if not handler:
            return KeyResult(consumed=False)

        count = self._state.consume_count()
        result = handler(self._doc, self._state, count)

        if not result.failed:
            self._doc.move_cursor(result.position)

        return KeyResult(consumed=True)

    def _execute_text_object(self, handler_name: str) -> KeyResult:
        """Select a text object outside operator-pending mode (gn in normal/visual)."""
        handler = get_text_object_handler(handler_name)
        if not handler:
            return KeyResult(consumed=False)

        mode = self._state.mode
        count = self._state.consume_count()
        result = handler(self._doc, self._state, count)

        if not result.failed and self._state.mode != mode:
            self._notify_mode_change()

        return KeyResult(consumed=True)

    # ─────────────────────────────────────────────────────────────────
    # Operator Handling
    # ─────────────────────────────────────────────────────────────────

    def _start_operator(self, handler_name: str, key: str) -> KeyResult:
        """Start an operator, waiting for motion/text object."""
        self._state.pending_operator = key
        self._state.operator_count = self._state.consume_count()
        self._state.enter_mode(VimMode.OPERATOR_PENDING)
        self._notify_mode_change()

        return KeyResult(consumed=True)

    def _cancel_operator(self) -> KeyResult:
        self._state.reset_operator()
        self._state.enter_mode(VimMode.NORMAL)
        self._notify_mode_change()
        return KeyResult(consumed=True)

    def _handle_operator_pending(self, key: str) -> KeyResult:
        """Handle keys while waiting for motion/text object."""
        # Escape cancels operator
        if key in ESCAPE_KEYS:
            return self._cancel_operator()

        # Check for count
        if self._state.accumulate_digit(key):
            return KeyResult(consumed=True)

        # Handle multi-char motion / text object (g*, gn)
        if self._key_buffer:
            sequence = self._key_buffer + key
            self._key_buffer = ""

            binding = self._keymap.get_text_object(sequence)
            if binding:
                return self._execute_operator_with_text_object(binding.handler)

            binding = self._keymap.get_motion(sequence)
            if binding:
                return self._execute_operator_with_motion(binding.handler)

            return self._cancel_operator()

        if self._keymap.is_prefix(key):
            self._key_buffer = key
            return KeyResult(consumed=True)

        # Search prompt as a motion (d/foo<CR>)
        binding = self._keymap.get_mode_switch(key)
        if binding and "operator" in binding.modes:
            return self._execute_mode_switch(binding.handler)

        # Check for motion
        binding = self._keymap.get_motion(key)
        if binding:
            return self._execute_operator_with_motion(binding.handler)

        # Invalid key - cancel operator
        return self._cancel_operator()

    def _apply_operator(
        self,
        start: tuple[int, int],
        end: tuple[int, int],
        obj_type: TextObjectType,
    ) -> KeyResult:
        """Run the pending operator over a range and return to normal mode."""
        op_key = self._state.pending_operator
        op_binding = self._keymap.get_operator(op_key) if op_key else None
        op_func = get_operator_handler(op_binding.handler) if op_binding else None

        if not op_func:
            return self._cancel_operator()

        op_result = op_func(self._doc, self._state, start, end, obj_type)

        self._state.reset_operator()
        self._state.enter_mode(VimMode.NORMAL)

        if op_result.enter_insert:
            self.enter_insert_mode()
            return KeyResult(consumed=True, enter_insert=True)

        self._notify_mode_change()
        return KeyResult(consumed=True)

    def _execute_operator_with_motion(self, motion_handler: str) -> KeyResult:
        """Execute pending operator with a motion."""
        motion_func = get_motion_handler(motion_handler)
        if not motion_func:
            return self._cancel_operator()

        self._state.motion_count = self._state.consume_count()
        count = self._state.get_effective_count()
        motion_result = motion_func(self._doc, self._state, count)

        if motion_result.failed:
            return self._cancel_operator()

        # Execute operator on range from cursor to motion target
        start = self._doc.cursor_location
        return self._apply_operator(start, motion_result.position, motion_result.type)

    def _execute_operator_with_text_object(self, textobj_handler: str) -> KeyResult:
        """Execute pending operator with a text object."""
        textobj_func = get_text_object_handler(textobj_handler)
        if not textobj_func:
            return self._cancel_operator()

        self._state.motion_count = self._state.consume_count()
        count = self._state.get_effective_count()
        textobj_result = textobj_func(self._doc, self._state, count)

        if textobj_result.failed:
            return self._cancel_operator()

        return self._apply_operator(textobj_result.start, textobj_result.end, textobj_result.type)

    # ─────────────────────────────────────────────────────────────────
    # Mode Switches
    # ─────────────────────────────────────────────────────────────────

    def _execute_mode_switch(self, handler_name: str) -> KeyResult:
        """Execute a mode switch command."""
        if handler_name == "mode_visual":
            if self._state.mode == VimMode.VISUAL:
                self.exit_visual_mode()
            elif self._state.mode == VimMode.VISUAL_LINE:
                self._state.enter_mode(VimMode.VISUAL)
                self._extend_selection(self._doc.cursor_location)
                self._notify_mode_change()
            else:
                self.enter_visual_mode(line_mode=False)
            return KeyResult(consumed=True)

        elif handler_name == "mode_visual_line":
            if self._state.mode == VimMode.VISUAL_LINE:
                self.exit_visual_mode()
            elif self._state.mode == VimMode.VISUAL:
                self._state.enter_mode(VimMode.VISUAL_LINE)
                self._extend_selection(self._doc.cursor_location)
                self._notify_mode_change()
            else:
                self.enter_visual_mode(line_mode=True)
            return KeyResult(consumed=True)

        elif handler_name == "mode_insert":
            self.enter_insert_mode()
            return KeyResult(consumed=True, enter_insert=True)

        elif handler_name == "mode_command":
            self.enter_command_mode()
            return KeyResult(consumed=True, show_command_line=True, command_text=":")

        elif handler_name == "mode_search_forward":
            self.enter_search_mode(SearchDirection.FORWARD)
            return KeyResult(consumed=True, show_command_line=True, command_text="/")

        elif handler_name == "mode_search_backward":
            self.enter_search_mode(SearchDirection.BACKWARD)
            return KeyResult(consumed=True, show_command_line=True, command_text="?")

        return KeyResult(consumed=False)

    # ─────────────────────────────────────────────────────────────────
    # Visual Mode
    # ─────────────────────────────────────────────────────────────────

    def _handle_visual_mode(self, key: str) -> KeyResult:
        """Handle keys in visual and visual line mode."""
        # Handle multi-char sequences (g*, gn, etc.)
        if self._key_buffer:
            return self._handle_key_buffer(key)

        # Check for count prefix (e.g., 3n)
        if self._state.accumulate_digit(key):
            return KeyResult(consumed=True)

        # Escape exits visual mode
        if key in ESCAPE_KEYS:
            self.exit_visual_mode()
            return KeyResult(consumed=True)

        binding = self._keymap.get_mode_switch(key)
        if binding and "visual" in binding.modes:
            return self._execute_mode_switch(binding.handler)

        # Operators act on selection
        binding = self._keymap.get_operator(key)
        if binding:
            return self._execute_visual_operator(binding.handler)

        # Motions extend selection
        binding = self._keymap.get_visual_motion(key)
        if binding:
            return self._execute_visual_motion(binding.handler)

        # Start multi-char sequence
        if self._keymap.is_prefix(key):
            self._key_buffer = key
            return KeyResult(consumed=True)

        return KeyResult(consumed=False)

    def _extend_selection(self, position: tuple[int, int]) -> None:
        """Select from the visual anchor to ``position``."""
        anchor = self._state.visual_anchor
        if anchor is None:
            self._doc.move_cursor(position, select=True)
            return

        if self._state.mode == VimMode.VISUAL_LINE:
            # In visual line mode, select full lines from anchor to destination
            anchor_row = anchor[0]
            dest_row = position[0]

            if anchor_row <= dest_row:
                # Selecting downward: anchor at top, cursor at bottom
                sel_anchor = (anchor_row, 0)
                sel_cursor = (dest_row, len(self._doc.lines[dest_row]))
            else:
                # Selecting upward: anchor at bottom, cursor at top
                sel_anchor = (anchor_row, len(self._doc.lines[anchor_row]))
                sel_cursor = (dest_row, 0)

            self._doc.set_selection(sel_anchor, sel_cursor)
        else:
            self._doc.set_selection(anchor, position)

    def _execute_visual_motion(self, handler_name: str) -> KeyResult:
        """Execute motion to extend visual selection."""
        handler = get_motion_handler(handler_name)
        if not handler:
            return KeyResult(consumed=False)

        count = self._state.consume_count()
        result = handler(self._doc, self._state, count)

        if not self._state.is_visual_mode():
            # Selection search (visualstar) leaves visual mode
            self._doc.move_cursor(result.position)
            self._notify_mode_change()
        elif not result.failed:
            self._extend_selection(result.position)

        return KeyResult(consumed=True)

    def _execute_visual_operator(self, handler_name: str) -> KeyResult:
        """Execute operator on visual selection."""
        op_func = get_operator_handler(handler_name)
        anchor = self._state.visual_anchor
        linewise = self._state.mode == VimMode.VISUAL_LINE

        if not op_func or anchor is None:
            self.exit_visual_mode()
            return KeyResult(consumed=True)

        cursor = self._doc.cursor_location
        start = min(anchor, cursor)
        end = max(anchor, cursor)
        obj_type = TextObjectType.LINEWISE if linewise else TextObjectType.INCLUSIVE

        op_result = op_func(self._doc, self._state, start, end, obj_type)

        self.exit_visual_mode()

        if op_result.enter_insert:
            self.enter_insert_mode()
            return KeyResult(consumed=True, enter_insert=True)

        return KeyResult(consumed=True)

    # ─────────────────────────────────────────────────────────────────
    # Command Line (: / ?)
    # ─────────────────────────────────────────────────────────────────

    def enter_command_mode(self, text: str = "") -> None:
        """Open the ``:`` prompt."""
        self._command_line = ExCommandLine(self._state, self._command_handler, self._completion, text)
        self._open_prompt(VimMode.COMMAND)

    def enter_search_mode(self, direction: SearchDirection) -> None:
        """Open the ``/`` or ``?`` prompt at the cursor."""
        self._command_line = SearchCommandLine(self._state, direction, self._doc.cursor_location)
        self._open_prompt(VimMode.SEARCH)

    def _open_prompt(self, mode: VimMode) -> None:
        self._pending_register_insert = False
        self._state.enter_mode(mode)
        self._notify_mode_change()
        if self._on_command_mode and self._command_line is not None:
            self._on_command_mode(self._command_line.display)

    def _close_prompt(self) -> VimMode:
        """Close the open prompt and restore the mode it was opened from."""
        self._command_line = None
        self._pending_register_insert = False
        previous = self._state.previous_mode
        self._state.enter_mode(previous)
        return previous

    async def _handle_command_line(self, key: str) -> KeyResult:
        """Handle keys in command and search mode."""
        cmdline = self._command_line
        if cmdline is None:
            self._close_prompt()
            self._notify_mode_change()
            return KeyResult(consumed=True)

        prompt = "search" if isinstance(cmdline, SearchCommandLine) else "command"

        binding = None if self._pending_register_insert else self._keymap.get_command_line(key, prompt)
        if isinstance(cmdline, ExCommandLine) and (binding is None or binding.handler not in COMPLETION_HANDLERS):
            # Tab only cycles when the previous key was also a completion
            cmdline.end_completion_cycle()

        # Second key of <C-r>{register}
        if self._pending_register_insert:
            self._pending_register_insert = False
            if key == "ctrl+w":
                cmdline.insert_word_under_cursor(self._doc)
            elif len(key) == 1:
                cmdline.insert_register(key)
            self._notify_command_update()
            return KeyResult(consumed=True)

        if binding is None:
            pending = self._keymap.get_pending(key)
            if pending and prompt in pending.modes:
                self._pending_register_insert = True
                return KeyResult(consumed=True)

            # Regular character input
            if len(key) == 1:
                cmdline.type_character(key)
                self._notify_command_update()
            return KeyResult(consumed=True)

        return await self._execute_command_line_binding(cmdline, binding.handler)

    async def _execute_command_line_binding(self, cmdline: CommandLine, handler_name: str) -> KeyResult:
        if handler_name == "cmdline_confirm":
            if isinstance(cmdline, SearchCommandLine):
                return self._confirm_search(cmdline)
            return self._confirm_command(cmdline)

        if handler_name == "cmdline_cancel":
            return self._cancel_command_line(cmdline)

        if handler_name == "cmdline_backspace":
            if not cmdline.backspace():
                # Buffer is empty, exit command mode
                return self._cancel_command_line(cmdline)

        elif handler_name == "cmdline_paste":
            if not await cmdline.paste(self._clipboard):
                return KeyResult(consumed=True)

        elif handler_name in COMPLETION_HANDLERS:
            if not isinstance(cmdline, ExCommandLine):
                return KeyResult(consumed=True)
            try:
                completed = await cmdline.complete(forward=handler_name == "cmdline_complete_next")
            except OSError as exc:
                logger.warning("Path completion failed: %s", exc)
                return KeyResult(consumed=True)
            if not completed:
                return KeyResult(consumed=True)

        elif handler_name == "cmdline_next_match_char":
            if isinstance(cmdline, SearchCommandLine):
                cmdline.append_next_match_char(self._doc)

        else:
            method = _COMMAND_LINE_METHODS.get(handler_name)
            if method is None:
                logger.debug("no command-line handler named %r", handler_name)
                return KeyResult(consumed=True)
            getattr(cmdline, method)()

        self._notify_command_update()
        return KeyResult(consumed=True)

    def _cancel_command_line(self, cmdline: CommandLine) -> KeyResult:
        """Close the prompt without side effects."""
        cmdline.escape()
        previous = self._close_prompt()
        if previous == VimMode.OPERATOR_PENDING:
            return self._cancel_operator()
        self._notify_mode_change()
        return KeyResult(consumed=True)

    def _confirm_command(self, cmdline: ExCommandLine) -> KeyResult:
        result = cmdline.run()
        previous = self._close_prompt()
        if previous in (VimMode.VISUAL, VimMode.VISUAL_LINE):
            self.exit_visual_mode()
        else:
            self._notify_mode_change()

        if result.action == CommandAction.NO_HIGHLIGHT:
            self._state.search.highlight = False

        if result.message:
            self._state.status.display_message(result.message, is_error=result.error)

        return KeyResult(
            consumed=True,
            command_action=result.action,
            command_argument=result.argument,
            message=result.message,
            error=result.error,
        )

    def _confirm_search(self, cmdline: SearchCommandLine) -> KeyResult:
        outcome = cmdline.run(self._doc)
        previous = self._close_prompt()

        if previous == VimMode.OPERATOR_PENDING:
            if outcome is None:
                return self._cancel_operator()
            # Search motions are exclusive
            return self._apply_operator(
                self._doc.cursor_location, outcome[1].start, TextObjectType.EXCLUSIVE
            )

        if outcome is not None:
            position = outcome[1].start
            if previous in (VimMode.VISUAL, VimMode.VISUAL_LINE):
                self._extend_selection(position)
            else:
                self._doc.move_cursor(position)

        self._notify_mode_change()
        return KeyResult(consumed=True)


_COMMAND_LINE_METHODS: dict[str, str] = {
    "cmdline_delete": "delete",
    "cmdline_home": "home",
    "cmdline_end": "end",
    "cmdline_delete_word": "delete_word",
    "cmdline_delete_to_start": "delete_to_start",
    "cmdline_left": "left",
    "cmdline_right": "right",
    "cmdline_word_left": "word_left",
    "cmdline_word_right": "word_right",
    "cmdline_history_back": "history_back",
    "cmdline_history_forward": "history_forward",
}
