"""Command-line sessions for ``:`` and ``/`` / ``?`` prompts.

A session is open from the key that starts the prompt until it is confirmed
(``run``) or cancelled (``escape``). Only one is open at a time; the engine
owns it. Operations that await a collaborator (completion listing, paste)
check ``closed`` when they resume and drop their result if the prompt was
cancelled meanwhile.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .command import CommandResult, VimCommandHandler
from .completion import CompletionEngine, CompletionState
from .errors import ErrorCode, VimError
from .history import History, HistoryCursor
from .line_buffer import LineBuffer
from .registers import SEARCH_REGISTER
from .search import MatchRange, SearchState
from .state import SearchDirection

if TYPE_CHECKING:
    from .clipboard import Clipboard
    from .document import DocumentWrapper
    from .state import VimState

logger = logging.getLogger(__name__)

Location = tuple[int, int]


class CommandLine:
    """Base prompt: a LineBuffer plus history recall and register insertion."""

    prefix = ":"

    def __init__(self, state: VimState, history: History, text: str = "") -> None:
        self._state = state
        self.history = history
        self.buffer = LineBuffer(text)
        self._history_cursor = HistoryCursor(history)
        self.closed = False

    @property
    def text(self) -> str:
        return self.buffer.text

    @property
    def cursor_index(self) -> int:
        return self.buffer.cursor_index

    @property
    def display(self) -> str:
        """Prompt text as shown, e.g. ``:edit``."""
        return self.prefix + self.buffer.text

    @property
    def history_index(self) -> int:
        return self._history_cursor.index

    def _changed(self) -> None:
        """Hook run after every action except completion."""

    # ─────────────────────────────────────────────────────────────────
    # Editing
    # ─────────────────────────────────────────────────────────────────

    def type_character(self, char: str) -> None:
        self.buffer.insert(char)
        self._changed()

    def backspace(self) -> bool:
        """Delete before the cursor. Returns False on an empty prompt (cancel)."""
        if not self.buffer.text:
            return False
        self.buffer.backspace()
        self._changed()
        return True

    def delete(self) -> None:
        self.buffer.delete()
        self._changed()

    def delete_word(self) -> None:
        self.buffer.delete_word()
        self._changed()

    def delete_to_start(self) -> None:
        self.buffer.delete_to_start()
        self._changed()

    def left(self) -> None:
        self.buffer.left()
        self._changed()

    def right(self) -> None:
        self.buffer.right()
        self._changed()

    def home(self) -> None:
        self.buffer.home()
        self._changed()

    def end(self) -> None:
        self.buffer.end()
        self._changed()

    def word_left(self) -> None:
        self.buffer.word_left()
        self._changed()

    def word_right(self) -> None:
        self.buffer.word_right()
        self._changed()

    # ─────────────────────────────────────────────────────────────────
    # History
    # ─────────────────────────────────────────────────────────────────

    def history_back(self) -> None:
        entry = self._history_cursor.older(self.buffer.text)
        if entry is not None:
            self.buffer.set(entry)
        self._changed()

    def history_forward(self) -> None:
        entry = self._history_cursor.newer()
        if entry is not None:
            self.buffer.set(entry)
        self._changed()

    # ─────────────────────────────────────────────────────────────────
    # Registers and clipboard
    # ─────────────────────────────────────────────────────────────────

    def insert_register(self, name: str) -> bool:
        """Insert a register's text (<C-r>{reg}). Returns False if nothing was inserted."""
        registers = self._state.registers
        if not registers.is_valid(name):
            return False

        register = registers.get(name)
        if register is None:
            self._state.status.display_error(ErrorCode.NOTHING_IN_REGISTER, name)
            return False

        self.buffer.insert(register.as_text())
        self._changed()
        return True

    def insert_word_under_cursor(self, doc: DocumentWrapper) -> None:
        """Insert the document word under the cursor (<C-r><C-w>)."""
        row, col = doc.cursor_location
        if col > 0 and col >= len(doc.current_line):
            col -= 1
        span = doc.get_word_at((row, col))
        if span is not None:
            self.buffer.insert(doc.current_line[span[0]:span[1]])
        self._changed()

    async def paste(self, clipboard: Clipboard) -> bool:
        """Splice clipboard text at the cursor. May suspend on the clipboard."""
        text = await clipboard.paste()
        if self.closed:
            logger.debug("prompt closed during paste; dropping %d chars", len(text))
            return False
        self.buffer.insert(text)
        self._changed()
        return True

    # ─────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────

    def escape(self) -> None:
        """Cancel: discard the buffer without side effects."""
        self.closed = True
        self.buffer.set("")


class ExCommandLine(CommandLine):
    """The ``:`` prompt with command and path completion."""

    prefix = ":"

    def __init__(
        self,
        state: VimState,
        handler: VimCommandHandler,
        completion: CompletionEngine,
        text: str = "",
    ) -> None:
        super().__init__(state, state.command_history, text)
        self._handler = handler
        self._completion = completion
        self.completion_state = CompletionState()
        self.last_action_was_completion = False

    def _changed(self) -> None:
        self.end_completion_cycle()

    def end_completion_cycle(self) -> None:
        """The next <Tab> starts a fresh lookup instead of cycling."""
        self.last_action_was_completion = False

    async def complete(self, forward: bool = True) -> bool:
        """Handle <Tab> / <S-Tab>. Returns False if the result was dropped.

        Raises:
            OSError: If listing a directory for path completion fails.
        """
        if self.last_action_was_completion and self.completion_state.can_cycle:
            self._completion.cycle(self.buffer, self.completion_state, forward)
            return True

        lookup = await self._completion.lookup(self.buffer.text, self.buffer.cursor_index)
        if self.closed:
            logger.debug("prompt closed during completion lookup; dropping result")
            return False

        self._completion.apply(self.buffer, self.completion_state, lookup, forward)
        self.last_action_was_completion = True
        return True

    def run(self) -> CommandResult:
        """Confirm: record the line in history and execute it."""
        self.closed = True
        text = self.buffer.text
        self.history.add(text)
        return self._handler.execute(text)


class SearchCommandLine(CommandLine):
    """The ``/`` and ``?`` prompts.

    Every edit rebuilds ``search_state`` from the typed needle so the
    preview always reflects the current text.
    """

    def __init__(
        self,
        state: VimState,
        direction: SearchDirection,
        origin: Location,
        text: str = "",
    ) -> None:
        super().__init__(state, state.search.history, text)
        self.direction = direction
        self.origin = origin
        self.search_state = self._build_search_state()

    @property
    def prefix(self) -> str:  # type: ignore[override]
        return "/" if self.direction is SearchDirection.FORWARD else "?"

    def _build_search_state(self) -> SearchState:
        return SearchState.create(self.direction, self.origin, self.buffer.text, self._state.settings)

    def _changed(self) -> None:
        self.search_state = self._build_search_state()

    def preview(self, doc: DocumentWrapper) -> MatchRange | None:
        """The match confirming would land on, for incremental highlighting."""
        if not self._state.settings.incsearch or not self.buffer.text:
            return None
        try:
            result = self.search_state.next_match(doc, self.origin)
        except VimError:
            # Half-typed patterns are often invalid; only confirm reports it
            return None
        return result[0] if result else None

    def append_next_match_char(self, doc: DocumentWrapper) -> None:
        """Append the character after the next match to the needle (<C-l>)."""
        try:
            result = self.search_state.next_match(doc, self.origin)
        except VimError:
            return
        if result is None:
            return
        char = doc.char_at(result[0].end)
        if char:
            self.buffer.end()
            self.buffer.insert(char)
            self._changed()

    def run(self, doc: DocumentWrapper) -> tuple[SearchState, MatchRange] | None:
        """Confirm the search.

        Returns the confirmed search and the match to move to, or None after
        reporting why there is none.
        """
        self.closed = True
        search = self._state.search
        status = self._state.status

        if self.buffer.text:
            search_state = self.search_state
        elif search.last_search is not None and search.last_search.search_string:
            # An empty prompt repeats the last pattern in this direction
            last = search.last_search
            search_state = SearchState(self.direction, self.origin, last.pattern)
        else:
            status.display_error(ErrorCode.NO_PREVIOUS_REGULAR_EXPRESSION)
            return None

        try:
            result = search_state.next_match(doc, self.origin)
        except VimError as error:
            status.display_error(error)
            return None

        self.history.add(search_state.search_string)
        self._state.registers.set_readonly(SEARCH_REGISTER, search_state.search_string)
        search.replace_last_search(search_state)

        if result is None:
            code = (
                ErrorCode.SEARCH_HIT_BOTTOM
                if self.direction is SearchDirection.FORWARD
                else ErrorCode.SEARCH_HIT_TOP
            )
            status.display_error(code, search_state.search_string)
            return None

        match, total = result
        status.report_search(match.index, total)
        return search_state, match
