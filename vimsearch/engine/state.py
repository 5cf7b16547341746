"""Vim state management.

Tracks the current mode, pending operator, count prefix, registers and
the search context shared by every search command.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

from .history import History
from .registers import RegisterStore
from .settings import SearchSettings
from .status import StatusLine

if TYPE_CHECKING:
    from .search import SearchState


class VimMode(Enum):
    """Vim editing modes."""

    NORMAL = "NORMAL"
    INSERT = "INSERT"
    VISUAL = "VISUAL"
    VISUAL_LINE = "V-LINE"
    VISUAL_BLOCK = "V-BLOCK"
    COMMAND = "COMMAND"
    SEARCH = "SEARCH"
    OPERATOR_PENDING = "OP-PENDING"


VISUAL_MODES = (VimMode.VISUAL, VimMode.VISUAL_LINE, VimMode.VISUAL_BLOCK)
PROMPT_MODES = (VimMode.COMMAND, VimMode.SEARCH)


class TextObjectType(Enum):
    """Selection types for text objects."""

    EXCLUSIVE = auto()  # Motion excludes final character
    INCLUSIVE = auto()  # Motion includes final character
    LINEWISE = auto()   # Operates on whole lines
    BLOCK = auto()      # Block/column selection


class SearchDirection(Enum):
    """Direction a search scans in."""

    FORWARD = 1
    BACKWARD = -1

    @property
    def reverse(self) -> SearchDirection:
        if self is SearchDirection.FORWARD:
            return SearchDirection.BACKWARD
        return SearchDirection.FORWARD


@dataclass
class SearchContext:
    """State shared by all search commands.

    ``last_search`` is only ever replaced as a whole, by commands that
    confirm a search; ``n``, ``N``, ``gn`` and highlighting read it.
    """

    last_search: SearchState | None = None
    history: History = field(default_factory=History)
    highlight: bool = False

    def replace_last_search(self, search: SearchState) -> None:
        self.last_search = search
        # Turn highlighting back on (turned off with :nohl)
        self.highlight = True


@dataclass
class VimState:
    """Tracks all vim editing state.

    This is the central state object that the VimEngine passes to motions,
    text objects and command lines:
    - Current mode (NORMAL, VISUAL, SEARCH, etc.)
    - Pending operator (d, c, y)
    - Count prefix (e.g., 3 in 3n)
    - Registers
    - Visual selection anchor
    - Search context, settings and the status line
    """

    mode: VimMode = VimMode.NORMAL
    # Mode to return to when a command/search prompt closes
    previous_mode: VimMode = VimMode.NORMAL

    # Operator pending state
    pending_operator: str | None = None
    operator_count: int = 1  # Count before operator (e.g., 2 in 2dgn)
    motion_count: int = 1    # Count before motion (e.g., 3 in d3n)

    # Input accumulator for building counts
    input_buffer: str = ""

    registers: RegisterStore = field(default_factory=RegisterStore)

    # Visual mode anchor (row, col)
    visual_anchor: tuple[int, int] | None = None

    search: SearchContext = field(default_factory=SearchContext)
    command_history: History = field(default_factory=History)
    settings: SearchSettings = field(default_factory=SearchSettings)
    status: StatusLine = field(default_factory=StatusLine)

    def reset_counts(self) -> None:
        """Reset count accumulators."""
        self.operator_count = 1
        self.motion_count = 1
        self.input_buffer = ""

    def reset_operator(self) -> None:
        """Reset pending operator state."""
        self.pending_operator = None
        self.reset_counts()

    def get_effective_count(self) -> int:
        """Get the combined count (operator_count * motion_count)."""
        return self.operator_count * self.motion_count

    def enter_mode(self, mode: VimMode) -> None:
        """Transition to a new mode with proper cleanup."""
        old_mode = self.mode
        self.mode = mode

        if mode in PROMPT_MODES and old_mode not in PROMPT_MODES:
            self.previous_mode = old_mode

        # Clear operator state when leaving operator pending (d/ keeps it)
        if old_mode == VimMode.OPERATOR_PENDING and mode not in (VimMode.OPERATOR_PENDING,) + PROMPT_MODES:
            self.reset_operator()

        # Clear visual anchor when leaving visual modes (a prompt keeps it)
        if old_mode in VISUAL_MODES and mode not in VISUAL_MODES + PROMPT_MODES:
            self.visual_anchor = None

        # Reset input buffer on mode change
        self.input_buffer = ""

    def start_visual(self, anchor: tuple[int, int], mode: VimMode = VimMode.VISUAL) -> None:
        """Enter visual mode with anchor at given position."""
        self.enter_mode(mode)
        self.visual_anchor = anchor

    def is_visual_mode(self) -> bool:
        """Check if currently in any visual mode."""
        return self.mode in VISUAL_MODES

    def accumulate_digit(self, digit: str) -> bool:
        """Accumulate a digit for count prefix. Returns True if consumed."""
        if digit == "0" and not self.input_buffer:
            # 0 at start is a motion (go to line start), not a count
            return False

        if digit.isdigit():
            self.input_buffer += digit
            return True
        return False

    def consume_count(self) -> int:
        """Consume accumulated count from input buffer."""
        if self.input_buffer:
            try:
                count = int(self.input_buffer)
                self.input_buffer = ""
                return max(1, count)
            except ValueError:
                self.input_buffer = ""
        return 1
