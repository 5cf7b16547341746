"""Search motions.

Motions compute cursor destinations without modifying text.
They're used both for navigation and as targets for operators.
Every search motion is exclusive: ``dn`` deletes up to the match start.

Motion functions are registered by name and looked up via the keymap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from .errors import ErrorCode, VimError
from .pattern import CaseFlags, SearchPattern
from .registers import SEARCH_REGISTER
from .search import SearchState
from .state import SearchDirection, TextObjectType, VimMode

if TYPE_CHECKING:
    from .document import DocumentWrapper
    from .search import MatchRange
    from .state import VimState

logger = logging.getLogger(__name__)


@dataclass
class MotionResult:
    """Result of a motion computation."""

    position: tuple[int, int]  # Target cursor position (row, col)
    type: TextObjectType = TextObjectType.EXCLUSIVE
    failed: bool = False  # True if motion couldn't be performed


# Type alias for motion functions
MotionFunc = Callable[["DocumentWrapper", "VimState", int], MotionResult]


def _hit_edge_error(direction: SearchDirection) -> ErrorCode:
    if direction is SearchDirection.FORWARD:
        return ErrorCode.SEARCH_HIT_BOTTOM
    return ErrorCode.SEARCH_HIT_TOP


def _step_matches(
    doc: DocumentWrapper,
    search: SearchState,
    start: tuple[int, int],
    direction: SearchDirection,
    count: int,
) -> tuple[MatchRange, int] | None:
    """Follow ``count`` matches from ``start``."""
    result = None
    pos = start
    for _ in range(max(1, count)):
        result = search.next_match(doc, pos, direction)
        if result is None:
            return None
        pos = result[0].start
    return result


# ─────────────────────────────────────────────────────────────────
# Search From Cursor (*, #, g*, g#)
# ─────────────────────────────────────────────────────────────────


def create_search_state_and_move_to_match(
    doc: DocumentWrapper,
    state: VimState,
    needle: str,
    direction: SearchDirection,
    is_exact: bool,
    search_start: tuple[int, int],
    count: int = 1,
) -> MotionResult:
    """Start a literal search for ``needle`` and find its match from ``search_start``.

    The new search replaces the last search, is copied to the ``/`` register
    and appended to the search history even when nothing matches.
    """
    cursor = doc.cursor_location
    if not needle:
        return MotionResult(position=cursor, failed=True)

    case = CaseFlags.from_settings(state.settings, ignore_smartcase=True)
    search = SearchState(direction, cursor, SearchPattern.literal(needle, is_exact, case))
    state.search.replace_last_search(search)
    state.registers.set_readonly(SEARCH_REGISTER, search.search_string)
    state.search.history.add(search.search_string)

    try:
        result = _step_matches(doc, search, search_start, direction, count)
    except VimError as error:
        state.status.display_error(error)
        return MotionResult(position=cursor, failed=True)

    if result is None:
        logger.debug("no match for %r", search.search_string)
        state.status.display_error(_hit_edge_error(direction), search.search_string)
        return MotionResult(position=cursor, failed=True)

    match, total = result
    state.status.report_search(match.index, total)
    return MotionResult(position=match.start, type=TextObjectType.EXCLUSIVE)


def search_current_word(
    doc: DocumentWrapper,
    state: VimState,
    count: int,
    direction: SearchDirection,
    is_exact: bool,
) -> MotionResult:
    """Search for the word under the cursor; used by [g]* and [g]#."""
    cursor = doc.cursor_location
    span = doc.get_word_at(cursor)
    if span is None:
        state.status.display_error(ErrorCode.NO_STRING_UNDER_CURSOR)
        return MotionResult(position=cursor, failed=True)

    row = cursor[0]
    word = doc.lines[row][span[0]:span[1]]

    # Going backward starts at the word start so the word itself is skipped
    if direction is SearchDirection.BACKWARD:
        search_start = (row, min(span[0], cursor[1]))
    else:
        search_start = cursor

    return create_search_state_and_move_to_match(
        doc, state, word, direction, is_exact, search_start, count
    )


def search_current_selection(
    doc: DocumentWrapper,
    state: VimState,
    count: int,
    direction: SearchDirection,
) -> MotionResult:
    """Search for the selected text; * and # in visual mode with visualstar."""
    anchor = state.visual_anchor
    cursor = doc.cursor_location
    if state.mode == VimMode.VISUAL and anchor is not None:
        # Both ends are selected: end is the last selected character
        start, end = min(anchor, cursor), max(anchor, cursor)
        selected = doc.get_text_between(start, doc.get_right(end))
    else:
        start, end = doc.selection_range
        selected = doc.get_text_between(start, end)
        end = doc.get_left(end)

    # Back to normal mode, otherwise the selection grows to the next match
    state.enter_mode(VimMode.NORMAL)

    if direction is SearchDirection.BACKWARD:
        search_start = doc.get_left(start)
    else:
        search_start = doc.get_right(end)

    return create_search_state_and_move_to_match(
        doc, state, selected, direction, False, search_start, count
    )


def motion_search_word_forward(doc: DocumentWrapper, state: VimState, count: int) -> MotionResult:
    """Search forward for the exact word under the cursor (* motion)."""
    return search_current_word(doc, state, count, SearchDirection.FORWARD, is_exact=True)


def motion_search_word_backward(doc: DocumentWrapper, state: VimState, count: int) -> MotionResult:
    """Search backward for the exact word under the cursor (# motion)."""
    return search_current_word(doc, state, count, SearchDirection.BACKWARD, is_exact=True)


def motion_search_partial_forward(doc: DocumentWrapper, state: VimState, count: int) -> MotionResult:
    """Search forward for the word under the cursor, also inside words (g* motion)."""
    return search_current_word(doc, state, count, SearchDirection.FORWARD, is_exact=False)


def motion_search_partial_backward(doc: DocumentWrapper, state: VimState, count: int) -> MotionResult:
    """Search backward for the word under the cursor, also inside words (g# motion)."""
    return search_current_word(doc, state, count, SearchDirection.BACKWARD, is_exact=False)


def motion_search_visual_forward(doc: DocumentWrapper, state: VimState, count: int) -> MotionResult:
    """* in visual mode: the selection with visualstar, else the word."""
    if state.settings.visualstar:
        return search_current_selection(doc, state, count, SearchDirection.FORWARD)
    return motion_search_word_forward(doc, state, count)


def motion_search_visual_backward(doc: DocumentWrapper, state: VimState, count: int) -> MotionResult:
    """# in visual mode: the selection with visualstar, else the word."""
    if state.settings.visualstar:
        return search_current_selection(doc, state, count, SearchDirection.BACKWARD)
    return motion_search_word_backward(doc, state, count)


# ─────────────────────────────────────────────────────────────────
# Repeat Search (n, N)
# ─────────────────────────────────────────────────────────────────


def _repeat_search(doc: DocumentWrapper, state: VimState, count: int, reverse: bool) -> MotionResult:
    cursor = doc.cursor_location
    last = state.search.last_search
    if last is None or not last.search_string:
        state.status.display_error(ErrorCode.NO_PREVIOUS_REGULAR_EXPRESSION)
        return MotionResult(position=cursor, failed=True)

    direction = last.direction.reverse if reverse else last.direction
    state.search.highlight = True
    try:
        result = _step_matches(doc, last, cursor, direction, count)
    except VimError as error:
        state.status.display_error(error)
        return MotionResult(position=cursor, failed=True)

    if result is None:
        state.status.display_error(_hit_edge_error(direction), last.search_string)
        return MotionResult(position=cursor, failed=True)

    match, total = result
    state.status.report_search(match.index, total)
    return MotionResult(position=match.start, type=TextObjectType.EXCLUSIVE)


def motion_search_next(doc: DocumentWrapper, state: VimState, count: int) -> MotionResult:
    """Repeat the last search in its direction (n motion)."""
    return _repeat_search(doc, state, count, reverse=False)


def motion_search_previous(doc: DocumentWrapper, state: VimState, count: int) -> MotionResult:
    """Repeat the last search in the opposite direction (N motion)."""
    return _repeat_search(doc, state, count, reverse=True)


# ─────────────────────────────────────────────────────────────────
# Motion Registry - maps handler names from keymap to functions
# ─────────────────────────────────────────────────────────────────

MOTION_HANDLERS: dict[str, MotionFunc] = {
    "motion_search_word_forward": motion_search_word_forward,
    "motion_search_word_backward": motion_search_word_backward,
    "motion_search_partial_forward": motion_search_partial_forward,
    "motion_search_partial_backward": motion_search_partial_backward,
    "motion_search_visual_forward": motion_search_visual_forward,
    "motion_search_visual_backward": motion_search_visual_backward,
    "motion_search_next": motion_search_next,
    "motion_search_previous": motion_search_previous,
}


def get_motion_handler(name: str) -> MotionFunc | None:
    """Get a motion function by handler name."""
    return MOTION_HANDLERS.get(name)
