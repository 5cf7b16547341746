"""Vim text object functions.

Text objects define ranges of text for operators to act on.
Here that is the last search's match: the "gn" in "dgn" and "cgn".
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Callable

from .errors import VimError
from .pattern import CaseFlags
from .search import SearchState
from .state import SearchDirection, TextObjectType, VimMode

if TYPE_CHECKING:
    from .document import DocumentWrapper
    from .search import MatchRange
    from .state import VimState


@dataclass
class TextObjectResult:
    """Result of a text object computation."""

    start: tuple[int, int]  # Start position (row, col)
    end: tuple[int, int]    # End position (row, col) - exclusive
    type: TextObjectType = TextObjectType.EXCLUSIVE
    failed: bool = False


# Type alias for text object functions
TextObjectFunc = Callable[["DocumentWrapper", "VimState", int], TextObjectResult]

# Modes where gn starts a fresh selection at the match
NEUTRAL_MODES = (VimMode.NORMAL, VimMode.OPERATOR_PENDING)


# ─────────────────────────────────────────────────────────────────
# Search Match Objects (gn, gN)
# ─────────────────────────────────────────────────────────────────


def _find_search_object(
    doc: DocumentWrapper,
    state: VimState,
    search: SearchState,
    count: int,
) -> tuple[MatchRange, int] | None:
    cursor = doc.cursor_location

    # Use the match under the cursor, unless a visual selection already
    # ends on its last character
    match = search.containing_match(doc, cursor)
    if (
        match is not None
        and state.mode == VimMode.VISUAL
        and cursor == doc.left_through_line_breaks(match.end)
    ):
        match = None

    if match is not None:
        result: tuple[MatchRange, int] | None = (match, search.match_count(doc))
        count -= 1
    else:
        result = None

    pos = match.start if match is not None else cursor
    for _ in range(count):
        result = search.next_match(doc, pos)
        if result is None:
            return None
        pos = result[0].start
    return result


def search_object(
    doc: DocumentWrapper,
    state: VimState,
    count: int,
    direction: SearchDirection,
) -> TextObjectResult:
    """Select the next (or containing) match of the last search."""
    cursor = doc.cursor_location
    last = state.search.last_search
    if last is None or not last.search_string:
        return TextObjectResult(start=cursor, end=cursor, failed=True)

    # A fresh search: case follows the settings, not the flags of a * search
    pattern = replace(last.pattern, case=CaseFlags.from_settings(state.settings))
    search = SearchState(direction, cursor, pattern)
    try:
        result = _find_search_object(doc, state, search, max(1, count))
    except VimError as error:
        state.status.display_error(error)
        return TextObjectResult(start=cursor, end=cursor, failed=True)

    if result is None:
        return TextObjectResult(start=cursor, end=cursor, failed=True)

    match, total = result
    state.status.report_search(match.index, total)

    # Outside neutral modes the selection grows from the cursor
    start = match.start if state.mode in NEUTRAL_MODES else cursor

    if state.pending_operator is not None:
        # Operators take an exclusive end: exactly the match
        return TextObjectResult(start=start, end=match.end, type=TextObjectType.EXCLUSIVE)

    stop = doc.left_through_line_breaks(match.end)
    if state.mode in NEUTRAL_MODES or state.visual_anchor is None:
        state.start_visual(start)
        anchor = start
    else:
        if state.mode != VimMode.VISUAL:
            state.enter_mode(VimMode.VISUAL)
        anchor = state.visual_anchor
    doc.set_selection(anchor, stop)
    return TextObjectResult(start=start, end=match.end, type=TextObjectType.INCLUSIVE)


def textobj_search_forward(doc: DocumentWrapper, state: VimState, count: int) -> TextObjectResult:
    """Next match of the last search (gn)."""
    return search_object(doc, state, count, SearchDirection.FORWARD)


def textobj_search_backward(doc: DocumentWrapper, state: VimState, count: int) -> TextObjectResult:
    """Previous match of the last search (gN)."""
    return search_object(doc, state, count, SearchDirection.BACKWARD)


# ─────────────────────────────────────────────────────────────────
# Text Object Registry
# ─────────────────────────────────────────────────────────────────

TEXT_OBJECT_HANDLERS: dict[str, TextObjectFunc] = {
    "textobj_search_forward": textobj_search_forward,
    "textobj_search_backward": textobj_search_backward,
}


def get_text_object_handler(name: str) -> TextObjectFunc | None:
    """Get a text object function by handler name."""
    return TEXT_OBJECT_HANDLERS.get(name)
