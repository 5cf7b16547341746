"""Vim operator functions.

Operators act on a range of text (defined by a motion or text object).
They're the d in "dgn", the c in "cgn", the y in "y/foo", etc.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from .state import TextObjectType

if TYPE_CHECKING:
    from .document import DocumentWrapper
    from .state import VimState


@dataclass
class OperatorResult:
    """Result of an operator execution."""

    success: bool = True
    deleted_text: str = ""
    enter_insert: bool = False  # For 'c' operator


# Type alias for operator functions
OperatorFunc = Callable[
    ["DocumentWrapper", "VimState", tuple[int, int], tuple[int, int], TextObjectType],
    OperatorResult,
]


def _charwise_range(
    doc: DocumentWrapper,
    start: tuple[int, int],
    end: tuple[int, int],
    obj_type: TextObjectType,
) -> tuple[tuple[int, int], tuple[int, int]]:
    """Order a range and widen inclusive ranges to cover the end character."""
    if start > end:
        start, end = end, start
    if obj_type == TextObjectType.INCLUSIVE:
        row, col = end
        line = doc.lines[row] if row < len(doc.lines) else ""
        if col < len(line):
            end = (row, col + 1)
    return start, end


# ─────────────────────────────────────────────────────────────────
# Core Operators
# ─────────────────────────────────────────────────────────────────


def operator_delete(
    doc: DocumentWrapper,
    state: VimState,
    start: tuple[int, int],
    end: tuple[int, int],
    obj_type: TextObjectType,
) -> OperatorResult:
    """Delete text in range (d operator)."""
    if obj_type == TextObjectType.LINEWISE:
        start_row = min(start[0], end[0])
        end_row = max(start[0], end[0])
        deleted = doc.delete_lines(start_row, end_row)
        state.registers.yank(deleted, linewise=True, is_delete=True)
    else:
        start, end = _charwise_range(doc, start, end, obj_type)
        deleted = doc.delete_range(start, end)
        state.registers.yank(deleted, linewise=False, is_delete=True)
        doc.move_cursor(start)

    return OperatorResult(success=True, deleted_text=deleted)


def operator_change(
    doc: DocumentWrapper,
    state: VimState,
    start: tuple[int, int],
    end: tuple[int, int],
    obj_type: TextObjectType,
) -> OperatorResult:
    """Delete text and enter insert mode (c operator)."""
    result = operator_delete(doc, state, start, end, obj_type)
    result.enter_insert = True
    return result


def operator_yank(
    doc: DocumentWrapper,
    state: VimState,
    start: tuple[int, int],
    end: tuple[int, int],
    obj_type: TextObjectType,
) -> OperatorResult:
    """Copy text to register (y operator)."""
    if obj_type == TextObjectType.LINEWISE:
        start_row = min(start[0], end[0])
        end_row = max(start[0], end[0])
        text = doc.get_line_range(start_row, end_row)
        state.registers.yank(text, linewise=True)
    else:
        start, end = _charwise_range(doc, start, end, obj_type)
        text = doc.get_text_between(start, end)
        state.registers.yank(text, linewise=False)
        doc.move_cursor(start)

    return OperatorResult(success=True)


# ─────────────────────────────────────────────────────────────────
# Operator Registry
# ─────────────────────────────────────────────────────────────────

OPERATOR_HANDLERS: dict[str, OperatorFunc] = {
    "operator_delete": operator_delete,
    "operator_change": operator_change,
    "operator_yank": operator_yank,
}


def get_operator_handler(name: str) -> OperatorFunc | None:
    """Get an operator function by handler name."""
    return OPERATOR_HANDLERS.get(name)
