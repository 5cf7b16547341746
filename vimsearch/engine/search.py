"""Search sessions and the match index they query.

A ``SearchState`` is one search: a direction, the cursor position it was
started from and an immutable ``SearchPattern``. Matches are recomputed
from the document on every query, since the text may change in between.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from .pattern import CaseFlags, SearchPattern
from .state import SearchDirection

if TYPE_CHECKING:
    from .document import DocumentWrapper
    from .settings import SearchSettings

Location = tuple[int, int]


@dataclass(frozen=True)
class MatchRange:
    """A single match: ``start`` inclusive, ``end`` exclusive, 1-based ``index``."""

    start: Location
    end: Location
    index: int


@dataclass(frozen=True)
class SearchState:
    """One search invocation."""

    direction: SearchDirection
    origin: Location
    pattern: SearchPattern = field(default_factory=lambda: SearchPattern(""))

    @classmethod
    def create(
        cls,
        direction: SearchDirection,
        origin: Location,
        needle: str,
        settings: SearchSettings,
        is_exact: bool = False,
        ignore_smartcase: bool = False,
    ) -> SearchState:
        """Build a search from a user-typed needle."""
        case = CaseFlags.from_settings(settings, ignore_smartcase=ignore_smartcase)
        return cls(direction, origin, SearchPattern(needle, is_exact=is_exact, case=case))

    @property
    def search_string(self) -> str:
        return self.pattern.search_string

    def with_needle(self, needle: str) -> SearchState:
        """A new search with the same direction, origin and flags."""
        return replace(self, pattern=replace(self.pattern, needle=needle))

    def reversed(self) -> SearchState:
        return replace(self, direction=self.direction.reverse)

    # ─────────────────────────────────────────────────────────────────
    # Match index
    # ─────────────────────────────────────────────────────────────────

    def match_ranges(self, doc: DocumentWrapper) -> list[MatchRange]:
        """All matches in document order.

        Raises:
            VimError: ``E383`` if the needle does not compile.
        """
        if not self.pattern.needle:
            return []

        regex = self.pattern.compile()
        to_location = doc.offset_converter()
        # Zero-width matches (^, $, \<) are kept as empty ranges
        return [
            MatchRange(to_location(match.start()), to_location(match.end()), index)
            for index, match in enumerate(regex.finditer(doc.text), start=1)
        ]

    def match_count(self, doc: DocumentWrapper) -> int:
        return len(self.match_ranges(doc))

    def next_match(self, doc: DocumentWrapper, from_pos: Location,
                   direction: SearchDirection | None = None) -> tuple[MatchRange, int] | None:
        """The next match from ``from_pos``, wrapping around the document once.

        Returns ``(match, total)`` or None when there are no matches at all.
        """
        ranges = self.match_ranges(doc)
        if not ranges:
            return None

        direction = direction or self.direction
        if direction is SearchDirection.FORWARD:
            for match in ranges:
                if match.start > from_pos:
                    return match, len(ranges)
            return ranges[0], len(ranges)

        for match in reversed(ranges):
            if match.start < from_pos:
                return match, len(ranges)
        return ranges[-1], len(ranges)

    def containing_match(self, doc: DocumentWrapper, at: Location) -> MatchRange | None:
        """The match whose span contains ``at``, without wrapping."""
        for match in self.match_ranges(doc):
            if match.start <= at < match.end:
                return match
            if match.start > at:
                break
        return None
