"""Search and command history.

A ``History`` is an append-only list shared by every prompt of one kind.
Each prompt recalls entries through its own ``HistoryCursor``.
"""

from __future__ import annotations


class History:
    """Append-only list of confirmed search patterns or command lines."""

    def __init__(self, entries: list[str] | None = None) -> None:
        self._entries: list[str] = list(entries or [])

    def add(self, entry: str) -> None:
        """Append an entry. Empty entries and direct repeats are skipped."""
        if not entry:
            return
        if self._entries and self._entries[-1] == entry:
            return
        self._entries.append(entry)

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> str:
        return self._entries[index]


class HistoryCursor:
    """Recall position into a History for one open prompt.

    ``index`` ranges over ``[0, len(history)]``; ``len(history)`` means the
    freshly typed text, which is saved on the first step back.
    """

    def __init__(self, history: History) -> None:
        self._history = history
        self.index = len(history)
        self._typed_text = ""

    def older(self, current_text: str) -> str | None:
        """Step to the previous entry. Returns None at the oldest entry."""
        if self.index <= 0:
            return None
        if self.index >= len(self._history):
            self._typed_text = current_text
            self.index = len(self._history)
        self.index -= 1
        return self._history[self.index]

    def newer(self) -> str | None:
        """Step to the next entry, or back to the typed text past the newest."""
        if self.index >= len(self._history):
            return None
        self.index += 1
        if self.index == len(self._history):
            return self._typed_text
        return self._history[self.index]
