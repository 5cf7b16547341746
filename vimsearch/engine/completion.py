"""Tab completion for the ex command line.

Two contexts are recognised from the text before the cursor: a bare command
word (``:ed|``) completes command names, and a command followed by a space
(``:e src/ma|``) completes paths. Candidates are the remaining suffixes of
the matching names, sorted.
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Protocol

from .line_buffer import LineBuffer

logger = logging.getLogger(__name__)

# \s* allows the extra space in ':  edit'
COMMAND_CONTEXT_RE = re.compile(r"^\s*\w+$")
PATH_CONTEXT_RE = re.compile(r"^\s*\w+\s+")
DOT_ENTRY_RE = re.compile(r"^\.\.?$")


@dataclass
class CompletionState:
    """Candidates of the current completion cycle.

    ``anchor_text`` / ``anchor_cursor_index`` snapshot the buffer before the
    first completion so every cycle is rebuilt from the same text.
    """

    candidates: list[str] = field(default_factory=list)
    active_index: int = 0
    anchor_text: str = ""
    anchor_cursor_index: int = 0

    @property
    def can_cycle(self) -> bool:
        return bool(self.candidates)


@dataclass(frozen=True)
class PathDetails:
    """A partial path split for listing."""

    directory: str  # Directory to list
    base_name: str  # Entries must start with this
    partial_path: str  # Normalised text to put back in the buffer


@dataclass(frozen=True)
class CompletionLookup:
    """Result of one candidate lookup."""

    eval_text: str  # Text before the cursor, possibly normalised
    rest_text: str  # Text after the cursor
    candidates: list[str]


class DirectoryLister(Protocol):
    def resolve(self, partial_path: str) -> PathDetails: ...

    async def list(self, directory: str, include_dot_entries: bool = False) -> list[str]: ...


class LocalDirectoryLister:
    """Lists the local filesystem relative to ``cwd``."""

    def __init__(self, cwd: str | Path | None = None) -> None:
        self._cwd = Path(cwd) if cwd is not None else Path.cwd()

    def resolve(self, partial_path: str) -> PathDetails:
        partial_path = partial_path.replace(os.sep, "/")
        expanded = os.path.expanduser(partial_path)
        if "/" in partial_path:
            head, base_name = expanded.rsplit("/", 1)
            directory = head or "/"
        else:
            directory, base_name = "", expanded
        full_dir = self._cwd / directory if directory else self._cwd
        return PathDetails(directory=str(full_dir), base_name=base_name, partial_path=partial_path)

    async def list(self, directory: str, include_dot_entries: bool = False) -> list[str]:
        """Entry names in ``directory``; directories get a trailing ``/``."""
        return await asyncio.to_thread(self._list_sync, directory, include_dot_entries)

    @staticmethod
    def _list_sync(directory: str, include_dot_entries: bool) -> list[str]:
        entries = []
        for entry in Path(directory).iterdir():
            entries.append(entry.name + "/" if entry.is_dir() else entry.name)
        if include_dot_entries:
            entries.extend(["./", "../"])
        return entries


class CompletionEngine:
    """Computes and cycles completion candidates for a LineBuffer."""

    def __init__(
        self,
        command_names: Callable[[], list[str]],
        lister: DirectoryLister | None = None,
    ) -> None:
        self._command_names = command_names
        self._lister = lister or LocalDirectoryLister()

    async def lookup(self, text: str, cursor_index: int) -> CompletionLookup:
        """Candidates for the text before ``cursor_index``.

        Raises:
            OSError: If the directory listing fails.
        """
        eval_text = text[:cursor_index]
        rest_text = text[cursor_index:]

        if COMMAND_CONTEXT_RE.match(eval_text):
            prefix = eval_text.lstrip()
            candidates = sorted(
                name[len(prefix):] for name in self._command_names() if name.startswith(prefix)
            )
            return CompletionLookup(eval_text, rest_text, candidates)

        path_context = PATH_CONTEXT_RE.match(eval_text)
        if path_context:
            command_part = eval_text[:path_context.end()]
            details = self._lister.resolve(eval_text[path_context.end():])
            eval_text = command_part + details.partial_path

            include_dots = bool(DOT_ENTRY_RE.match(details.base_name))
            names = await self._lister.list(details.directory, include_dots)
            candidates = sorted(
                name[len(details.base_name):] for name in names if name.startswith(details.base_name)
            )
            logger.debug("path completion in %s: %d candidates", details.directory, len(candidates))
            return CompletionLookup(eval_text, rest_text, candidates)

        return CompletionLookup(eval_text, rest_text, [])

    def apply(
        self, buffer: LineBuffer, state: CompletionState, lookup: CompletionLookup, forward: bool
    ) -> None:
        """Start a completion cycle from a fresh lookup."""
        candidates = lookup.candidates
        index = 0 if forward else len(candidates) - 1

        # A single item is filled in directly, so the next tab looks up again
        state.candidates = candidates if len(candidates) > 1 else []
        state.active_index = max(0, index)
        state.anchor_text = lookup.eval_text + lookup.rest_text
        state.anchor_cursor_index = len(lookup.eval_text)

        completion = candidates[index] if candidates else ""
        buffer.set(lookup.eval_text + completion + lookup.rest_text)
        buffer.cursor_index = len(buffer.text) - len(lookup.rest_text)

    def cycle(self, buffer: LineBuffer, state: CompletionState, forward: bool) -> None:
        """Move to the next/previous candidate, rebuilding from the anchor."""
        count = len(state.candidates)
        if count == 0:
            return

        step = 1 if forward else -1
        state.active_index = (state.active_index + step) % count

        eval_text = state.anchor_text[:state.anchor_cursor_index]
        rest_text = state.anchor_text[state.anchor_cursor_index:]
        buffer.set(eval_text + state.candidates[state.active_index] + rest_text)
        buffer.cursor_index = len(buffer.text) - len(rest_text)
