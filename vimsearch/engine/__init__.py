"""Vim search and command-line engine.

This module provides vim's search commands (/, ?, *, #, n, N, gn) and its
ex command line on top of Textual's TextArea.

Architecture:
    VimEngine - Main controller that handles key events
    VimState - Tracks mode, pending operator, registers, last search, etc.
    DocumentWrapper - Adapts TextArea to vim-style operations
    SearchState - One search: direction, origin and compiled pattern
    CommandLine - Open : / ? prompt (ExCommandLine, SearchCommandLine)
    VimKeymapConfig - Configurable key bindings

Usage:
    from vimsearch.engine import VimEngine

    engine = VimEngine(text_area)
    engine.set_mode_callback(on_mode_change)

    # In key handler:
    result = await engine.handle_key(key)
    if result.consumed:
        event.prevent_default()
"""

from .state import SearchContext, SearchDirection, TextObjectType, VimMode, VimState
from .document import DocumentWrapper
from .engine import KeyResult, VimEngine
from .errors import ErrorCode, VimError
from .history import History, HistoryCursor
from .keymap import (
    VimBinding,
    VimKeymapConfig,
    VimKeymapProvider,
    get_vim_keymap,
    reset_vim_keymap,
    set_vim_keymap,
)
from .command import CommandAction, CommandResult, ExCommand, VimCommandHandler
from .command_line import CommandLine, ExCommandLine, SearchCommandLine
from .completion import CompletionEngine, LocalDirectoryLister, PathDetails
from .pattern import SearchPattern
from .registers import Register, RegisterMode, RegisterStore
from .search import MatchRange, SearchState
from .settings import SearchSettings, load_search_settings
from .status import StatusLine

__all__ = [
    # Core
    "VimEngine",
    "VimState",
    "VimMode",
    "KeyResult",
    # Document
    "DocumentWrapper",
    # State types
    "TextObjectType",
    "SearchContext",
    "SearchDirection",
    # Search
    "SearchPattern",
    "SearchState",
    "MatchRange",
    "History",
    "HistoryCursor",
    # Errors and status
    "ErrorCode",
    "VimError",
    "StatusLine",
    # Registers
    "Register",
    "RegisterMode",
    "RegisterStore",
    # Settings
    "SearchSettings",
    "load_search_settings",
    # Keymap
    "VimBinding",
    "VimKeymapConfig",
    "VimKeymapProvider",
    "get_vim_keymap",
    "set_vim_keymap",
    "reset_vim_keymap",
    # Command mode
    "CommandAction",
    "CommandResult",
    "ExCommand",
    "VimCommandHandler",
    "CommandLine",
    "ExCommandLine",
    "SearchCommandLine",
    "CompletionEngine",
    "LocalDirectoryLister",
    "PathDetails",
]
