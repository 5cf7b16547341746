"""vimsearch - Vim search and command-line mode for Textual text areas."""

from .engine import KeyResult, SearchSettings, VimEngine, VimMode
from .logging_config import setup_logging

__version__ = "0.1.0"

__all__ = [
    "KeyResult",
    "SearchSettings",
    "VimEngine",
    "VimMode",
    "setup_logging",
]
