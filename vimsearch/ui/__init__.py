"""Textual widgets for vimsearch."""

from .command_line import VimCommandLine, render_command_line
from .text_area import VimTextArea, convert_key

__all__ = [
    "VimCommandLine",
    "VimTextArea",
    "convert_key",
    "render_command_line",
]
