"""Clipboard access for command-line paste."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

import pyperclip

logger = logging.getLogger(__name__)


class Clipboard(Protocol):
    async def paste(self) -> str: ...


class SystemClipboard:
    """System clipboard via pyperclip.

    pyperclip needs platform support (xclip, pbcopy, ...); without it a paste
    inserts nothing.
    """

    async def paste(self) -> str:
        try:
            return await asyncio.to_thread(pyperclip.paste)
        except pyperclip.PyperclipException as exc:
            logger.debug("system clipboard unavailable: %s", exc)
            return ""
