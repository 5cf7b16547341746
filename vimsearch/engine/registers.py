"""Vim registers.

The command line only reads registers (``<C-r>{reg}``); searches write the
read-only ``/`` register and operators write the unnamed one.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import Enum, auto

UNNAMED_REGISTER = '"'
YANK_REGISTER = "0"
SMALL_DELETE_REGISTER = "-"
SEARCH_REGISTER = "/"

READONLY_REGISTERS = frozenset({"/", ":", ".", "%", "#"})
VALID_REGISTERS = frozenset(
    string.ascii_letters + string.digits + '"-*+' + "".join(READONLY_REGISTERS)
)


class RegisterMode(Enum):
    """How a register's text is put back into a document."""

    CHARACTER_WISE = auto()
    LINE_WISE = auto()
    BLOCK_WISE = auto()


@dataclass
class RecordedKeys:
    """A recorded macro: the keys pressed for each action, in order."""

    actions: list[list[str]] = field(default_factory=list)

    def keystrokes(self) -> list[str]:
        keys: list[str] = []
        for action in self.actions:
            keys.extend(action)
        return keys


@dataclass
class Register:
    """A vim register holding yanked/deleted/recorded content."""

    content: str | list[str] | RecordedKeys = ""
    mode: RegisterMode = RegisterMode.CHARACTER_WISE

    @property
    def linewise(self) -> bool:
        return self.mode == RegisterMode.LINE_WISE

    def as_text(self) -> str:
        """Text inserted when the register is pasted into the command line."""
        if isinstance(self.content, RecordedKeys):
            text = "\n".join(self.content.keystrokes())
        elif isinstance(self.content, list):
            text = "\n".join(self.content)
        else:
            text = self.content

        if self.linewise:
            text += "\n"
        return text


class RegisterStore:
    """Named registers, looked up the way vim does (``A`` reads ``a``)."""

    def __init__(self) -> None:
        self._registers: dict[str, Register] = {}

    @staticmethod
    def is_valid(name: str) -> bool:
        return len(name) == 1 and name in VALID_REGISTERS

    @staticmethod
    def _normalize(name: str) -> str:
        return name.lower() if name in string.ascii_uppercase else name

    def get(self, name: str) -> Register | None:
        """Get a register, or None if nothing was ever stored in it."""
        if not self.is_valid(name):
            return None
        return self._registers.get(self._normalize(name))

    def set(
        self,
        name: str,
        content: str | list[str] | RecordedKeys,
        mode: RegisterMode = RegisterMode.CHARACTER_WISE,
    ) -> None:
        """Store content in a writable register. Uppercase names append."""
        if not self.is_valid(name) or name in READONLY_REGISTERS:
            return

        key = self._normalize(name)
        existing = self._registers.get(key)
        if name in string.ascii_uppercase and existing and isinstance(content, str):
            if isinstance(existing.content, str):
                content = existing.content + content
        self._registers[key] = Register(content=content, mode=mode)

    def set_readonly(self, name: str, text: str) -> None:
        """Overwrite a read-only register (``/``, ``:``, ...)."""
        self._registers[name] = Register(content=text)

    def yank(self, text: str, linewise: bool = False, register: str = UNNAMED_REGISTER,
             is_delete: bool = False) -> None:
        """Store operator text in the unnamed register and its companions."""
        mode = RegisterMode.LINE_WISE if linewise else RegisterMode.CHARACTER_WISE
        reg = Register(content=text, mode=mode)

        # Always update unnamed register
        self._registers[UNNAMED_REGISTER] = reg

        if not is_delete:
            self._registers[YANK_REGISTER] = reg
        elif not linewise and "\n" not in text:
            self._registers[SMALL_DELETE_REGISTER] = reg

        if register not in (UNNAMED_REGISTER, YANK_REGISTER, SMALL_DELETE_REGISTER):
            self.set(register, text, mode)
