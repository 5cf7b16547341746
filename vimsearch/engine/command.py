"""Vim command mode handler.

Handles ex-style commands like :w, :q, :wq, :e {file}, :noh, etc.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .errors import ErrorCode, VimError

COMMAND_RE = re.compile(r"^\s*(\w+)(!?)\s*(.*?)\s*$")


class CommandAction(Enum):
    """Actions that can result from command execution."""

    NONE = "none"
    QUIT = "quit"  # Exit
    QUIT_FORCE = "quit_force"  # Exit, discard changes
    WRITE = "write"  # Save
    WRITE_QUIT = "write_quit"  # Save and exit
    EDIT = "edit"  # Open the file in ``argument``
    NEW_FILE = "new_file"  # Open an empty buffer
    NO_HIGHLIGHT = "no_highlight"  # Hide search highlighting


@dataclass
class CommandResult:
    """Result of executing a command."""

    action: CommandAction = CommandAction.NONE
    message: str = ""
    error: bool = False
    argument: str = ""


@dataclass(frozen=True)
class ExCommand:
    """An ex command: ``abbreviation`` is the shortest accepted prefix of ``name``."""

    name: str
    abbreviation: str
    action: CommandAction
    bang_action: CommandAction | None = None

    def matches(self, word: str) -> bool:
        return word.startswith(self.abbreviation) and self.name.startswith(word)


BUILTIN_EX_COMMANDS: list[ExCommand] = [
    ExCommand("quit", "q", CommandAction.QUIT, CommandAction.QUIT_FORCE),
    ExCommand("write", "w", CommandAction.WRITE),
    ExCommand("wq", "wq", CommandAction.WRITE_QUIT),
    ExCommand("xit", "x", CommandAction.WRITE_QUIT),
    ExCommand("exit", "exi", CommandAction.WRITE_QUIT),
    ExCommand("edit", "e", CommandAction.EDIT),
    ExCommand("enew", "ene", CommandAction.NEW_FILE),
    ExCommand("nohlsearch", "noh", CommandAction.NO_HIGHLIGHT),
    ExCommand("help", "h", CommandAction.NONE),
]

HELP_TEXT = "Commands: :q (quit), :w (save), :wq (save & quit), :q! (force quit), :e {file}, :noh"


class VimCommandHandler:
    """Resolves and executes ex-style commands."""

    def __init__(self, commands: list[ExCommand] | None = None) -> None:
        self._commands: list[ExCommand] = list(commands or BUILTIN_EX_COMMANDS)

    def command_names(self) -> list[str]:
        """Full names of all registered commands, for completion."""
        return [command.name for command in self._commands]

    def register(self, command: ExCommand) -> None:
        self._commands.append(command)

    def resolve(self, word: str) -> ExCommand | None:
        for command in self._commands:
            if command.matches(word):
                return command
        return None

    def execute(self, text: str) -> CommandResult:
        """Execute a command line (without the leading ``:``)."""
        cmd = text.strip()
        if not cmd:
            return CommandResult()

        match = COMMAND_RE.match(cmd)
        command = self.resolve(match.group(1).lower()) if match else None
        if match is None or command is None:
            error = VimError.from_code(ErrorCode.NOT_AN_EDITOR_COMMAND, cmd)
            return CommandResult(error=True, message=error.message)

        bang, argument = match.group(2), match.group(3)
        action = command.action
        if bang and command.bang_action is not None:
            action = command.bang_action

        if command.name == "help":
            return CommandResult(message=HELP_TEXT)

        if action == CommandAction.WRITE:
            return CommandResult(action=action, argument=argument, message="Written")

        return CommandResult(action=action, argument=argument)
