"""Vim keymap configuration.

Defines the search and command-line key bindings in a configurable way:
- Motions (can be used standalone or as operator targets)
- Operators (wait for motion/text object)
- Text objects (gn, gN)
- Multi-char motions (g*, g#)
- Command-line editing keys for the : / ? prompts

Key names use Textual's spelling ("escape", "ctrl+r", "shift+tab").
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto


class BindingType(Enum):
    """Type of vim key binding."""

    MOTION = auto()          # Movement command (*, n, etc.)
    OPERATOR = auto()        # Operates on range (d, c, y)
    TEXT_OBJECT = auto()     # Text object (gn, gN)
    MODE_SWITCH = auto()     # Mode change (v, V, :, /, ?)
    PENDING = auto()         # Waits for next key (<C-r>)
    COMMAND_LINE = auto()    # Editing key inside a prompt


PROMPTS = ("command", "search")


@dataclass
class VimBinding:
    """Definition of a vim key binding."""

    key: str                          # Key or key sequence (e.g., "n", "g*", "gn")
    type: BindingType                 # Type of binding
    handler: str                      # Handler function name
    description: str = ""             # Human-readable description
    modes: tuple[str, ...] = ("normal",)  # Which modes this applies to


def _cmdline(key: str, handler: str, description: str, modes: tuple[str, ...] = PROMPTS) -> VimBinding:
    return VimBinding(key, BindingType.COMMAND_LINE, handler, description, modes=modes)


@dataclass
class VimKeymapConfig:
    """Configuration for vim keybindings."""

    # ─────────────────────────────────────────────────────────────────
    # Motions - cursor movement commands
    # ─────────────────────────────────────────────────────────────────
    motions: dict[str, VimBinding] = field(default_factory=lambda: {
        "*": VimBinding("*", BindingType.MOTION, "motion_search_word_forward", "Search word forward"),
        "#": VimBinding("#", BindingType.MOTION, "motion_search_word_backward", "Search word backward"),
        "g*": VimBinding("g*", BindingType.MOTION, "motion_search_partial_forward", "Search partial word forward",
                         modes=("normal", "visual")),
        "g#": VimBinding("g#", BindingType.MOTION, "motion_search_partial_backward", "Search partial word backward",
                         modes=("normal", "visual")),
        "n": VimBinding("n", BindingType.MOTION, "motion_search_next", "Next match", modes=("normal", "visual")),
        "N": VimBinding("N", BindingType.MOTION, "motion_search_previous", "Previous match",
                        modes=("normal", "visual")),
    })

    # ─────────────────────────────────────────────────────────────────
    # Visual mode specific motions (* and # honour visualstar)
    # ─────────────────────────────────────────────────────────────────
    visual_motions: dict[str, VimBinding] = field(default_factory=lambda: {
        "*": VimBinding("*", BindingType.MOTION, "motion_search_visual_forward", "Search selection forward",
                        modes=("visual",)),
        "#": VimBinding("#", BindingType.MOTION, "motion_search_visual_backward", "Search selection backward",
                        modes=("visual",)),
    })

    # ─────────────────────────────────────────────────────────────────
    # Operators - commands that operate on a range
    # ─────────────────────────────────────────────────────────────────
    operators: dict[str, VimBinding] = field(default_factory=lambda: {
        "d": VimBinding("d", BindingType.OPERATOR, "operator_delete", "Delete", modes=("normal", "visual")),
        "c": VimBinding("c", BindingType.OPERATOR, "operator_change", "Change", modes=("normal", "visual")),
        "y": VimBinding("y", BindingType.OPERATOR, "operator_yank", "Yank", modes=("normal", "visual")),
    })

    # ─────────────────────────────────────────────────────────────────
    # Text Objects - selections for operators
    # ─────────────────────────────────────────────────────────────────
    text_objects: dict[str, VimBinding] = field(default_factory=lambda: {
        "gn": VimBinding("gn", BindingType.TEXT_OBJECT, "textobj_search_forward", "Next match",
                         modes=("normal", "visual", "operator")),
        "gN": VimBinding("gN", BindingType.TEXT_OBJECT, "textobj_search_backward", "Previous match",
                         modes=("normal", "visual", "operator")),
    })

    # ─────────────────────────────────────────────────────────────────
    # Mode switches
    # ─────────────────────────────────────────────────────────────────
    mode_switches: dict[str, VimBinding] = field(default_factory=lambda: {
        "v": VimBinding("v", BindingType.MODE_SWITCH, "mode_visual", "Visual mode", modes=("normal", "visual")),
        "V": VimBinding("V", BindingType.MODE_SWITCH, "mode_visual_line", "Visual line mode",
                        modes=("normal", "visual")),
        "i": VimBinding("i", BindingType.MODE_SWITCH, "mode_insert", "Insert mode", modes=("normal",)),
        ":": VimBinding(":", BindingType.MODE_SWITCH, "mode_command", "Command mode", modes=("normal", "visual")),
        "/": VimBinding("/", BindingType.MODE_SWITCH, "mode_search_forward", "Search forward",
                        modes=("normal", "visual", "operator")),
        "?": VimBinding("?", BindingType.MODE_SWITCH, "mode_search_backward", "Search backward",
                        modes=("normal", "visual", "operator")),
    })

    # ─────────────────────────────────────────────────────────────────
    # Command line - editing keys inside : / ? prompts
    # ─────────────────────────────────────────────────────────────────
    command_line: dict[str, VimBinding] = field(default_factory=lambda: {
        "enter": _cmdline("enter", "cmdline_confirm", "Run"),
        "ctrl+m": _cmdline("ctrl+m", "cmdline_confirm", "Run"),
        "escape": _cmdline("escape", "cmdline_cancel", "Cancel"),
        "ctrl+c": _cmdline("ctrl+c", "cmdline_cancel", "Cancel"),
        "ctrl+[": _cmdline("ctrl+[", "cmdline_cancel", "Cancel"),
        "backspace": _cmdline("backspace", "cmdline_backspace", "Delete before cursor"),
        "shift+backspace": _cmdline("shift+backspace", "cmdline_backspace", "Delete before cursor"),
        "ctrl+h": _cmdline("ctrl+h", "cmdline_backspace", "Delete before cursor"),
        "delete": _cmdline("delete", "cmdline_delete", "Delete under cursor"),
        "home": _cmdline("home", "cmdline_home", "Start of line"),
        "ctrl+b": _cmdline("ctrl+b", "cmdline_home", "Start of line"),
        "end": _cmdline("end", "cmdline_end", "End of line"),
        "ctrl+e": _cmdline("ctrl+e", "cmdline_end", "End of line"),
        "ctrl+w": _cmdline("ctrl+w", "cmdline_delete_word", "Delete word"),
        "ctrl+backspace": _cmdline("ctrl+backspace", "cmdline_delete_word", "Delete word"),
        "ctrl+u": _cmdline("ctrl+u", "cmdline_delete_to_start", "Delete to start"),
        "left": _cmdline("left", "cmdline_left", "Left"),
        "right": _cmdline("right", "cmdline_right", "Right"),
        "ctrl+left": _cmdline("ctrl+left", "cmdline_word_left", "Word left"),
        "ctrl+right": _cmdline("ctrl+right", "cmdline_word_right", "Word right"),
        "up": _cmdline("up", "cmdline_history_back", "Older history"),
        "ctrl+p": _cmdline("ctrl+p", "cmdline_history_back", "Older history"),
        "down": _cmdline("down", "cmdline_history_forward", "Newer history"),
        "ctrl+n": _cmdline("ctrl+n", "cmdline_history_forward", "Newer history"),
        "ctrl+v": _cmdline("ctrl+v", "cmdline_paste", "Paste"),
        "tab": _cmdline("tab", "cmdline_complete_next", "Complete", modes=("command",)),
        "shift+tab": _cmdline("shift+tab", "cmdline_complete_previous", "Complete backward",
                              modes=("command",)),
        "ctrl+l": _cmdline("ctrl+l", "cmdline_next_match_char", "Add next match character",
                           modes=("search",)),
    })

    # ─────────────────────────────────────────────────────────────────
    # Pending commands (wait for next key)
    # ─────────────────────────────────────────────────────────────────
    pending: dict[str, VimBinding] = field(default_factory=lambda: {
        "ctrl+r": VimBinding("ctrl+r", BindingType.PENDING, "pending_insert_register", "Insert register",
                             modes=PROMPTS),
    })


class VimKeymapProvider(ABC):
    """Abstract base class for vim keymap providers."""

    @abstractmethod
    def get_config(self) -> VimKeymapConfig:
        """Get the keymap configuration."""
        pass

    def get_motion(self, key: str) -> VimBinding | None:
        """Get motion binding for a key."""
        return self.get_config().motions.get(key)

    def get_visual_motion(self, key: str) -> VimBinding | None:
        """Get motion binding for a key in visual mode."""
        return self.get_config().visual_motions.get(key) or self.get_motion(key)

    def get_operator(self, key: str) -> VimBinding | None:
        """Get operator binding for a key."""
        return self.get_config().operators.get(key)

    def get_text_object(self, key: str) -> VimBinding | None:
        """Get text object binding for a key sequence."""
        return self.get_config().text_objects.get(key)

    def get_mode_switch(self, key: str) -> VimBinding | None:
        """Get mode switch binding for a key."""
        return self.get_config().mode_switches.get(key)

    def get_command_line(self, key: str, prompt: str) -> VimBinding | None:
        """Get command-line binding for a key in the "command" or "search" prompt."""
        binding = self.get_config().command_line.get(key)
        if binding and prompt in binding.modes:
            return binding
        return None

    def get_pending(self, key: str) -> VimBinding | None:
        """Get pending command binding for a key."""
        return self.get_config().pending.get(key)

    def lookup(self, key: str, mode: str = "normal") -> VimBinding | None:
        """Look up any binding for a key in the given mode."""
        config = self.get_config()

        # Check each category
        for bindings in [
            config.motions,
            config.operators,
            config.text_objects,
            config.mode_switches,
            config.command_line,
            config.pending,
        ]:
            if key in bindings:
                binding = bindings[key]
                if mode in binding.modes or not binding.modes:
                    return binding

        return None

    def is_prefix(self, key: str) -> bool:
        """Check if key starts a multi-key sequence (g*, gn, ...)."""
        config = self.get_config()
        return any(
            len(seq) > 1 and seq.startswith(key)
            for bindings in (config.motions, config.text_objects)
            for seq in bindings
        )


class DefaultVimKeymapProvider(VimKeymapProvider):
    """Default vim keymap with standard bindings."""

    def __init__(self) -> None:
        self._config = VimKeymapConfig()

    def get_config(self) -> VimKeymapConfig:
        return self._config


# Global vim keymap instance
_vim_keymap_provider: VimKeymapProvider | None = None


def get_vim_keymap() -> VimKeymapProvider:
    """Get the current vim keymap provider."""
    global _vim_keymap_provider
    if _vim_keymap_provider is None:
        _vim_keymap_provider = DefaultVimKeymapProvider()
    return _vim_keymap_provider


def set_vim_keymap(provider: VimKeymapProvider) -> None:
    """Set the vim keymap provider (for testing or custom keymaps)."""
    global _vim_keymap_provider
    _vim_keymap_provider = provider


def reset_vim_keymap() -> None:
    """Reset to default vim keymap provider."""
    global _vim_keymap_provider
    _vim_keymap_provider = None
