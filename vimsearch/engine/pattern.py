"""Search pattern compilation.

Search needles use Python regular expression syntax plus the vim escapes
``\\<`` / ``\\>`` (word boundaries) and ``\\c`` / ``\\C`` (force ignore-case /
match-case). Needles taken verbatim from the document are escaped first
so they match literally.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING

from .errors import ErrorCode, VimError

if TYPE_CHECKING:
    from .settings import SearchSettings

WORD_CHAR = re.compile(r"\w")
ESCAPED_CHAR = re.compile(r"\\.")


def is_word_char(char: str) -> bool:
    return bool(WORD_CHAR.match(char))


@dataclass(frozen=True)
class CaseFlags:
    """Case sensitivity policy for one search."""

    ignorecase: bool = False
    smartcase: bool = False
    ignore_smartcase: bool = False  # * and # only honour ignorecase

    @classmethod
    def from_settings(cls, settings: SearchSettings, ignore_smartcase: bool = False) -> CaseFlags:
        return cls(
            ignorecase=settings.ignorecase,
            smartcase=settings.smartcase,
            ignore_smartcase=ignore_smartcase,
        )


@dataclass(frozen=True)
class SearchPattern:
    """An immutable search needle plus the flags it is compiled with.

    ``is_exact`` is dropped when the needle starts or ends with a non-word
    character, where word-boundary anchors cannot match.
    """

    needle: str
    is_exact: bool = False
    case: CaseFlags = field(default_factory=CaseFlags)

    def __post_init__(self) -> None:
        if self.is_exact and not self._has_word_edges(self.needle):
            object.__setattr__(self, "is_exact", False)

    @classmethod
    def literal(cls, text: str, is_exact: bool = False, case: CaseFlags | None = None) -> SearchPattern:
        """Pattern that matches ``text`` literally (taken from the document)."""
        if is_exact and not cls._has_word_edges(text):
            is_exact = False
        return cls(needle=re.escape(text), is_exact=is_exact, case=case or CaseFlags())

    @staticmethod
    def _has_word_edges(text: str) -> bool:
        return bool(text) and is_word_char(text[0]) and is_word_char(text[-1])

    @property
    def search_string(self) -> str:
        """The pattern as shown to the user and stored in history/registers."""
        if self.is_exact:
            return f"\\<{self.needle}\\>"
        return self.needle

    @property
    def is_case_sensitive(self) -> bool:
        # Escape pairs only: in "\\c" the backslash itself is escaped
        escaped = {pair[1] for pair in ESCAPED_CHAR.findall(self.needle)}
        if "c" in escaped:
            return False
        if "C" in escaped:
            return True
        if not self.case.ignorecase:
            return True
        if self.case.smartcase and not self.case.ignore_smartcase:
            unescaped = ESCAPED_CHAR.sub("", self.needle)
            return any(char.isupper() for char in unescaped)
        return False

    def compile(self) -> re.Pattern[str]:
        """Compile to a Python regex.

        Raises:
            VimError: ``E383`` if the needle is not a valid pattern.
        """
        flags = re.MULTILINE
        if not self.is_case_sensitive:
            flags |= re.IGNORECASE
        return _compile(translate_pattern(self.search_string), flags, self.search_string)


def translate_pattern(pattern: str) -> str:
    """Turn vim-only escapes into their Python regex equivalents."""
    out: list[str] = []
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "\\" and i + 1 < len(pattern):
            nxt = pattern[i + 1]
            if nxt in "<>":
                out.append(r"\b")
            elif nxt not in "cC":
                out.append(char + nxt)
            i += 2
            continue
        out.append(char)
        i += 1
    return "".join(out)


@lru_cache(maxsize=64)
def _compile(source: str, flags: int, display: str) -> re.Pattern[str]:
    try:
        return re.compile(source, flags)
    except re.error as exc:
        raise VimError.from_code(ErrorCode.INVALID_SEARCH_STRING, display) from exc
