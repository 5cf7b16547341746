"""Search-related settings.

Settings come in as the plain dictionary the host application keeps;
only the ``vim_*`` keys below are read.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from typing import Any

SETTINGS_PREFIX = "vim_"


@dataclass(frozen=True)
class SearchSettings:
    """Options that change how searches are compiled and previewed."""

    ignorecase: bool = False
    smartcase: bool = False
    visualstar: bool = False  # * and # in visual mode search for the selection
    incsearch: bool = True

    @classmethod
    def defaults(cls) -> dict[str, Any]:
        """Default values keyed the way they are persisted."""
        return cls().to_settings()

    @classmethod
    def from_settings(cls, settings: dict[str, Any]) -> SearchSettings:
        """Build settings from a settings dictionary.

        Raises:
            ValueError: If a known key holds a non-boolean value.
        """
        values: dict[str, bool] = {}
        for item in fields(cls):
            key = SETTINGS_PREFIX + item.name
            if key not in settings:
                continue
            value = settings[key]
            if not isinstance(value, bool):
                raise ValueError(f'"{key}" must be a boolean.')
            values[item.name] = value
        return cls(**values)

    def to_settings(self) -> dict[str, Any]:
        return {SETTINGS_PREFIX + item.name: getattr(self, item.name) for item in fields(self)}


def load_search_settings(settings: dict[str, Any] | None) -> SearchSettings:
    """Load settings, falling back to defaults when they are invalid."""
    if not settings:
        return SearchSettings()
    try:
        return SearchSettings.from_settings(settings)
    except ValueError as exc:
        print(f"[vimsearch] Failed to load search settings: {exc}", file=sys.stderr)
        return SearchSettings()
