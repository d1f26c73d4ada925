"""
Icon theme names and their validation.

A theme name ends up as a path segment below the icon directories, so it is
checked once when it is read from configuration. After that point a
``Theme`` is safe to join onto a path.
"""

from __future__ import annotations

import string
from dataclasses import dataclass

DEFAULT_THEME_NAME = "default"
_ALLOWED = frozenset(string.ascii_lowercase)


class ThemeValidationError(ValueError):
    """Raised when a theme name contains anything but lowercase ASCII letters."""


@dataclass(frozen=True, slots=True)
class Theme:
    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise ThemeValidationError(f"Theme must be a string, got {type(self.name).__name__}")
        if not self.name or not set(self.name) <= _ALLOWED:
            raise ThemeValidationError(f"Theme contains invalid characters: {self.name!r}")

    @classmethod
    def default(cls) -> "Theme":
        return cls(DEFAULT_THEME_NAME)

    def __str__(self) -> str:
        return self.name


def parse_theme(raw: str) -> Theme:
    return Theme(raw)
