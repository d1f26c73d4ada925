"""Unit tests for icon theme validation."""

from __future__ import annotations

import pytest

from arch_audit_tray.theme import Theme, ThemeValidationError, parse_theme


def test_default_round_trips() -> None:
    theme = parse_theme("default")
    assert theme.name == "default"
    assert str(theme) == "default"
    assert theme == Theme.default()


def test_lowercase_name_accepted() -> None:
    assert parse_theme("check").name == "check"


@pytest.mark.parametrize("raw", ["../etc", "Check", "check1", "", "dark theme", "a/b", "ünicode"])
def test_invalid_names_rejected(raw: str) -> None:
    with pytest.raises(ThemeValidationError) as excinfo:
        parse_theme(raw)
    assert repr(raw) in str(excinfo.value)


def test_direct_construction_is_validated_too() -> None:
    with pytest.raises(ThemeValidationError):
        Theme("..")


def test_non_string_rejected() -> None:
    with pytest.raises(ThemeValidationError):
        Theme(42)  # type: ignore[arg-type]
