"""Unit tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from arch_audit_tray.settings import (
    CONFIG_ENV_VAR,
    DEFAULT_WATCH_PATH,
    Settings,
    SettingsManager,
)
from arch_audit_tray.theme import Theme


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(content, encoding="utf-8")
    return path


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    settings = SettingsManager(tmp_path / "absent.toml").read_settings()

    assert settings == Settings()
    assert settings.icon_theme == Theme.default()
    assert settings.watch_path == DEFAULT_WATCH_PATH


def test_values_are_read(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        'icon_theme = "dark"\n'
        'watch_path = "/tmp/pacman"\n'
        'arch_audit_binary = "/opt/bin/arch-audit"\n'
        "upgradable_only = false\n",
    )

    settings = SettingsManager(path).read_settings()

    assert settings.icon_theme == Theme("dark")
    assert settings.watch_path == Path("/tmp/pacman")
    assert settings.arch_audit_binary == "/opt/bin/arch-audit"
    assert settings.upgradable_only is False


@pytest.mark.parametrize("theme", ['"../etc"', '"Dark"', '"dark2"', '""', "3"])
def test_invalid_theme_falls_back_to_default(tmp_path: Path, theme: str) -> None:
    path = _write(tmp_path, f"icon_theme = {theme}\n")

    assert SettingsManager(path).read_settings().icon_theme == Theme.default()


def test_invalid_values_fall_back_individually(tmp_path: Path) -> None:
    path = _write(tmp_path, 'icon_theme = "light"\nupgradable_only = "yes"\narch_audit_binary = 5\n')

    settings = SettingsManager(path).read_settings()

    assert settings.icon_theme == Theme("light")
    assert settings.upgradable_only is True
    assert settings.arch_audit_binary == "arch-audit"


def test_unparseable_file_gives_defaults(tmp_path: Path) -> None:
    path = _write(tmp_path, "icon_theme = = nope\n")

    assert SettingsManager(path).read_settings() == Settings()


def test_environment_variable_selects_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _write(tmp_path, 'icon_theme = "mono"\n')
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    manager = SettingsManager()

    assert manager.path == path
    assert manager.read_settings().icon_theme == Theme("mono")
