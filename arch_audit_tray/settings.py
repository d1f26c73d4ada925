"""
TOML-backed configuration for the tray application.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from arch_audit_tray.checker import DEFAULT_BINARY
from arch_audit_tray.logger import get_logger
from arch_audit_tray.theme import Theme, ThemeValidationError

_LOGGER = get_logger()

CONFIG_ENV_VAR = "ARCH_AUDIT_TRAY_CONFIG"
DEFAULT_CONFIG_PATH = Path("/etc/arch-audit-tray/config.toml")
DEFAULT_WATCH_PATH = Path("/var/lib/pacman/local")


@dataclass(eq=True)
class Settings:
    icon_theme: Theme = field(default_factory=Theme.default)
    watch_path: Path = DEFAULT_WATCH_PATH
    arch_audit_binary: str = DEFAULT_BINARY
    upgradable_only: bool = True


class SettingsManager:
    """Loads settings from a TOML file, replacing invalid values by defaults."""

    def __init__(self, path: Optional[Path] = None) -> None:
        if path is None:
            path = Path(os.environ.get(CONFIG_ENV_VAR, str(DEFAULT_CONFIG_PATH)))
        self.path = Path(path)

    def read_settings(self) -> Settings:
        raw = self._load()
        if raw is None:
            return Settings()

        defaults = Settings()
        return Settings(
            icon_theme=self._read_theme(raw, defaults.icon_theme),
            watch_path=self._read_path(raw, "watch_path", defaults.watch_path),
            arch_audit_binary=self._read_string(raw, "arch_audit_binary", defaults.arch_audit_binary),
            upgradable_only=self._read_bool(raw, "upgradable_only", defaults.upgradable_only),
        )

    def _load(self) -> Optional[Dict[str, Any]]:
        try:
            with self.path.open("rb") as handle:
                return tomllib.load(handle)
        except FileNotFoundError:
            _LOGGER.debug("No config file at {}, using defaults", self.path)
            return None
        except (OSError, tomllib.TOMLDecodeError) as exc:
            _LOGGER.error("Failed to read config {}: {}. Using defaults.", self.path, exc)
            return None

    def _read_theme(self, raw: Dict[str, Any], default: Theme) -> Theme:
        value = raw.get("icon_theme")
        if value is None:
            return default
        try:
            return Theme(value)
        except ThemeValidationError as exc:
            _LOGGER.warning("{}. Falling back to theme '{}'.", exc, default)
            return default

    def _read_path(self, raw: Dict[str, Any], name: str, default: Path) -> Path:
        value = self._read_string(raw, name, None)
        if value is None:
            return default
        return Path(value)

    def _read_string(self, raw: Dict[str, Any], name: str, default: Optional[str]) -> Optional[str]:
        value = raw.get(name)
        if value is None:
            return default
        if not isinstance(value, str) or not value.strip():
            _LOGGER.warning("Config value {} must be a non-empty string, got {!r}.", name, value)
            return default
        return value.strip()

    def _read_bool(self, raw: Dict[str, Any], name: str, default: bool) -> bool:
        value = raw.get(name)
        if value is None:
            return default
        if not isinstance(value, bool):
            _LOGGER.warning("Config value {} must be a boolean, got {!r}.", name, value)
            return default
        return value
