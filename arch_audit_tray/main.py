"""
Entry point for the arch-audit-tray application.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from PySide6.QtWidgets import QApplication

from arch_audit_tray import logger as app_logger
from arch_audit_tray.app import TrayApplication
from arch_audit_tray.settings import SettingsManager
from arch_audit_tray.status import Icon, InvalidIconError
from arch_audit_tray.tray import TrayDisplay
from arch_audit_tray.watcher import WatcherError

_LOGGER = app_logger.get_logger()


def _icon_argument(value: str) -> Icon:
    try:
        return Icon.from_name(value)
    except InvalidIconError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arch-audit-tray",
        description="Tray icon notifying about security advisories for installed packages.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output to stderr")
    parser.add_argument("-c", "--config", type=Path, help="path to the TOML config file")
    parser.add_argument(
        "--debug-icon",
        type=_icon_argument,
        metavar="{check,alert,cross}",
        help="only show the given icon, for testing icon themes",
    )
    return parser


def _run_debug_icon(qt_argv: List[str], settings, icon: Icon) -> int:
    app = QApplication(qt_argv)
    app.setQuitOnLastWindowClosed(False)
    display = TrayDisplay(settings.icon_theme, initial_icon=icon)
    display.show()
    return app.exec()


def _run_tray(qt_argv: List[str], settings) -> int:
    app = QApplication(qt_argv)
    app.setQuitOnLastWindowClosed(False)
    tray_app = TrayApplication(settings=settings)
    try:
        tray_app.start()
    except WatcherError as exc:
        _LOGGER.error("Failed to start: {}", exc)
        return 1
    try:
        return app.exec()
    finally:
        tray_app.shutdown()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    app_logger.configure(app_logger.stderr_level(args.verbose))

    settings = SettingsManager(args.config).read_settings()
    qt_argv = [sys.argv[0]]
    if args.debug_icon is not None:
        return _run_debug_icon(qt_argv, settings, args.debug_icon)
    return _run_tray(qt_argv, settings)


if __name__ == "__main__":
    raise SystemExit(main())
