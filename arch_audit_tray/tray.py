"""
System tray icon and menu showing the latest check result.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from PySide6.QtCore import QObject, QUrl
from PySide6.QtGui import QAction, QDesktopServices, QIcon
from PySide6.QtWidgets import QApplication, QMenu, QStyle, QSystemTrayIcon

from arch_audit_tray.events import ChannelClosed, TriggerChannel, TriggerEvent
from arch_audit_tray.icons import icon_path, resolve_theme_dir
from arch_audit_tray.logger import get_logger
from arch_audit_tray.status import Checking, Icon, MissingUpdates, Status, has_details
from arch_audit_tray.theme import Theme

_LOGGER = get_logger()

APP_NAME = "arch-audit-tray"
CHECK_FOR_UPDATES_TEXT = "Check for updates"
STARTING_TEXT = "Starting..."
QUIT_TEXT = "Quit"

_FALLBACK_PIXMAPS = {
    Icon.CHECK: QStyle.StandardPixmap.SP_DialogApplyButton,
    Icon.ALERT: QStyle.StandardPixmap.SP_MessageBoxWarning,
    Icon.CROSS: QStyle.StandardPixmap.SP_MessageBoxCritical,
}


def load_icons(theme: Theme) -> Dict[Icon, QIcon]:
    theme_dir = resolve_theme_dir(theme)
    if theme_dir is None:
        _LOGGER.warning("No icon directory found for theme '{}'; using standard icons.", theme)
    else:
        _LOGGER.debug("Using icons from {}", theme_dir)

    icons: Dict[Icon, QIcon] = {}
    for icon in Icon:
        path: Optional[Path] = icon_path(theme_dir, icon) if theme_dir else None
        if path is not None and path.is_file():
            icons[icon] = QIcon(str(path))
        else:
            icons[icon] = QApplication.style().standardIcon(_FALLBACK_PIXMAPS[icon])
    return icons


class TrayDisplay(QObject):
    """
    Renders statuses in the tray and forwards "Check for updates" clicks.

    Must be used from the GUI thread only; statuses reach it through the
    result channel.
    """

    def __init__(
        self,
        theme: Theme,
        triggers: Optional[TriggerChannel] = None,
        *,
        initial_icon: Icon = Icon.CHECK,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._triggers = triggers
        self._icons = load_icons(theme)

        self._tray = QSystemTrayIcon(self)
        self._tray.setIcon(self._icons[initial_icon])
        self._tray.setToolTip(APP_NAME)

        self._menu = QMenu()
        self._details_menu: Optional[QMenu] = None
        self._check_action: Optional[QAction] = None
        self._status_action: Optional[QAction] = None

        if triggers is not None:
            self._check_action = QAction(CHECK_FOR_UPDATES_TEXT, self._menu)
            self._check_action.triggered.connect(self._on_check_clicked)
            self._menu.addAction(self._check_action)

            self._status_action = QAction(STARTING_TEXT, self._menu)
            self._menu.addAction(self._status_action)
            self._menu.addSeparator()

        quit_action = QAction(QUIT_TEXT, self._menu)
        quit_action.triggered.connect(QApplication.quit)
        self._menu.addAction(quit_action)
        self._tray.setContextMenu(self._menu)

    def show(self) -> None:
        self._tray.show()

    def hide(self) -> None:
        self._tray.hide()

    def render(self, status: Status) -> None:
        _LOGGER.info("Received status: {}", status.text)
        if self._check_action is not None:
            self._check_action.setText(CHECK_FOR_UPDATES_TEXT)
        if self._status_action is not None:
            self._status_action.setText(status.text)
            self._replace_details(status)
        self._tray.setToolTip(f"{APP_NAME}: {status.text}")
        self._tray.setIcon(self._icons[status.icon])

    def _replace_details(self, status: Status) -> None:
        if self._details_menu is not None:
            self._status_action.setMenu(None)
            self._details_menu.deleteLater()
            self._details_menu = None

        if has_details(status):
            self._status_action.setMenu(self._build_details(status))

    def _build_details(self, status: MissingUpdates) -> QMenu:
        menu = QMenu(status.text)
        for update in status.updates:
            action = QAction(update.text, menu)
            action.triggered.connect(lambda _checked=False, link=update.link: self._open_link(link))
            menu.addAction(action)
        self._details_menu = menu
        return menu

    def _on_check_clicked(self) -> None:
        self._check_action.setText(Checking().text)
        try:
            self._triggers.send(TriggerEvent.USER_CLICK)
        except ChannelClosed:
            _LOGGER.debug("Check requested during shutdown; ignoring.")

    def _open_link(self, link: str) -> None:
        if not QDesktopServices.openUrl(QUrl(link)):
            _LOGGER.error("Failed to open link {}", link)
