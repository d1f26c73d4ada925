"""
Application wiring: triggers, coordinator, result delivery and the tray.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from PySide6.QtCore import QObject

from arch_audit_tray.checker import ArchAuditChecker
from arch_audit_tray.coordinator import Coordinator
from arch_audit_tray.events import TriggerChannel, TriggerEvent
from arch_audit_tray.logger import get_logger
from arch_audit_tray.result_channel import ResultChannel
from arch_audit_tray.settings import Settings
from arch_audit_tray.tray import TrayDisplay
from arch_audit_tray.watcher import DatabaseWatcher

SHUTDOWN_TIMEOUT_SECONDS = 2.0


@dataclass
class TrayApplication(QObject):
    settings: Settings = field(default_factory=Settings)

    def __post_init__(self) -> None:
        super().__init__()
        self._logger = get_logger()

        self._triggers = TriggerChannel()
        self._results = ResultChannel(self)
        self._checker = ArchAuditChecker(
            binary=self.settings.arch_audit_binary,
            upgradable_only=self.settings.upgradable_only,
        )
        self._coordinator = Coordinator(self._triggers, self._checker, self._results.publish)
        self._watcher = DatabaseWatcher(self._triggers, self.settings.watch_path, self)
        self._display: Optional[TrayDisplay] = None

    def start(self) -> None:
        """
        Bring the pipeline up and request the first check.

        Raises ``WatcherError`` when the package database cannot be watched;
        nothing is left running in that case.
        """
        self._logger.info("Starting with icon theme '{}'", self.settings.icon_theme)
        self._watcher.start()

        self._display = TrayDisplay(self.settings.icon_theme, self._triggers, parent=self)
        self._results.attach(self._display.render)
        self._coordinator.start()
        self._triggers.send(TriggerEvent.STARTUP)
        self._display.show()

    def shutdown(self) -> None:
        self._logger.info("Shutting down.")
        self._watcher.stop()
        self._coordinator.stop(timeout=SHUTDOWN_TIMEOUT_SECONDS)
        if self._display is not None:
            self._display.hide()
