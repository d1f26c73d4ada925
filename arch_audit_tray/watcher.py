"""
Watches the local package database and requests a check when it changes.
"""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QFileSystemWatcher, QObject

from arch_audit_tray.events import ChannelClosed, TriggerChannel, TriggerEvent
from arch_audit_tray.logger import get_logger

_LOGGER = get_logger()


class WatcherError(RuntimeError):
    """Raised when the database path cannot be watched."""


class DatabaseWatcher(QObject):
    """
    Sends ``TriggerEvent.FILE_CHANGED`` whenever the watched path changes.

    A single package transaction usually fires several notifications; they
    are all forwarded and collapsed by the coordinator.
    """

    def __init__(self, channel: TriggerChannel, path: Path, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._channel = channel
        self.path = Path(path)
        self._watcher = QFileSystemWatcher(self)
        self._watcher.directoryChanged.connect(self._on_changed)
        self._watcher.fileChanged.connect(self._on_changed)

    def start(self) -> None:
        if not self.path.exists():
            raise WatcherError(f"Cannot watch {self.path}: path does not exist")
        if not self._watcher.addPath(str(self.path)):
            raise WatcherError(f"Cannot watch {self.path}")
        _LOGGER.info("Watching {} for package database changes", self.path)

    def stop(self) -> None:
        watched = self._watcher.files() + self._watcher.directories()
        if watched:
            self._watcher.removePaths(watched)

    def _on_changed(self, path: str) -> None:
        _LOGGER.debug("Change detected in {}", path)
        try:
            self._channel.send(TriggerEvent.FILE_CHANGED)
        except ChannelClosed:
            _LOGGER.debug("Ignoring change notification during shutdown")
