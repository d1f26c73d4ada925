"""
Hand-off of check results from the coordinator thread to the GUI thread.
"""

from __future__ import annotations

import queue
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal, Slot

from arch_audit_tray.logger import get_logger
from arch_audit_tray.status import Status

_LOGGER = get_logger()


class ResultChannel(QObject):
    """
    Single-producer, single-consumer bridge for ``Status`` values.

    ``publish`` stores the status and posts a queued Qt signal, so it returns
    straight away even while the consumer is busy or not attached yet. The
    consumer callback runs on the thread this object belongs to and sees
    statuses in publish order.
    """

    available = Signal()

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._pending: "queue.SimpleQueue[Status]" = queue.SimpleQueue()
        self._consumer: Optional[Callable[[Status], None]] = None
        self.available.connect(self._deliver_pending)

    def publish(self, status: Status) -> None:
        self._pending.put(status)
        self.available.emit()

    def attach(self, consumer: Callable[[Status], None]) -> None:
        """Register the consumer and hand it anything published so far."""
        if self._consumer is not None:
            raise RuntimeError("Result channel already has a consumer")
        self._consumer = consumer
        self._deliver_pending()

    def get(self, timeout: Optional[float] = None) -> Status:
        """Pull the next status directly; for consumers without an event loop."""
        if self._consumer is not None:
            raise RuntimeError("Result channel is attached to a consumer")
        return self._pending.get(timeout=timeout)

    @Slot()
    def _deliver_pending(self) -> None:
        consumer = self._consumer
        if consumer is None:
            return
        while True:
            try:
                status = self._pending.get_nowait()
            except queue.Empty:
                return
            _LOGGER.debug("Delivering status: {}", status)
            consumer(status)
