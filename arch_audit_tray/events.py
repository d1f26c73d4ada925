"""
Trigger events and the queue carrying them to the coordinator.
"""

from __future__ import annotations

import queue
import threading
from enum import Enum
from typing import Optional


class TriggerEvent(Enum):
    """Something asked for a check. Triggers carry no payload."""

    STARTUP = "startup"
    FILE_CHANGED = "file_changed"
    USER_CLICK = "user_click"


class ChannelClosed(Exception):
    """Raised by a trigger channel once it has been closed."""


_CLOSED = object()


class TriggerChannel:
    """
    Unbounded multi-producer, single-consumer queue of trigger events.

    ``send`` never blocks. ``receive`` blocks until an event is queued and
    returns events in the order they were sent. The channel never drops or
    merges events; collapsing bursts is left to the consumer.
    """

    def __init__(self) -> None:
        self._queue: "queue.SimpleQueue[object]" = queue.SimpleQueue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, event: TriggerEvent) -> None:
        if self._closed.is_set():
            raise ChannelClosed("Trigger channel is closed")
        self._queue.put(event)

    def receive(self, timeout: Optional[float] = None) -> TriggerEvent:
        """
        Block until the next event is available.

        Raises ``queue.Empty`` when ``timeout`` expires and ``ChannelClosed``
        once the channel has been closed and the close marker is reached.
        """
        item = self._queue.get(timeout=timeout)
        if item is _CLOSED:
            # Leave the marker for any later receive call.
            self._queue.put(_CLOSED)
            raise ChannelClosed("Trigger channel is closed")
        return item  # type: ignore[return-value]

    def drain(self) -> int:
        """Discard every event already queued and return how many there were."""
        drained = 0
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return drained
            if item is _CLOSED:
                self._queue.put(_CLOSED)
                return drained
            drained += 1

    def close(self) -> None:
        """Stop accepting events and wake a blocked receiver."""
        if self._closed.is_set():
            return
        self._closed.set()
        self._queue.put(_CLOSED)
