"""
Background worker turning trigger events into checks and statuses.
"""

from __future__ import annotations

import os
import threading
from enum import Enum
from typing import Callable, Optional, Sequence

from arch_audit_tray.checker import CheckerError
from arch_audit_tray.events import ChannelClosed, TriggerChannel, TriggerEvent
from arch_audit_tray.logger import get_logger
from arch_audit_tray.status import Status, Update, classify

_LOGGER = get_logger()

Checker = Callable[[], Sequence[Update]]
Publisher = Callable[[Status], None]
CrashHandler = Callable[[BaseException], None]

CRASH_EXIT_CODE = 70


class CoordinatorState(Enum):
    IDLE = "idle"
    RUNNING = "running"


def abort_process(exc: BaseException) -> None:
    """Terminate the process; without the coordinator no check can ever run."""
    _LOGGER.critical("Coordinator died, terminating: {!r}", exc)
    _LOGGER.complete()
    os._exit(CRASH_EXIT_CODE)


class Coordinator:
    """
    Single worker that runs at most one check at a time.

    Every trigger received while idle starts a check. Triggers that are
    already queued at that moment, or that arrive while the check runs, are
    folded into the next check instead of causing one check each.
    """

    def __init__(
        self,
        triggers: TriggerChannel,
        checker: Checker,
        publish: Publisher,
        *,
        on_crash: CrashHandler = abort_process,
    ) -> None:
        self._triggers = triggers
        self._checker = checker
        self._publish = publish
        self._on_crash = on_crash
        self._thread: Optional[threading.Thread] = None
        self.state = CoordinatorState.IDLE
        self.checks_run = 0

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("Coordinator already started")
        self._thread = threading.Thread(target=self.run, name="coordinator", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Close the trigger channel and wait for the worker to finish.

        A check that is still running is not interrupted; ``timeout`` bounds
        how long to wait for it.
        """
        self._triggers.close()
        if self._thread is not None:
            self._thread.join(timeout)

    def run(self) -> None:
        _LOGGER.info("Coordinator started")
        try:
            while True:
                try:
                    trigger = self._triggers.receive()
                except ChannelClosed:
                    break
                self._run_check(trigger)
        except Exception as exc:
            _LOGGER.exception("Unexpected failure in coordinator loop")
            self._on_crash(exc)
            return
        _LOGGER.info("Coordinator stopped after {} check(s)", self.checks_run)

    def _run_check(self, trigger: TriggerEvent) -> None:
        collapsed = self._triggers.drain()
        self.state = CoordinatorState.RUNNING
        _LOGGER.info("Check triggered by {} ({} more collapsed)", trigger.value, collapsed)
        try:
            outcome = self._invoke_checker()
        finally:
            self.checks_run += 1
            self.state = CoordinatorState.IDLE
        status = classify(outcome)
        _LOGGER.info("Check finished: {}", status.text)
        if self._triggers.closed:
            # The consumer may already be gone after shutdown.
            _LOGGER.debug("Discarding status after shutdown: {}", status.text)
            return
        self._publish(status)

    def _invoke_checker(self) -> Sequence[Update] | Exception:
        try:
            return list(self._checker())
        except CheckerError as exc:
            _LOGGER.warning("Check failed: {}", exc)
            return exc
        except Exception as exc:
            _LOGGER.opt(exception=exc).error("Checker raised an unexpected error")
            return exc
