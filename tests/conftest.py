"""Test configuration and fixtures."""

from __future__ import annotations

import os
import queue
import time
from typing import Callable, List

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402

from arch_audit_tray.events import TriggerChannel  # noqa: E402
from arch_audit_tray.status import Status, Update  # noqa: E402


@pytest.fixture(scope="session")
def qt_app() -> QApplication:
    """Provide the offscreen Qt application shared by widget and QObject tests."""
    return QApplication.instance() or QApplication([])


@pytest.fixture
def pump_events(qt_app: QApplication) -> Callable[[Callable[[], bool]], bool]:
    """Run the Qt event loop until the condition holds or five seconds pass."""

    def pump(condition: Callable[[], bool], timeout: float = 5.0) -> bool:
        deadline = time.monotonic() + timeout
        while not condition():
            if time.monotonic() > deadline:
                return False
            qt_app.processEvents()
            time.sleep(0.01)
        return True

    return pump


@pytest.fixture
def triggers() -> TriggerChannel:
    return TriggerChannel()


@pytest.fixture
def published() -> "queue.Queue[Status]":
    """Collects statuses published by a coordinator under test."""
    return queue.Queue()


@pytest.fixture
def sample_updates() -> List[Update]:
    return [
        Update(text="openssl: High arbitrary code execution", link="https://security.archlinux.org/AVG-1"),
        Update(text="curl: Medium information disclosure", link="https://security.archlinux.org/AVG-2"),
    ]


@pytest.fixture
def static_checker(sample_updates: List[Update]) -> Callable[[], List[Update]]:
    return lambda: list(sample_updates)
