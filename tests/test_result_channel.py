"""Unit tests for status delivery through the result channel."""

from __future__ import annotations

import queue
import threading
from typing import List

import pytest

from arch_audit_tray.checker import CheckerError
from arch_audit_tray.coordinator import Coordinator
from arch_audit_tray.events import TriggerChannel, TriggerEvent
from arch_audit_tray.result_channel import ResultChannel
from arch_audit_tray.status import Error, MissingUpdates, Status, Update, UpToDate


@pytest.fixture
def channel(qt_app) -> ResultChannel:
    return ResultChannel()


def test_statuses_published_before_attach_are_kept(channel: ResultChannel, sample_updates: List[Update]) -> None:
    channel.publish(UpToDate())
    channel.publish(MissingUpdates(sample_updates))

    received: List[Status] = []
    channel.attach(received.append)

    assert received == [UpToDate(), MissingUpdates(tuple(sample_updates))]


def test_attached_consumer_sees_publish_order(channel: ResultChannel) -> None:
    received: List[Status] = []
    channel.attach(received.append)

    channel.publish(Error("first"))
    channel.publish(UpToDate())
    channel.publish(Error("third"))

    assert received == [Error("first"), UpToDate(), Error("third")]


def test_publish_from_worker_thread_keeps_order(channel: ResultChannel) -> None:
    statuses = [Error(str(index)) for index in range(50)]

    def produce() -> None:
        for status in statuses:
            channel.publish(status)

    producer = threading.Thread(target=produce)
    producer.start()
    producer.join()

    assert [channel.get(timeout=1) for _ in statuses] == statuses
    with pytest.raises(queue.Empty):
        channel.get(timeout=0.01)


def test_second_consumer_rejected(channel: ResultChannel) -> None:
    channel.attach(lambda status: None)
    with pytest.raises(RuntimeError):
        channel.attach(lambda status: None)
    with pytest.raises(RuntimeError):
        channel.get(timeout=0.01)


def test_coordinator_results_reach_gui_thread_in_order(
    channel: ResultChannel,
    triggers: TriggerChannel,
    pump_events,
) -> None:
    outcomes: List[object] = [[], [Update(text="curl: High", link="https://security.archlinux.org/AVG-9")], CheckerError("x")]

    def checker() -> List[Update]:
        outcome = outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome  # type: ignore[return-value]

    received: List[Status] = []
    delivery_threads: List[threading.Thread] = []

    def consume(status: Status) -> None:
        received.append(status)
        delivery_threads.append(threading.current_thread())

    channel.attach(consume)
    coordinator = Coordinator(triggers, checker, channel.publish)
    coordinator.start()
    try:
        for expected_count in (1, 2, 3):
            triggers.send(TriggerEvent.USER_CLICK)
            assert pump_events(lambda: len(received) >= expected_count)
    finally:
        coordinator.stop(timeout=5)

    assert received == [
        UpToDate(),
        MissingUpdates((Update(text="curl: High", link="https://security.archlinux.org/AVG-9"),)),
        Error("x"),
    ]
    assert all(thread is threading.main_thread() for thread in delivery_threads)
