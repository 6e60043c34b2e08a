from __future__ import annotations

import threading
from typing import List

from ota_updater.usecases.notification_queue import NotificationQueue


def test_drain_delivers_in_fifo_order() -> None:
    queue = NotificationQueue()
    received: List[str] = []
    queue.subscribe(received.append)

    for text in ("one", "two", "three"):
        queue.enqueue(text)
    delivered = queue.drain()

    assert delivered == 3
    assert received == ["one", "two", "three"]
    assert queue.pending == 0


def test_each_notification_is_delivered_once() -> None:
    queue = NotificationQueue()
    received: List[str] = []
    queue.subscribe(received.append)

    queue.enqueue("only once")
    queue.drain()
    queue.drain()

    assert received == ["only once"]


def test_new_subscriber_does_not_see_earlier_messages() -> None:
    queue = NotificationQueue()
    queue.enqueue("stale")
    received: List[str] = []

    queue.subscribe(received.append)
    queue.enqueue("fresh")
    queue.drain()

    assert received == ["fresh"]


def test_drain_without_consumer_keeps_buffer() -> None:
    queue = NotificationQueue()
    queue.enqueue("waiting")

    assert queue.drain() == 0
    assert queue.pending == 1
    assert list(queue.consume()) == ["waiting"]


def test_unsubscribe_stops_delivery() -> None:
    queue = NotificationQueue()
    received: List[str] = []
    unsubscribe = queue.subscribe(received.append)

    unsubscribe()
    queue.enqueue("after")

    assert queue.drain() == 0
    assert received == []


def test_replaced_subscription_unsubscribe_is_noop() -> None:
    queue = NotificationQueue()
    first: List[str] = []
    second: List[str] = []
    unsubscribe_first = queue.subscribe(first.append)
    queue.subscribe(second.append)

    unsubscribe_first()
    queue.enqueue("hello")
    queue.drain()

    assert first == []
    assert second == ["hello"]


def test_drain_respects_max_items() -> None:
    queue = NotificationQueue()
    received: List[str] = []
    queue.subscribe(received.append)
    for index in range(5):
        queue.enqueue(f"n{index}")

    assert queue.drain(max_items=2) == 2
    assert received == ["n0", "n1"]
    assert queue.pending == 3


def test_enqueue_from_worker_threads() -> None:
    queue = NotificationQueue()
    received: List[str] = []
    queue.subscribe(received.append)

    workers = [
        threading.Thread(target=queue.enqueue, args=(f"w{index}",)) for index in range(8)
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    queue.drain()

    assert sorted(received) == sorted(f"w{index}" for index in range(8))


def test_failing_consumer_does_not_stop_drain(caplog) -> None:
    queue = NotificationQueue()
    received: List[str] = []

    def _consumer(text: str) -> None:
        if text == "a":
            raise RuntimeError("tk gone")
        received.append(text)

    queue.subscribe(_consumer)
    queue.enqueue("a")
    queue.enqueue("b")

    with caplog.at_level("ERROR"):
        delivered = queue.drain()

    assert delivered == 2
    assert received == ["b"]
    assert queue.pending == 0
    assert "Notification consumer failed" in caplog.text
