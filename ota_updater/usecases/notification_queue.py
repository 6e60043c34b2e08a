"""Ordered channel delivering user notifications to a single consumer."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Iterator, Optional

from ota_updater.domain.query_models import Notification

NotificationCallback = Callable[[Notification], None]


class NotificationQueue:
    """Unbounded FIFO of notification messages.

    ``enqueue`` is thread-safe and never blocks. Delivery happens on the
    owner thread, either to the subscribed consumer through ``drain`` or by
    pulling with ``consume``. A new subscription starts with the next
    enqueued message; anything still buffered is discarded.
    """

    def __init__(self) -> None:
        self._log = logging.getLogger(__name__)
        self._pending: "queue.SimpleQueue[Notification]" = queue.SimpleQueue()
        self._consumer: Optional[NotificationCallback] = None
        self._lock = threading.Lock()

    def enqueue(self, notification: Notification) -> None:
        text = str(notification)
        self._log.debug("notification queued: %s", text)
        self._pending.put(text)

    def subscribe(self, callback: NotificationCallback) -> Callable[[], None]:
        """Install ``callback`` as the single active consumer.

        Returns:
            Callable removing the subscription (no-op once replaced).
        """
        with self._lock:
            self._discard_pending()
            self._consumer = callback

        def _unsubscribe() -> None:
            with self._lock:
                if self._consumer is callback:
                    self._consumer = None

        return _unsubscribe

    def drain(self, max_items: Optional[int] = None) -> int:
        """Deliver buffered notifications to the consumer in order.

        Without a consumer nothing is delivered and the buffer is kept. A
        consumer that raises is logged; the message counts as delivered and
        draining continues.
        """
        consumer = self._consumer
        if consumer is None:
            return 0
        delivered = 0
        for notification in self.consume():
            try:
                consumer(notification)
            except Exception:
                self._log.exception("Notification consumer failed for %r", notification)
            delivered += 1
            if max_items is not None and delivered >= max_items:
                break
        return delivered

    def consume(self) -> Iterator[Notification]:
        """Yield buffered notifications one at a time without blocking."""
        while True:
            try:
                yield self._pending.get_nowait()
            except queue.Empty:
                return

    @property
    def pending(self) -> int:
        return self._pending.qsize()

    def _discard_pending(self) -> None:
        dropped = 0
        while True:
            try:
                self._pending.get_nowait()
            except queue.Empty:
                break
            dropped += 1
        if dropped:
            self._log.debug("dropped %d notification(s) queued before subscribe", dropped)


__all__ = ["NotificationCallback", "NotificationQueue"]
