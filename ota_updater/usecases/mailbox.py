"""Thread-safe hand-off of callbacks from worker threads to the owner thread.

Workers never mutate session state. They ``post`` a callback and the owner
thread (the Tk loop, or a test) runs it later from ``pump``.
"""

from __future__ import annotations

import logging
import queue
from typing import Callable, Optional

Callback = Callable[[], None]


class Mailbox:
    """Unbounded FIFO of callbacks executed on ``pump``."""

    def __init__(self) -> None:
        self._log = logging.getLogger(__name__)
        self._queue: "queue.SimpleQueue[Callback]" = queue.SimpleQueue()

    def post(self, callback: Callback) -> None:
        """Queue ``callback`` for the owner thread; never blocks."""
        self._queue.put(callback)

    def pump(self, max_items: Optional[int] = None) -> int:
        """Run queued callbacks in post order and return how many ran."""
        handled = 0
        while max_items is None or handled < max_items:
            try:
                callback = self._queue.get_nowait()
            except queue.Empty:
                break
            handled += 1
            try:
                callback()
            except Exception:
                self._log.exception("Mailbox callback failed")
        return handled

    @property
    def pending(self) -> int:
        return self._queue.qsize()


__all__ = ["Mailbox"]
