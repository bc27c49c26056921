"""In-process fan-out of change notifications.

Delivery is best effort: a subscriber whose queue is full misses the message and
is expected to re-fetch authoritative state anyway.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Optional

logger = logging.getLogger(__name__)

TRANSACTIONS_CHANGED = "transactions_changed"


class Subscription:
    def __init__(self, broadcaster: "ChangeBroadcaster", maxsize: int):
        self._broadcaster = broadcaster
        self._queue: "queue.Queue[dict]" = queue.Queue(maxsize=maxsize)

    def offer(self, message: dict) -> bool:
        try:
            self._queue.put_nowait(message)
            return True
        except queue.Full:
            return False

    def get(self, timeout: Optional[float] = None) -> Optional[dict]:
        """Next message, or None when nothing arrived within ``timeout``."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def close(self) -> None:
        self._broadcaster.unsubscribe(self)


class ChangeBroadcaster:
    def __init__(self, *, queue_size: int = 100):
        self._queue_size = queue_size
        self._subscribers: list[Subscription] = []
        self._lock = threading.Lock()

    def subscribe(self) -> Subscription:
        sub = Subscription(self, self._queue_size)
        with self._lock:
            self._subscribers.append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            if sub in self._subscribers:
                self._subscribers.remove(sub)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def publish(self, kind: str) -> int:
        """Send ``{"type": kind}`` to every subscriber; returns how many got it."""
        message = {"type": kind}
        with self._lock:
            targets = list(self._subscribers)

        delivered = 0
        for sub in targets:
            if sub.offer(message):
                delivered += 1
            else:
                logger.warning("dropped %s notification for a slow subscriber", kind)
        return delivered
