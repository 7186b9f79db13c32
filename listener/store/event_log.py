"""
Event Log — Bounded, newest-first store of blocked URL events.

Core rule: THE LOG NEVER HOLDS MORE THAN `capacity` EVENTS.
The bound is enforced at insertion time: a submit on a full log silently
evicts the oldest entry. There is no backpressure and no rejection for
being full.

Every operation runs under one lock, so submit+evict and clear are atomic
with respect to each other and to readers. Readers receive detached
copies and can never mutate stored events.
"""

import logging
from collections import deque
from threading import Lock
from typing import Any, Deque, Dict, List, Optional, Tuple

from .event import BlockedEvent

logger = logging.getLogger(__name__)


class EventLog:
    """
    Thread-safe bounded event log.

    Usage:
        log = EventLog(capacity=10)
        total = log.submit(event)
        events, total = log.list_all()
        latest, total = log.list_latest()
        cleared = log.clear()
    """

    def __init__(self, capacity: int = 10):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        # appendleft on a full deque drops from the right (oldest) end
        self._events: Deque[BlockedEvent] = deque(maxlen=capacity)
        self._lock = Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def submit(self, event: BlockedEvent) -> int:
        """
        Insert an event at the front of the log.

        Args:
            event: Validated event. Build it with BlockedEvent.from_report().

        Returns:
            Number of stored events after insertion (never above capacity).
        """
        if not isinstance(event, BlockedEvent):
            raise TypeError(f"expected BlockedEvent, got {type(event).__name__}")

        with self._lock:
            evicted = self._events[-1] if len(self._events) == self._capacity else None
            self._events.appendleft(event)
            total = len(self._events)

        if evicted is not None:
            logger.debug(f"[EventLog] Capacity {self._capacity} reached, evicted {evicted.url}")
        logger.debug(f"[EventLog] Stored {event.url} ({total}/{self._capacity})")
        return total

    def list_all(self) -> Tuple[List[Dict[str, Any]], int]:
        """Snapshot of all events, newest first, with the current count."""
        with self._lock:
            snapshot = list(self._events)
        return [e.to_dict() for e in snapshot], len(snapshot)

    def list_latest(self) -> Tuple[Optional[Dict[str, Any]], int]:
        """Newest event (or None when empty) with the current count."""
        with self._lock:
            latest = self._events[0] if self._events else None
            total = len(self._events)
        return (latest.to_dict() if latest is not None else None), total

    def clear(self) -> int:
        """
        Empty the log.

        Returns:
            Number of events discarded.
        """
        with self._lock:
            cleared = len(self._events)
            self._events.clear()
        logger.info(f"[EventLog] Cleared {cleared} event(s)")
        return cleared
