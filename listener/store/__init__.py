"""
Store Module — Bounded in-memory event log

Public API:
- BlockedEvent: Immutable blocked-URL record
- EventLog: Thread-safe bounded newest-first log
"""

from .event import BlockedEvent
from .event_log import EventLog

__all__ = [
    "BlockedEvent",
    "EventLog",
]
