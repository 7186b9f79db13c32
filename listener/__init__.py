"""
URL Blocker Listener — companion report sink for the URL Blocker extension.

Public API:
- EventLog / BlockedEvent: bounded in-memory event store
- Settings / settings: configuration
- Reporter: client for the listener's wire contract
"""

from .config import Settings, get_settings, settings
from .exceptions import EventValidationError, ListenerError, ReporterError
from .reporter import Reporter
from .store import BlockedEvent, EventLog

__all__ = [
    "BlockedEvent",
    "EventLog",
    "EventValidationError",
    "ListenerError",
    "Reporter",
    "ReporterError",
    "Settings",
    "get_settings",
    "settings",
]
