"""
API Services — Business Logic Layer

Validates reporter payloads and drives the event log.
"""

from typing import Any, Dict, Optional

from listener.exceptions import EventValidationError
from listener.store import BlockedEvent, EventLog
from listener.utils import utc_now_iso


MISSING_FIELDS_MESSAGE = "Missing required fields: blockedUrl and reportedAt"


def record_blocked_url(
    log: EventLog,
    blocked_url: Optional[Dict[str, Any]],
    reported_at: Optional[str],
) -> int:
    """
    Validate a report and store it.

    Args:
        log: Event log owned by the application
        blocked_url: Reporter's blockedUrl object
        reported_at: Reporter's send time

    Returns:
        Number of stored events after insertion

    Raises:
        EventValidationError: If a required field is missing. The log is
            not touched.
    """
    if not blocked_url or not reported_at:
        raise EventValidationError(MISSING_FIELDS_MESSAGE)

    event = BlockedEvent.from_report(blocked_url, reported_at)
    return log.submit(event)


def build_ping() -> Dict[str, str]:
    """Health payload. Independent of the log state."""
    return {
        "status": "ok",
        "message": "Server is running",
        "timestamp": utc_now_iso(),
    }
