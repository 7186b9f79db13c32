"""
Reporter — Client side of the listener's wire contract.

Speaks exactly what the browser extension speaks:

1. Validate the endpoint with GET /ping before enabling reporting. The
   response must be 2xx with {"status": "ok", "message": ..., "timestamp": ...}.
2. POST one {"blockedUrl": {...}, "reportedAt": ...} per blocked navigation.
   Delivery is fire-and-forget: failures are logged, never retried.

Usage:
    reporter = Reporter("http://localhost:3000/")
    if reporter.validate_endpoint():
        reporter.report(reporter.build_event("https://ads.example.com/", tab_id=7))
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import requests

from listener.exceptions import ReporterError
from listener.utils import utc_now_iso


logger = logging.getLogger(__name__)


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


class Reporter:
    """Sends blocked-URL events to a listener endpoint."""

    def __init__(
        self,
        endpoint: str,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None,
    ):
        parsed = urlparse(endpoint or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ReporterError(
                f"Please enter a valid URL (e.g., http://localhost:3000/), got '{endpoint}'"
            )
        self.endpoint = endpoint
        self.ping_url = f"{parsed.scheme}://{parsed.netloc}/ping"
        self.timeout = timeout
        self.session = session or requests.Session()

    def validate_endpoint(self) -> bool:
        """Ping the listener and check the response shape."""
        try:
            response = self.session.get(self.ping_url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Error pinging server {self.ping_url}: {e}")
            return False

        if not _is_success(response.status_code):
            logger.error(f"Ping failed with status: {response.status_code}")
            return False

        try:
            data = response.json()
        except ValueError:
            logger.error(f"Ping response from {self.ping_url} is not JSON")
            return False

        if (
            isinstance(data, dict)
            and data.get("status") == "ok"
            and data.get("message")
            and data.get("timestamp")
        ):
            logger.info(f"Server ping successful: {data}")
            return True

        logger.error(f"Invalid ping response format: {data}")
        return False

    @staticmethod
    def build_event(
        url: str,
        tab_id: Optional[int] = None,
        frame_id: Optional[int] = None,
        timestamp: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Blocked URL payload in the extension's shape."""
        event: Dict[str, Any] = {
            "url": url,
            "timestamp": timestamp or utc_now_iso(),
        }
        if tab_id is not None:
            event["tabId"] = tab_id
        if frame_id is not None:
            event["frameId"] = frame_id
        return event

    def report(self, blocked_url: Dict[str, Any]) -> bool:
        """
        POST one event. Never raises for transport failures.

        Returns:
            True if the listener answered 2xx
        """
        payload = {"blockedUrl": blocked_url, "reportedAt": utc_now_iso()}
        try:
            response = self.session.post(self.endpoint, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Error sending report to {self.endpoint}: {e}")
            return False

        if _is_success(response.status_code):
            logger.info(
                f"Successfully reported blocked URL to {self.endpoint}: {blocked_url.get('url')}"
            )
            return True

        logger.error(f"Failed to report blocked URL: HTTP {response.status_code}")
        return False
