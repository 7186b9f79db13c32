"""
Reporter Tests

Tests verify:
- Endpoint URL validation and /ping URL derivation
- Ping accepts only {"status": "ok", "message", "timestamp"}
- Reports use the extension's wire shape
- Delivery failures return False and are never retried
"""

from unittest.mock import MagicMock

import pytest
import requests

from listener.exceptions import ReporterError
from listener.reporter import Reporter


def make_response(status_code: int = 200, json_data=None, json_error: bool = False):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = "OK" if response.ok else "Error"
    if json_error:
        response.json.side_effect = ValueError("not json")
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


class TestEndpoint:
    """Test endpoint parsing."""

    @pytest.mark.parametrize("endpoint", ["", "localhost:3000", "ftp://host/", "not a url"])
    def test_invalid_endpoint_rejected(self, endpoint, session):
        with pytest.raises(ReporterError):
            Reporter(endpoint, session=session)

    def test_ping_url_uses_host_only(self, session):
        reporter = Reporter("https://example.com:8443/api/blocked-urls?x=1", session=session)

        assert reporter.ping_url == "https://example.com:8443/ping"


class TestValidateEndpoint:
    """Test /ping validation."""

    def test_valid_ping(self, session):
        session.get.return_value = make_response(
            json_data={"status": "ok", "message": "Server is running", "timestamp": "t"}
        )
        reporter = Reporter("http://localhost:3000/", session=session)

        assert reporter.validate_endpoint() is True
        session.get.assert_called_once_with("http://localhost:3000/ping", timeout=5.0)

    @pytest.mark.parametrize(
        "json_data",
        [
            {"status": "ok", "message": "Server is running"},
            {"status": "down", "message": "x", "timestamp": "t"},
            {"status": "ok", "message": "", "timestamp": "t"},
            ["ok"],
        ],
    )
    def test_wrong_shape_rejected(self, session, json_data):
        session.get.return_value = make_response(json_data=json_data)

        assert Reporter("http://localhost:3000/", session=session).validate_endpoint() is False

    def test_non_2xx_rejected(self, session):
        session.get.return_value = make_response(status_code=404)

        assert Reporter("http://localhost:3000/", session=session).validate_endpoint() is False

    def test_non_json_rejected(self, session):
        session.get.return_value = make_response(json_error=True)

        assert Reporter("http://localhost:3000/", session=session).validate_endpoint() is False

    def test_connection_error_rejected(self, session):
        session.get.side_effect = requests.exceptions.ConnectionError("refused")

        assert Reporter("http://localhost:3000/", session=session).validate_endpoint() is False


class TestReport:
    """Test fire-and-forget reporting."""

    def test_build_event_shape(self):
        event = Reporter.build_event("https://x", tab_id=7, frame_id=0, timestamp="t")

        assert event == {"url": "https://x", "timestamp": "t", "tabId": 7, "frameId": 0}

    def test_build_event_omits_missing_ids(self):
        event = Reporter.build_event("https://x")

        assert set(event) == {"url", "timestamp"}
        assert event["timestamp"].endswith("Z")

    def test_report_posts_wire_shape(self, session):
        session.post.return_value = make_response()
        reporter = Reporter("http://localhost:3000/", session=session)
        event = reporter.build_event("https://x", tab_id=1)

        assert reporter.report(event) is True

        args, kwargs = session.post.call_args
        assert args == ("http://localhost:3000/",)
        assert kwargs["json"]["blockedUrl"] == event
        assert kwargs["json"]["reportedAt"].endswith("Z")

    def test_rejected_report_returns_false(self, session):
        session.post.return_value = make_response(status_code=400)
        reporter = Reporter("http://localhost:3000/", session=session)

        assert reporter.report({"url": "https://x"}) is False
        assert session.post.call_count == 1

    def test_transport_failure_not_retried(self, session):
        session.post.side_effect = requests.exceptions.Timeout("slow")
        reporter = Reporter("http://localhost:3000/", session=session)

        assert reporter.report({"url": "https://x"}) is False
        assert session.post.call_count == 1

    def test_report_accepted_by_listener(self, client):
        """End to end against the app, using TestClient as the HTTP session."""
        reporter = Reporter("http://testserver/", session=client)

        assert reporter.validate_endpoint() is True
        assert reporter.report(reporter.build_event("https://x", tab_id=3)) is True

        latest = client.get("/", params={"latest": "true"}).json()["latest"]
        assert latest["url"] == "https://x"
        assert latest["tabId"] == 3
