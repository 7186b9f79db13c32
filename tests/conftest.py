"""
Shared fixtures.

Every test app gets its own EventLog and ignores any app.properties or
environment overrides on the machine running the tests.
"""

import pytest
from fastapi.testclient import TestClient

from listener.api.main import create_app
from listener.config import Settings


ISOLATED_ENV = ("HOST", "PORT", "MAX_REQUESTS", "PROPERTIES_FILE", "LOG_LEVEL")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Drop listener settings inherited from the shell."""
    for name in ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_settings(tmp_path):
    """Settings factory pointing at a properties file that does not exist."""
    def _make(**overrides) -> Settings:
        overrides.setdefault("PROPERTIES_FILE", str(tmp_path / "missing.properties"))
        return Settings(**overrides)
    return _make


@pytest.fixture
def make_client(make_settings):
    """TestClient factory for an app with the given capacity."""
    def _make(capacity: int = 10, **kwargs) -> TestClient:
        app = create_app(make_settings(MAX_REQUESTS=capacity))
        return TestClient(app, **kwargs)
    return _make


@pytest.fixture
def client(make_client):
    """Client for a fresh app with the default capacity of 10."""
    return make_client()

