"""Pytest configuration and shared fixtures for unit tests."""

import pytest
from triageaccess import Auth, TriageClient
from triageaccess._core._request import RequestConfig
from triageaccess.environment import PUBLIC

from tests.unit.fixtures import FakePageSource

API_KEY = "test-api-key"


@pytest.fixture
def page_source():
    """Factory for a ``FakePageSource`` serving the given pages."""

    def _make(*pages: bytes) -> FakePageSource:
        return FakePageSource(pages)

    return _make


@pytest.fixture
def auth() -> Auth:
    return Auth(api_key=API_KEY, environment=PUBLIC)


@pytest.fixture
def client(auth: Auth) -> TriageClient:
    """A client that retries immediately, so retry tests don't sleep."""
    config = RequestConfig(max_retries=2, backoff_factor=0)
    return TriageClient(auth=auth, config=config)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    monkeypatch.delenv("TRIAGE_API_KEY", raising=False)
    monkeypatch.delenv("TRIAGE_ENVIRONMENT", raising=False)
