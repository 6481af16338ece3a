"""
Test fixtures — shared across all test files.
"""

from __future__ import annotations

import pytest

from ioc_pivot.config import Settings, get_settings
from ioc_pivot.models.schemas import ApiKeys


_ENV_KEYS = (
    "URLSCAN_API_KEY",
    "VIRUSTOTAL_API_KEY",
    "HYBRID_ANALYSIS_API_KEY",
    "DISABLED_SEARCHERS",
    "HTTP_TIMEOUT",
    "URLSCAN_VISIBILITY",
)


class MockResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int, payload=None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Every test sees default settings, whatever the developer's .env holds."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setitem(Settings.model_config, "env_file", None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def api_keys():
    return ApiKeys(urlscan="us-key", virustotal="vt-key", hybrid_analysis="ha-key")


@pytest.fixture
def record_requests(monkeypatch):
    """
    Patch requests.get/post and record every call.

    Usage:
        calls = record_requests(MockResponse(200, {...}))
    """
    def install(response: MockResponse):
        calls: list[tuple[str, str, dict]] = []

        def fake_get(url, **kwargs):
            calls.append(("GET", url, kwargs))
            return response

        def fake_post(url, **kwargs):
            calls.append(("POST", url, kwargs))
            return response

        monkeypatch.setattr("requests.get", fake_get)
        monkeypatch.setattr("requests.post", fake_post)
        return calls

    return install


@pytest.fixture
def mock_response():
    return MockResponse
