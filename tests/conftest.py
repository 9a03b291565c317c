"""
Shared fixtures for the URL shortener tests.

Time is simulated with FrozenClock so expiry can be tested without sleeping.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from shortlink.core.setting import Settings
from shortlink.main import create_app
from shortlink.services.analytics_log import AnalyticsLog
from shortlink.services.code_registry import CodeRegistry
from shortlink.store.memory import InMemoryLinkStore

START_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
TEST_BASE_URL = "http://sho.rt"


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = START_TIME):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def store():
    return InMemoryLinkStore()


@pytest.fixture
def analytics(store):
    return AnalyticsLog(store)


@pytest.fixture
def registry(store, analytics, clock):
    return CodeRegistry(store, analytics, clock=clock)


@pytest.fixture
def app(clock):
    return create_app(Settings(BASE_URL=TEST_BASE_URL), clock=clock)


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
