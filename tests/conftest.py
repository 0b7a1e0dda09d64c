"""Shared fixtures for Ephemeral Links tests."""

import pytest
from fastapi.testclient import TestClient

from ephemeral_links.api.dependencies import get_session
from ephemeral_links.core.config import Settings
from ephemeral_links.core.events import EventLog
from ephemeral_links.core.registry import Registry
from ephemeral_links.core.session import ShortenerSession
from ephemeral_links.main import create_app

T0 = 1_700_000_000_000


class FakeClock:
    """Clock returning a settable epoch-millisecond time."""

    def __init__(self, now: int = T0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def test_settings():
    """Settings independent of the environment."""
    return Settings(base_url="http://sho.rt", sweep_interval_seconds=60)


@pytest.fixture
def events():
    return EventLog()


@pytest.fixture
def registry(events, clock, test_settings):
    """Create a registry with a fake clock and an event log."""
    return Registry(sink=events, clock=clock, settings=test_settings)


@pytest.fixture
def session(clock, test_settings):
    session = ShortenerSession(settings=test_settings, clock=clock)
    yield session
    session.close()


@pytest.fixture
def client(session, test_settings):
    """Create a test client whose requests use the fake-clock session."""
    app = create_app(test_settings)
    app.dependency_overrides[get_session] = lambda: session

    with TestClient(app, raise_server_exceptions=False) as client:
        yield client

    app.dependency_overrides.clear()
