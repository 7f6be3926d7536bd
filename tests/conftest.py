"""
tests.conftest

Shared fixtures: settings with a fixed principal list, a controllable clock and
an orchestrator wired to the in-memory store.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from authcore.auth.store import InMemoryRefreshTokenStore
from authcore.services.auth_service import AuthService
from authcore.settings import Settings

TEST_SECRET = "test-signing-key-that-is-long-enough-for-hs256"


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@pytest.fixture
def settings() -> Settings:
    return Settings(
        env="test",
        jwt_secret=TEST_SECRET,
        principals=[
            {"username": "alice", "secret": "pw1", "roles": ["admin"]},
            {"username": "bob", "secret": "secret", "roles": ["editor"]},
            {"username": "carol", "secret": "reader-pw", "roles": []},
        ],
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 5, 12, 0, 0, tzinfo=UTC))


@pytest.fixture
def store() -> InMemoryRefreshTokenStore:
    return InMemoryRefreshTokenStore()


@pytest.fixture
def service(settings: Settings, store: InMemoryRefreshTokenStore, clock: FakeClock) -> AuthService:
    return AuthService.from_settings(settings, store=store, clock=clock)
