# tests/conftest.py
from datetime import datetime, timedelta, timezone

import pytest

from jobportal.core.config import Settings
from jobportal.db.backing import BackingStore, MemoryBackend
from jobportal.db.connection import Connection
from jobportal.db.database import Database
from jobportal.services.database_service import DatabaseService


class FakeClock:
    """Wall clock for timestamps plus a monotonic clock for TTL caches."""

    def __init__(self):
        self.wall = datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.mono = 1000.0

    def now(self) -> datetime:
        return self.wall

    def monotonic(self) -> float:
        return self.mono

    def advance(self, seconds: float):
        self.wall += timedelta(seconds=seconds)
        self.mono += seconds


class FlakyBackend(MemoryBackend):
    """Memory backend whose writes can be switched to fail (quota exceeded)."""

    def __init__(self):
        super().__init__()
        self.fail_writes = False

    def set(self, key, value):
        if self.fail_writes and key != "mongodb_connection_test":
            raise OSError("quota exceeded")
        super().set(key, value)


@pytest.fixture
def backend():
    return FlakyBackend()


@pytest.fixture
def backing(backend):
    return BackingStore(backend, namespace="test")


@pytest.fixture
def database(backing):
    return Database(backing, "testdb")


@pytest.fixture
def connection(backing):
    return Connection(backing, "testdb")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def test_settings():
    return Settings(
        STORAGE_BACKEND="memory",
        CONNECT_DELAY_SEC=0,
        CATEGORIES_CACHE_TTL_SEC=30,
        CONNECTION_CACHE_TTL_SEC=5,
        SETUP_TIMEOUT_SEC=2,
    )


@pytest.fixture
def service(connection, clock, test_settings):
    return DatabaseService(connection, now=clock.now, cfg=test_settings, monotonic=clock.monotonic)
