from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

import main
from database import create_database

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime):
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(FIXED_NOW)


@pytest.fixture
def store(clock):
    """A freshly seeded in-memory store driven by a fixed clock."""
    return create_database(clock=clock)


@pytest.fixture
def client(store):
    main.app.dependency_overrides[main.get_db] = lambda: store
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()
