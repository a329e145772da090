"""
Shared pytest fixtures.

Uses a throwaway SQLite database so no Postgres is required for tests.
The clock is pinned to Wednesday 2026-03-04 12:00 UTC (week Mon 2026-03-02 ..
Sun 2026-03-08) unless a test builds its own.
"""
import uuid
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import habit_progress.models  # noqa: F401
from habit_progress.db.base import Base, enable_sqlite_foreign_keys, get_db
from habit_progress.main import app
from habit_progress.routers.deps import get_clock
from habit_progress.services.calendar_clock import Clock
from habit_progress.store import InMemoryStore

SQLITE_URL = "sqlite:///./test_habit_progress.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

NOW = datetime(2026, 3, 4, 12, 0, tzinfo=timezone.utc)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def clock():
    return Clock.fixed(NOW)


@pytest.fixture()
def store():
    return InMemoryStore()


@pytest.fixture()
def user_id():
    """A fresh user per test keeps rows from other tests out of every query."""
    return f"user-{uuid.uuid4().hex[:12]}"


@pytest.fixture()
def client(clock):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def headers(user_id):
    return {"X-User-Id": user_id}
