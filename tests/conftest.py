# tests/conftest.py

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from task_tracker.config import Settings
from task_tracker.database import create_db_engine, init_db
from task_tracker.main import create_app
from task_tracker.repositories import SQLTaskStore
from task_tracker.services import TaskService


@pytest.fixture()
def engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def store(engine) -> SQLTaskStore:
    return SQLTaskStore(engine)


@pytest.fixture()
def service(store: SQLTaskStore) -> TaskService:
    return TaskService(store)


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        environment="development",
        database_url="sqlite://",
        log_level="WARNING",
        streak_window_days=30,
    )


@pytest.fixture()
def client(test_settings: Settings):
    """TestClient with the lifespan running, so tables and default categories exist."""
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client

