# tests/test_config.py

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from task_tracker.config import DEFAULT_DATABASE_URL, Settings
from task_tracker.main import create_app
from task_tracker.utils.errors import ConfigurationError


def test_explicit_database_url_wins() -> None:
    settings = Settings(_env_file=None, environment="production", database_url="sqlite:///tmp/x.db")
    assert settings.resolve_database_url() == "sqlite:///tmp/x.db"


def test_development_falls_back_to_local_sqlite() -> None:
    settings = Settings(_env_file=None, environment="development", database_url=None)
    assert settings.resolve_database_url() == DEFAULT_DATABASE_URL


def test_production_without_database_url_fails_fast() -> None:
    settings = Settings(_env_file=None, environment="production", database_url=None)

    with pytest.raises(ConfigurationError, match="DATABASE_URL"):
        settings.resolve_database_url()


def test_app_refuses_to_start_without_database_in_production() -> None:
    app = create_app(Settings(_env_file=None, environment="production", database_url=None))

    with pytest.raises(ConfigurationError):
        with TestClient(app):
            pass


def test_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite:///from-env.db")
    monkeypatch.setenv("STREAK_WINDOW_DAYS", "90")

    settings = Settings(_env_file=None)

    assert settings.database_url == "sqlite:///from-env.db"
    assert settings.streak_window_days == 90


def test_file_database_is_created(tmp_path) -> None:
    db_path = tmp_path / "nested" / "tasks.db"
    app = create_app(Settings(_env_file=None, database_url=f"sqlite:///{db_path}", log_level="WARNING"))

    with TestClient(app) as client:
        assert client.get("/categories").status_code == 200

    assert db_path.exists()
