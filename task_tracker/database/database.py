"""
Database setup for the Task Tracker
Builds the engine from configuration and creates tables
"""
import logging
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

# Register table models on SQLModel.metadata
from ..models import Task, Category  # noqa: F401


logger = logging.getLogger(__name__)


def create_db_engine(database_url: str, timeout_seconds: float = 10.0, echo: bool = False) -> Engine:
    """
    Create a SQLAlchemy engine for the given URL.

    SQLite URLs get a busy timeout and cross-thread access; an in-memory SQLite
    URL shares one connection so every session sees the same data. Other
    backends get a bounded connect timeout.
    """
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        database = url.database
        if not database or database == ":memory:":
            return create_engine(
                database_url,
                echo=echo,
                connect_args={"check_same_thread": False, "timeout": timeout_seconds},
                poolclass=StaticPool,
            )

        Path(database).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": timeout_seconds},
        )

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

        return engine

    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        connect_args={"connect_timeout": int(timeout_seconds)},
    )


def init_db(engine: Engine) -> None:
    """Create database tables if they do not exist."""
    SQLModel.metadata.create_all(engine)
    logger.info("Database tables ready")

