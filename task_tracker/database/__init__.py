"""
Database module for the Task Tracker
Engine construction, table creation and migrations
"""
from .database import create_db_engine, init_db
from .migrations import run_migrations

__all__ = [
    "create_db_engine",
    "init_db",
    "run_migrations",
]
