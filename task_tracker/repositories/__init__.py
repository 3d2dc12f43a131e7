"""
Repositories module for the Task Tracker
Record store contract and its SQL implementation
"""
from .base import TaskStore, TaskFilter, DateField
from .sql_store import SQLTaskStore

__all__ = [
    "TaskStore",
    "TaskFilter",
    "DateField",
    "SQLTaskStore",
]
