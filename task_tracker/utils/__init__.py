"""
Utilities for the Task Tracker
Error types, logging helpers and date parsing
"""
from .errors import (
    TaskTrackerError,
    ValidationError,
    NotFoundError,
    TaskNotFoundException,
    CategoryNotFoundException,
    StoreError,
    ConfigurationError,
)
from .logging import setup_logging, log_error

__all__ = [
    "TaskTrackerError",
    "ValidationError",
    "NotFoundError",
    "TaskNotFoundException",
    "CategoryNotFoundException",
    "StoreError",
    "ConfigurationError",
    "setup_logging",
    "log_error",
]
