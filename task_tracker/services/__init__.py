"""
Services module for the Task Tracker
Contains business logic layer for the application
"""
from .task_service import TaskService, VIEWS
from .statistics_service import compute_streak, compute_dashboard, DEFAULT_WINDOW_DAYS

__all__ = [
    "TaskService",
    "VIEWS",
    "compute_streak",
    "compute_dashboard",
    "DEFAULT_WINDOW_DAYS",
]
