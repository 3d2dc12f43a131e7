"""
Request dependencies for the Task Tracker API
"""
from fastapi import Request

from ..config import Settings
from ..services.task_service import TaskService


def get_task_service(request: Request) -> TaskService:
    """The TaskService built at application startup."""
    return request.app.state.task_service


def get_settings(request: Request) -> Settings:
    """The settings the application was created with."""
    return request.app.state.settings
