"""
Error types for the Task Tracker
Each error maps to one HTTP status at the API boundary
"""


class TaskTrackerError(Exception):
    """Base exception for task tracker errors"""
    pass


class ValidationError(TaskTrackerError):
    """Raised when user input is missing or invalid (HTTP 400)"""
    pass


class NotFoundError(TaskTrackerError):
    """Raised when an operation references a nonexistent record (HTTP 404)"""
    pass


class TaskNotFoundException(NotFoundError):
    """Raised when a task is not found"""
    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task with ID {task_id} not found")


class CategoryNotFoundException(NotFoundError):
    """Raised when a category is not found"""
    def __init__(self, category_id: int):
        self.category_id = category_id
        super().__init__(f"Category with ID {category_id} not found")


class StoreError(TaskTrackerError):
    """Raised when the backing store fails or returns an unexpected shape (HTTP 500)"""
    pass


class ConfigurationError(TaskTrackerError):
    """Raised at startup when required configuration is missing"""
    pass
