"""
Logging helpers for the Task Tracker
"""
import logging
import sys
from typing import Optional, Union


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("task_tracker")


def setup_logging(level: Union[str, int] = "INFO") -> None:
    """
    Configure the task_tracker logger with a single stream handler.

    Safe to call more than once; existing handlers are replaced.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)


def log_error(error: Exception, context: str, entity_id: Optional[Union[int, str]] = None) -> None:
    """
    Log an error with its traceback.

    Args:
        error: The exception that was raised
        context: Where it happened, e.g. "SQLTaskStore.update_task (id=3)"
        entity_id: Optional ID of the record involved
    """
    suffix = f" [entity_id={entity_id}]" if entity_id is not None else ""
    logger.error(
        f"{context}{suffix}: {type(error).__name__}: {error}",
        exc_info=(type(error), error, error.__traceback__),
    )
