"""
Schema migrations for the Task Tracker
Adds columns introduced after the first release to an existing tasks table.
Safe to run on every startup.
"""
import logging
from typing import List

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

from ..models.category import NO_CATEGORY_NAME, NO_CATEGORY_COLOR
from ..models.task import Priority


logger = logging.getLogger(__name__)


TASK_MIGRATIONS = [
    ("updated_at", "ALTER TABLE tasks ADD COLUMN updated_at TIMESTAMP"),
    ("due_time", "ALTER TABLE tasks ADD COLUMN due_time VARCHAR(5)"),
    ("category_name", "ALTER TABLE tasks ADD COLUMN category_name VARCHAR(100)"),
    ("category_color", "ALTER TABLE tasks ADD COLUMN category_color VARCHAR(32)"),
]


def run_migrations(engine: Engine) -> List[str]:
    """
    Bring the tasks table up to the current column set and reset
    priorities outside low/medium/high to medium.

    Returns:
        Names of the columns that were added
    """
    inspector = inspect(engine)
    if "tasks" not in inspector.get_table_names():
        logger.info("No tasks table yet, skipping migrations")
        return []

    task_columns = {column["name"] for column in inspector.get_columns("tasks")}
    added: List[str] = []

    with engine.begin() as conn:
        for column_name, sql in TASK_MIGRATIONS:
            if column_name in task_columns:
                continue
            logger.info(f"Adding column to tasks: {column_name}")
            conn.execute(text(sql))
            added.append(column_name)

        # Backfill rows that predate the new columns
        conn.execute(
            text("UPDATE tasks SET updated_at = created_at WHERE updated_at IS NULL")
        )
        conn.execute(
            text("UPDATE tasks SET category_name = :name WHERE category_name IS NULL"),
            {"name": NO_CATEGORY_NAME},
        )
        conn.execute(
            text("UPDATE tasks SET category_color = :color WHERE category_color IS NULL"),
            {"color": NO_CATEGORY_COLOR},
        )
        # Older writers stored priority unchecked
        conn.execute(
            text("UPDATE tasks SET priority = LOWER(TRIM(priority)) WHERE priority IS NOT NULL")
        )
        result = conn.execute(
            text(
                "UPDATE tasks SET priority = :default "
                "WHERE priority IS NULL OR priority NOT IN ('low', 'medium', 'high')"
            ),
            {"default": Priority.MEDIUM.value},
        )
        if result.rowcount:
            logger.info(f"Reset {result.rowcount} task priorities to {Priority.MEDIUM.value}")

    if added:
        logger.info(f"Migrated tasks table, added columns: {added}")
    return added
