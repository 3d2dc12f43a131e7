"""
SQL record store for the Task Tracker
Persists tasks and categories through SQLModel sessions
"""
import logging
from datetime import datetime, time, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select, func

from ..models import (
    Task,
    TaskBase,
    Category,
    CategoryCreate,
    DEFAULT_CATEGORIES,
    MUTABLE_FIELDS,
    resolve_category_display,
)
from ..utils.dates import utcnow
from ..utils.errors import (
    CategoryNotFoundException,
    StoreError,
    TaskNotFoundException,
    ValidationError,
)
from ..utils.logging import log_error
from .base import TaskFilter


logger = logging.getLogger(__name__)


class SQLTaskStore:
    """
    Record store backed by a relational database.

    Every operation runs in its own short-lived session and commits before
    returning. Database failures are logged and re-raised as StoreError.
    """

    def __init__(self, engine: Engine):
        self._engine = engine

    # ============ Tasks ============

    def list_tasks(self, task_filter: Optional[TaskFilter] = None) -> List[Task]:
        """
        Get all tasks matching the filter.

        Args:
            task_filter: Optional filter; unset fields are ignored

        Returns:
            List of Task objects in storage order
        """
        task_filter = task_filter or TaskFilter()
        try:
            with Session(self._engine) as session:
                statement = select(Task)

                if task_filter.category_id is not None:
                    statement = statement.where(Task.category_id == task_filter.category_id)

                if task_filter.completed is not None:
                    statement = statement.where(Task.completed == task_filter.completed)

                statement = self._apply_date_filter(statement, task_filter)

                return list(session.exec(statement).all())
        except SQLAlchemyError as e:
            log_error(e, "SQLTaskStore.list_tasks")
            raise StoreError("Failed to retrieve tasks") from e

    @staticmethod
    def _apply_date_filter(statement, task_filter: TaskFilter):
        if task_filter.on_date is not None:
            start, end = task_filter.on_date, task_filter.on_date
        else:
            start, end = task_filter.start_date, task_filter.end_date

        if task_filter.date_field == "created_at":
            if start is not None:
                statement = statement.where(Task.created_at >= datetime.combine(start, time.min))
            if end is not None:
                next_day = datetime.combine(end + timedelta(days=1), time.min)
                statement = statement.where(Task.created_at < next_day)
        else:
            if start is not None:
                statement = statement.where(Task.due_date >= start)
            if end is not None:
                statement = statement.where(Task.due_date <= end)

        return statement

    def get_task(self, task_id: int) -> Task:
        """
        Get a specific task by ID.

        Raises:
            TaskNotFoundException: If the task does not exist
        """
        try:
            with Session(self._engine) as session:
                task = session.get(Task, task_id)
                if task is None:
                    raise TaskNotFoundException(task_id)
                return task
        except SQLAlchemyError as e:
            log_error(e, f"SQLTaskStore.get_task (id={task_id})", task_id)
            raise StoreError("Failed to retrieve task") from e

    def create_task(self, draft: TaskBase) -> Task:
        """
        Persist a new, already normalized task.

        The store assigns the ID and timestamps and copies the category's
        display fields onto the record.

        Returns:
            The stored Task
        """
        try:
            with Session(self._engine) as session:
                now = utcnow()
                task = Task(**draft.model_dump(), created_at=now, updated_at=now)
                task.category_name, task.category_color = self._category_display(
                    session, task.category_id
                )

                session.add(task)
                session.commit()
                session.refresh(task)

                logger.info(f"Created task {task.id}: {task.title!r}")
                return task
        except SQLAlchemyError as e:
            log_error(e, "SQLTaskStore.create_task")
            raise StoreError("Failed to create task") from e

    def update_task(self, task_id: int, changes: Dict[str, Any]) -> Task:
        """
        Merge changes into an existing task.

        Only mutable fields are applied; anything else in `changes` is ignored.
        The read, merge and write happen in one transaction.

        Raises:
            TaskNotFoundException: If the task does not exist
        """
        updates = {field: value for field, value in changes.items() if field in MUTABLE_FIELDS}
        try:
            with Session(self._engine) as session:
                statement = select(Task).where(Task.id == task_id).with_for_update()
                task = session.exec(statement).first()
                if task is None:
                    raise TaskNotFoundException(task_id)

                for field, value in updates.items():
                    setattr(task, field, value)

                if "category_id" in updates:
                    task.category_name, task.category_color = self._category_display(
                        session, task.category_id
                    )

                task.updated_at = utcnow()

                session.add(task)
                session.commit()
                session.refresh(task)

                logger.info(f"Updated task {task_id}: {sorted(updates)}")
                return task
        except SQLAlchemyError as e:
            log_error(e, f"SQLTaskStore.update_task (id={task_id})", task_id)
            raise StoreError("Failed to update task") from e

    def delete_task(self, task_id: int) -> None:
        """
        Permanently delete a task.

        Raises:
            TaskNotFoundException: If the task does not exist
        """
        try:
            with Session(self._engine) as session:
                task = session.get(Task, task_id)
                if task is None:
                    raise TaskNotFoundException(task_id)

                session.delete(task)
                session.commit()

                logger.info(f"Deleted task {task_id}")
        except SQLAlchemyError as e:
            log_error(e, f"SQLTaskStore.delete_task (id={task_id})", task_id)
            raise StoreError("Failed to delete task") from e

    # ============ Categories ============

    def list_categories(self) -> List[Category]:
        """Get all categories ordered by name."""
        try:
            with Session(self._engine) as session:
                statement = select(Category).order_by(Category.name)
                return list(session.exec(statement).all())
        except SQLAlchemyError as e:
            log_error(e, "SQLTaskStore.list_categories")
            raise StoreError("Failed to retrieve categories") from e

    def get_category(self, category_id: int) -> Category:
        """
        Get a specific category by ID.

        Raises:
            CategoryNotFoundException: If the category does not exist
        """
        try:
            with Session(self._engine) as session:
                category = session.get(Category, category_id)
                if category is None:
                    raise CategoryNotFoundException(category_id)
                return category
        except SQLAlchemyError as e:
            log_error(e, f"SQLTaskStore.get_category (id={category_id})", category_id)
            raise StoreError("Failed to retrieve category") from e

    def create_category(self, category_data: CategoryCreate) -> Category:
        """
        Create a new category.

        Raises:
            ValidationError: If a category with the same name already exists
        """
        name = category_data.name.strip()
        if not name:
            raise ValidationError("Category name is required")

        try:
            with Session(self._engine) as session:
                existing = session.exec(select(Category).where(Category.name == name)).first()
                if existing is not None:
                    raise ValidationError(f"Category '{name}' already exists")

                category = Category(name=name, color=category_data.color)
                session.add(category)
                session.commit()
                session.refresh(category)

                logger.info(f"Created category {category.id}: {category.name!r}")
                return category
        except IntegrityError as e:
            raise ValidationError(f"Category '{name}' already exists") from e
        except SQLAlchemyError as e:
            log_error(e, "SQLTaskStore.create_category")
            raise StoreError("Failed to create category") from e

    def delete_category(self, category_id: int) -> None:
        """
        Delete a category.

        Tasks that reference it keep their category_id and resolve to the
        "No Category" display values until repaired or re-assigned.

        Raises:
            CategoryNotFoundException: If the category does not exist
        """
        try:
            with Session(self._engine) as session:
                category = session.get(Category, category_id)
                if category is None:
                    raise CategoryNotFoundException(category_id)

                session.delete(category)
                session.commit()

                logger.info(f"Deleted category {category_id}")
        except SQLAlchemyError as e:
            log_error(e, f"SQLTaskStore.delete_category (id={category_id})", category_id)
            raise StoreError("Failed to delete category") from e

    def seed_default_categories(self) -> int:
        """
        Insert the default categories when the categories table is empty.

        Returns:
            Number of categories inserted (0 when categories already exist)
        """
        try:
            with Session(self._engine) as session:
                count = session.exec(select(func.count()).select_from(Category)).one()
                if count:
                    return 0

                for category in DEFAULT_CATEGORIES:
                    session.add(Category(name=category["name"], color=category["color"]))
                session.commit()

                logger.info(f"Seeded {len(DEFAULT_CATEGORIES)} default categories")
                return len(DEFAULT_CATEGORIES)
        except SQLAlchemyError as e:
            log_error(e, "SQLTaskStore.seed_default_categories")
            raise StoreError("Failed to seed default categories") from e

    def repair_category_fields(self) -> int:
        """
        Recompute every task's denormalized category name and color from the
        categories table.

        Returns:
            Number of tasks whose display fields changed
        """
        try:
            with Session(self._engine) as session:
                categories = {c.id: c for c in session.exec(select(Category)).all()}
                repaired = 0

                for task in session.exec(select(Task)).all():
                    name, color = resolve_category_display(task.category_id, categories)
                    if task.category_name == name and task.category_color == color:
                        continue

                    task.category_name = name
                    task.category_color = color
                    session.add(task)
                    repaired += 1

                if repaired:
                    session.commit()
                    logger.info(f"Repaired category fields on {repaired} tasks")
                else:
                    logger.info("All tasks already have correct category information")
                return repaired
        except SQLAlchemyError as e:
            log_error(e, "SQLTaskStore.repair_category_fields")
            raise StoreError("Failed to repair task categories") from e

    @staticmethod
    def _category_display(session: Session, category_id: Optional[int]):
        if category_id is None:
            return resolve_category_display(None, {})

        category = session.get(Category, category_id)
        categories = {category_id: category} if category is not None else {}
        return resolve_category_display(category_id, categories)
