"""
Task service module for the Task Tracker
Handles validation, normalization, category enrichment and ordering of tasks
"""
import logging
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..models import (
    Task,
    TaskBase,
    TaskCreate,
    TaskUpdate,
    Priority,
    Category,
    CategoryCreate,
    StatisticsPublic,
    resolve_category_display,
)
from ..models.task import TITLE_MAX_LENGTH
from ..repositories import TaskStore, TaskFilter
from ..utils.dates import parse_due_date, parse_due_time, today as current_day
from ..utils.errors import ValidationError
from .statistics_service import DEFAULT_WINDOW_DAYS, compute_dashboard, compute_streak


logger = logging.getLogger(__name__)


VIEWS = ("all", "today", "upcoming")
UPCOMING_DAYS = 7


class TaskService:
    """
    Service class for task and category operations.

    The record store is passed in at construction; the pure helpers are
    static methods so they can be used without one.
    """

    def __init__(self, store: TaskStore):
        self.store = store

    # ============ Normalization ============

    @staticmethod
    def normalize_title(title: Optional[str]) -> str:
        """Strip a title and reject it when empty or too long."""
        if title is not None and not isinstance(title, str):
            raise ValidationError("Task title must be a string")

        title = (title or "").strip()
        if not title:
            raise ValidationError("Task title is required")
        if len(title) > TITLE_MAX_LENGTH:
            raise ValidationError(f"Task title exceeds maximum length of {TITLE_MAX_LENGTH} characters")
        return title

    @staticmethod
    def parse_priority(value: Any) -> Optional[Priority]:
        """Parse a priority name, case-insensitively. Returns None when invalid."""
        if not isinstance(value, str):
            return None
        try:
            return Priority(value.strip().lower())
        except ValueError:
            return None

    @staticmethod
    def normalize_new_task(task_data: TaskCreate) -> TaskBase:
        """
        Validate and normalize input for a new task.

        - title is stripped and must not be empty
        - priority falls back to medium when missing or invalid
        - due_date must be an ISO calendar date, otherwise it is dropped
        - due_time must be HH:MM (24-hour), otherwise it is dropped

        Raises:
            ValidationError: If the title is missing or blank
        """
        title = TaskService.normalize_title(task_data.title)
        priority = TaskService.parse_priority(task_data.priority) or Priority.MEDIUM

        return TaskBase(
            title=title,
            completed=False,
            category_id=task_data.category_id,
            priority=priority,
            due_date=parse_due_date(task_data.due_date),
            due_time=parse_due_time(task_data.due_time),
        )

    @staticmethod
    def normalize_update(task_data: TaskUpdate) -> Dict[str, Any]:
        """
        Keep the valid fields of a partial update.

        Only fields present in the request are considered. An explicit null
        clears category_id, due_date or due_time; an unparseable priority,
        date or time is ignored.

        Raises:
            ValidationError: If the title is blank or no valid fields remain
        """
        supplied = task_data.model_dump(exclude_unset=True)
        updates: Dict[str, Any] = {}

        if "title" in supplied:
            updates["title"] = TaskService.normalize_title(supplied["title"])

        if supplied.get("completed") is not None:
            updates["completed"] = supplied["completed"]

        if "category_id" in supplied:
            updates["category_id"] = supplied["category_id"]

        if "priority" in supplied:
            priority = TaskService.parse_priority(supplied["priority"])
            if priority is not None:
                updates["priority"] = priority

        if "due_date" in supplied:
            if supplied["due_date"] is None:
                updates["due_date"] = None
            else:
                due_date = parse_due_date(supplied["due_date"])
                if due_date is not None:
                    updates["due_date"] = due_date

        if "due_time" in supplied:
            if supplied["due_time"] is None:
                updates["due_time"] = None
            else:
                due_time = parse_due_time(supplied["due_time"])
                if due_time is not None:
                    updates["due_time"] = due_time

        if not updates:
            raise ValidationError("No valid fields to update")

        return updates

    # ============ Derived views ============

    @staticmethod
    def enrich_with_category(task: Task, categories: Mapping[int, Category]) -> Task:
        """Set the task's category name and color from its category, or the sentinel pair."""
        task.category_name, task.category_color = resolve_category_display(task.category_id, categories)
        return task

    @staticmethod
    def sort_for_display(tasks: Iterable[Task]) -> List[Task]:
        """
        Order tasks for display.

        Tasks with a due date come first, earliest due date first. Ties and
        tasks without a due date are ordered newest first.
        """
        newest_first = sorted(tasks, key=lambda t: t.created_at, reverse=True)
        return sorted(
            newest_first,
            key=lambda t: (t.due_date is None, t.due_date or date.min),
        )

    @staticmethod
    def filter_by_view(tasks: Iterable[Task], view: str, today: Optional[date] = None) -> List[Task]:
        """
        Keep the tasks belonging to a view.

        - "all": every task
        - "today": due today
        - "upcoming": due between today and seven days from now, inclusive

        Raises:
            ValidationError: If the view is unknown
        """
        if view not in VIEWS:
            raise ValidationError(f"Unknown view '{view}'. Expected one of: {', '.join(VIEWS)}")

        if view == "all":
            return list(tasks)

        today = today or current_day()
        if view == "today":
            return [t for t in tasks if t.due_date == today]

        horizon = today + timedelta(days=UPCOMING_DAYS)
        return [t for t in tasks if t.due_date is not None and today <= t.due_date <= horizon]

    # ============ Tasks ============

    def list_tasks(
        self,
        task_filter: Optional[TaskFilter] = None,
        view: str = "all",
        today: Optional[date] = None,
    ) -> List[Task]:
        """
        Get tasks matching a filter and view, enriched and sorted for display.

        Category display fields are refreshed from the categories table so a
        task whose category was deleted shows "No Category".
        """
        if view not in VIEWS:
            raise ValidationError(f"Unknown view '{view}'. Expected one of: {', '.join(VIEWS)}")

        tasks = self.store.list_tasks(task_filter)
        categories = {c.id: c for c in self.store.list_categories()}
        enriched = [self.enrich_with_category(task, categories) for task in tasks]

        return self.sort_for_display(self.filter_by_view(enriched, view, today))

    def create_task(self, task_data: TaskCreate) -> Task:
        """Validate and store a new task."""
        draft = self.normalize_new_task(task_data)
        return self.store.create_task(draft)

    def update_task(self, task_id: int, task_data: TaskUpdate) -> Task:
        """Validate and apply a partial update to a task."""
        updates = self.normalize_update(task_data)
        return self.store.update_task(task_id, updates)

    def delete_task(self, task_id: int) -> None:
        """Permanently delete a task."""
        self.store.delete_task(task_id)

    # ============ Categories ============

    def list_categories(self) -> List[Category]:
        return self.store.list_categories()

    def create_category(self, category_data: CategoryCreate) -> Category:
        return self.store.create_category(category_data)

    def delete_category(self, category_id: int) -> None:
        self.store.delete_category(category_id)

    def seed_default_categories(self) -> int:
        return self.store.seed_default_categories()

    def repair_categories(self) -> int:
        """Recompute denormalized category fields on all tasks. Returns how many changed."""
        return self.store.repair_category_fields()

    # ============ Statistics ============

    def get_statistics(
        self,
        window_days: int = DEFAULT_WINDOW_DAYS,
        reference_date: Optional[date] = None,
    ) -> StatisticsPublic:
        """Streaks and dashboard counters over all tasks."""
        reference_date = reference_date or current_day()
        tasks = self.store.list_tasks()

        return StatisticsPublic(
            streak=compute_streak(tasks, window_days=window_days, reference_date=reference_date),
            dashboard=compute_dashboard(tasks, reference_date=reference_date),
        )
