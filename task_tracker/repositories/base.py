"""
Record store contract for the Task Tracker
The service layer depends on this protocol rather than a concrete backend
"""
from datetime import date
from typing import Any, Dict, List, Literal, Optional, Protocol

from pydantic import BaseModel, model_validator

from ..models import Task, TaskBase, Category, CategoryCreate


DateField = Literal["due_date", "created_at"]


class TaskFilter(BaseModel):
    """
    Conjunction of optional task filters. Unset fields apply no filtering.

    `on_date` selects a single day; `start_date`/`end_date` select an inclusive
    range. Both are applied to `date_field`.
    """
    category_id: Optional[int] = None
    completed: Optional[bool] = None
    on_date: Optional[date] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    date_field: DateField = "due_date"

    @model_validator(mode="after")
    def check_range(self) -> "TaskFilter":
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class TaskStore(Protocol):
    """Durable CRUD over tasks and categories"""

    def list_tasks(self, task_filter: Optional[TaskFilter] = None) -> List[Task]: ...

    def get_task(self, task_id: int) -> Task: ...

    def create_task(self, draft: TaskBase) -> Task: ...

    def update_task(self, task_id: int, changes: Dict[str, Any]) -> Task: ...

    def delete_task(self, task_id: int) -> None: ...

    def list_categories(self) -> List[Category]: ...

    def get_category(self, category_id: int) -> Category: ...

    def create_category(self, category_data: CategoryCreate) -> Category: ...

    def delete_category(self, category_id: int) -> None: ...

    def seed_default_categories(self) -> int: ...

    def repair_category_fields(self) -> int: ...
