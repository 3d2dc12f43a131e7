"""
Task model for the Task Tracker
Defines the task entity with all required fields
"""
from datetime import datetime, date
from typing import Optional
from enum import Enum
from pydantic import StrictBool
from sqlalchemy import DateTime, Enum as SAEnum
from sqlmodel import Field, SQLModel, Column

from .category import NO_CATEGORY_NAME, NO_CATEGORY_COLOR
from ..utils.dates import utcnow


TITLE_MAX_LENGTH = 200

# Fields a PATCH may change; everything else on a task is store-managed
MUTABLE_FIELDS = ("title", "completed", "category_id", "priority", "due_date", "due_time")


class Priority(str, Enum):
    """Task priority levels"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskBase(SQLModel):
    """Base model for task with common fields"""
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    completed: bool = Field(default=False)
    category_id: Optional[int] = Field(default=None, index=True)
    priority: Priority = Field(default=Priority.MEDIUM)
    due_date: Optional[date] = Field(default=None)
    due_time: Optional[str] = Field(default=None, max_length=5)


class Task(TaskBase, table=True):
    """Task model for database table"""
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    # Stored by value ("medium") so rows written by older versions still load
    priority: Priority = Field(
        default=Priority.MEDIUM,
        sa_column=Column(
            SAEnum(Priority, values_callable=lambda e: [m.value for m in e], native_enum=False, length=10),
            nullable=False,
        ),
    )
    category_name: str = Field(default=NO_CATEGORY_NAME, max_length=100)
    category_color: str = Field(default=NO_CATEGORY_COLOR, max_length=32)
    # Naive UTC, see utils.dates.utcnow
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=False), nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=False), nullable=False)


class TaskCreate(SQLModel):
    """
    Schema for creating a new task.

    Fields are accepted loosely and normalized by TaskService: an invalid
    priority falls back to medium, and unparseable dates or times become null.
    """
    title: Optional[str] = None
    category_id: Optional[int] = None
    priority: Optional[str] = None
    due_date: Optional[str] = None
    due_time: Optional[str] = None


class TaskUpdate(SQLModel):
    """Schema for updating task information (only the fields sent are applied)"""
    title: Optional[str] = None
    completed: Optional[StrictBool] = None
    category_id: Optional[int] = None
    priority: Optional[str] = None
    due_date: Optional[str] = None
    due_time: Optional[str] = None


class TaskPublic(TaskBase):
    """Public representation of task"""
    id: int
    category_name: str
    category_color: str
    created_at: datetime
    updated_at: datetime
