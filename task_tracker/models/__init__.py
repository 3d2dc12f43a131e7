"""
Models module for the Task Tracker
Contains all database models and API schemas
"""
from sqlmodel import SQLModel
from .category import (
    Category,
    CategoryCreate,
    CategoryPublic,
    DEFAULT_CATEGORIES,
    NO_CATEGORY_NAME,
    NO_CATEGORY_COLOR,
    resolve_category_display,
)
from .task import Task, TaskBase, TaskCreate, TaskUpdate, TaskPublic, Priority, MUTABLE_FIELDS
from .stats import DayCompletion, StreakSummary, DashboardStats, StatisticsPublic

__all__ = [
    "SQLModel",
    "Category",
    "CategoryCreate",
    "CategoryPublic",
    "DEFAULT_CATEGORIES",
    "NO_CATEGORY_NAME",
    "NO_CATEGORY_COLOR",
    "resolve_category_display",
    "Task",
    "TaskBase",
    "TaskCreate",
    "TaskUpdate",
    "TaskPublic",
    "Priority",
    "MUTABLE_FIELDS",
    "DayCompletion",
    "StreakSummary",
    "DashboardStats",
    "StatisticsPublic",
]
