"""
Category model for the Task Tracker
Defines the category entity and the fallback display values for uncategorized tasks
"""
import re
from typing import Mapping, Optional, Tuple

from pydantic import field_validator
from sqlmodel import Field, SQLModel


NO_CATEGORY_NAME = "No Category"
NO_CATEGORY_COLOR = "#9ca3af"
HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")

DEFAULT_CATEGORIES = [
    {"name": "Work", "color": "#4f46e5"},
    {"name": "Personal", "color": "#16a34a"},
    {"name": "Shopping", "color": "#ea580c"},
    {"name": "Health", "color": "#dc2626"},
    {"name": "Education", "color": "#9333ea"},
]


class CategoryBase(SQLModel):
    """Base model for category with common fields"""
    name: str = Field(min_length=1, max_length=100)
    color: str = Field(min_length=1, max_length=32)


class Category(CategoryBase, table=True):
    """Category model for database table"""
    __tablename__ = "categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, unique=True, nullable=False)


class CategoryCreate(CategoryBase):
    """Schema for creating a new category"""
    color: str = Field(default=NO_CATEGORY_COLOR, max_length=32)

    @field_validator("color")
    @classmethod
    def check_hex_color(cls, value: str) -> str:
        if not HEX_COLOR_PATTERN.match(value):
            raise ValueError("color must be a hex value such as #4f46e5")
        return value


class CategoryPublic(CategoryBase):
    """Public representation of category"""
    id: int


def resolve_category_display(
    category_id: Optional[int],
    categories: Mapping[int, Category],
) -> Tuple[str, str]:
    """
    Return the (name, color) pair shown for a task's category.

    Null or unresolved category IDs map to the "No Category" sentinel pair.
    """
    if category_id is None:
        return NO_CATEGORY_NAME, NO_CATEGORY_COLOR

    category = categories.get(category_id)
    if category is None:
        return NO_CATEGORY_NAME, NO_CATEGORY_COLOR

    return category.name, category.color
