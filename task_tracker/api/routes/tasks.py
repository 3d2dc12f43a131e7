"""
Task API routes for the Task Tracker
Handles listing, creating, updating and deleting tasks
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError as PydanticValidationError

from ...models.task import TaskCreate, TaskUpdate, TaskPublic
from ...repositories import TaskFilter, DateField
from ...services.task_service import TaskService
from ...utils.errors import StoreError, TaskNotFoundException, ValidationError
from ..deps import get_task_service


router = APIRouter()


@router.get("", response_model=List[TaskPublic])
def list_tasks(
    category_id: Optional[int] = Query(None, alias="categoryId"),
    completed: Optional[bool] = Query(None),
    on_date: Optional[date] = Query(None, alias="date"),
    date_field: DateField = Query("due_date", alias="dateField"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    view: str = Query("all"),
    service: TaskService = Depends(get_task_service),
):
    """
    Get tasks, optionally filtered.

    Args:
        category_id: Only tasks in this category
        completed: Only completed (true) or open (false) tasks
        on_date: Only tasks whose date_field falls on this day
        date_field: Which date the date filters apply to (due_date or created_at)
        start_date: Only tasks whose date_field is on or after this day
        end_date: Only tasks whose date_field is on or before this day
        view: all, today or upcoming (next 7 days)

    Returns:
        Tasks with category display fields, dated tasks first
    """
    try:
        task_filter = TaskFilter(
            category_id=category_id,
            completed=completed,
            on_date=on_date,
            start_date=start_date,
            end_date=end_date,
            date_field=date_field,
        )
    except PydanticValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.errors()[0]["msg"],
        )

    try:
        return service.list_tasks(task_filter, view=view)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve tasks"
        )


@router.post("", response_model=TaskPublic, status_code=status.HTTP_201_CREATED)
def create_task(
    request: TaskCreate,
    service: TaskService = Depends(get_task_service),
):
    """
    Create a new task.

    Returns:
        Created task
    """
    try:
        return service.create_task(request)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create task"
        )


@router.patch("/{task_id}", response_model=TaskPublic)
def update_task(
    task_id: int,
    request: TaskUpdate,
    service: TaskService = Depends(get_task_service),
):
    """
    Update some fields of a task.

    Returns:
        Updated task
    """
    try:
        return service.update_task(task_id, request)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except TaskNotFoundException:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task with ID {task_id} not found"
        )
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update task"
        )


@router.delete("/{task_id}")
def delete_task(
    task_id: int,
    service: TaskService = Depends(get_task_service),
):
    """Permanently delete a task."""
    try:
        service.delete_task(task_id)
        return {"success": True}
    except TaskNotFoundException:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task with ID {task_id} not found"
        )
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete task"
        )
