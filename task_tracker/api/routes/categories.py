"""
Category API routes for the Task Tracker
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...models.category import CategoryCreate, CategoryPublic
from ...services.task_service import TaskService
from ...utils.errors import CategoryNotFoundException, StoreError, ValidationError
from ..deps import get_task_service


router = APIRouter()


@router.get("", response_model=List[CategoryPublic])
def list_categories(service: TaskService = Depends(get_task_service)):
    """Get all categories ordered by name."""
    try:
        return service.list_categories()
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve categories"
        )


@router.post("", response_model=CategoryPublic, status_code=status.HTTP_201_CREATED)
def create_category(
    request: CategoryCreate,
    service: TaskService = Depends(get_task_service),
):
    """Create a new category. Names must be unique."""
    try:
        return service.create_category(request)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create category"
        )


@router.delete("/{category_id}")
def delete_category(
    category_id: int,
    service: TaskService = Depends(get_task_service),
):
    """
    Delete a category.

    Tasks in the category are kept and show as "No Category".
    """
    try:
        service.delete_category(category_id)
        return {"success": True}
    except CategoryNotFoundException:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Category with ID {category_id} not found"
        )
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete category"
        )
