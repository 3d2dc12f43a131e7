"""
Maintenance API routes for the Task Tracker
"""
from fastapi import APIRouter, Depends, HTTPException, status

from ...services.task_service import TaskService
from ...utils.errors import StoreError
from ..deps import get_task_service


router = APIRouter()


@router.post("/repair-categories")
def repair_categories(service: TaskService = Depends(get_task_service)):
    """Recompute every task's category name and color from the categories table."""
    try:
        repaired = service.repair_categories()
        return {"success": True, "repaired": repaired}
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to repair task categories"
        )
