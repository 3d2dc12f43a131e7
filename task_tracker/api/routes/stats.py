"""
Statistics API routes for the Task Tracker
Completion streaks and dashboard counters
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...config import Settings
from ...models.stats import StatisticsPublic
from ...services.task_service import TaskService
from ...utils.errors import StoreError
from ..deps import get_settings, get_task_service


router = APIRouter()


@router.get("", response_model=StatisticsPublic)
def get_statistics(
    window_days: Optional[int] = Query(None, alias="windowDays", ge=1, le=3660),
    service: TaskService = Depends(get_task_service),
    app_settings: Settings = Depends(get_settings),
):
    """
    Get the completion streaks and dashboard counters.

    Args:
        window_days: Days of history in the streak calendar (defaults to STREAK_WINDOW_DAYS)
    """
    try:
        return service.get_statistics(window_days=window_days or app_settings.streak_window_days)
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to compute statistics"
        )
