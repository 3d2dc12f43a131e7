"""
Statistics models for the Task Tracker
Shapes returned by the streak and dashboard computations
"""
import datetime
from typing import List

from pydantic import BaseModel


class DayCompletion(BaseModel):
    """Completion status of one calendar day"""
    date: datetime.date
    completed: bool


class StreakSummary(BaseModel):
    """Current and longest streak plus the day-by-day calendar (oldest first)"""
    current_streak: int = 0
    longest_streak: int = 0
    daily_completion: List[DayCompletion] = []


class DashboardStats(BaseModel):
    """Counters shown on the dashboard"""
    total_tasks: int = 0
    completed_tasks: int = 0
    completion_rate: int = 0
    overdue_tasks: int = 0
    due_today_tasks: int = 0


class StatisticsPublic(BaseModel):
    """Response body for the statistics endpoint"""
    streak: StreakSummary
    dashboard: DashboardStats
