"""
Statistics service for the Task Tracker
Derives completion streaks and dashboard counters from a list of tasks.
Everything here is a pure function of its inputs.
"""
import math
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from ..models import Task, DayCompletion, StreakSummary, DashboardStats
from ..utils.dates import today as current_day


DEFAULT_WINDOW_DAYS = 365


def task_day(task: Task) -> date:
    """The calendar day a task counts toward: its due date, else the day it was created."""
    if task.due_date is not None:
        return task.due_date
    return task.created_at.date()


def group_tasks_by_day(tasks: Iterable[Task]) -> Dict[date, List[Task]]:
    """Bucket tasks by the day they count toward."""
    buckets: Dict[date, List[Task]] = defaultdict(list)
    for task in tasks:
        buckets[task_day(task)].append(task)
    return buckets


def daily_completions(
    tasks: Iterable[Task],
    window_days: int,
    reference_date: date,
) -> List[DayCompletion]:
    """
    Completion status for each day of the window ending at reference_date,
    oldest first. A day is complete only if it has at least one task and all
    of its tasks are completed.
    """
    buckets = group_tasks_by_day(tasks)
    completions = []
    for offset in range(window_days - 1, -1, -1):
        day = reference_date - timedelta(days=offset)
        day_tasks = buckets.get(day, [])
        completed = bool(day_tasks) and all(t.completed for t in day_tasks)
        completions.append(DayCompletion(date=day, completed=completed))
    return completions


def current_streak_days(completions: Sequence[DayCompletion]) -> int:
    """
    Consecutive complete days ending today.

    When today is not complete yet, a complete yesterday still counts as a
    streak of 1.
    """
    if not completions:
        return 0

    latest = list(reversed(completions))
    if not latest[0].completed:
        if len(latest) > 1 and latest[1].completed:
            return 1
        return 0

    streak = 0
    for day in latest:
        if not day.completed:
            break
        streak += 1
    return streak


def longest_streak_days(completions: Sequence[DayCompletion]) -> int:
    """Longest run of consecutive complete days."""
    longest = 0
    run = 0
    for day in completions:
        if day.completed:
            run += 1
            longest = max(longest, run)
        else:
            run = 0
    return longest


def compute_streak(
    tasks: Iterable[Task],
    window_days: int = DEFAULT_WINDOW_DAYS,
    reference_date: Optional[date] = None,
) -> StreakSummary:
    """
    Compute current and longest completion streaks over a trailing window.

    Args:
        tasks: Snapshot of tasks to evaluate
        window_days: Number of days in the window, including reference_date
        reference_date: Last day of the window (defaults to today)

    Returns:
        StreakSummary with the day-by-day calendar oldest first
    """
    if window_days <= 0:
        return StreakSummary()

    reference_date = reference_date or current_day()
    completions = daily_completions(tasks, window_days, reference_date)

    return StreakSummary(
        current_streak=current_streak_days(completions),
        longest_streak=longest_streak_days(completions),
        daily_completion=completions,
    )


def compute_dashboard(tasks: Sequence[Task], reference_date: Optional[date] = None) -> DashboardStats:
    """Totals, completion rate, overdue and due-today counts for the dashboard."""
    reference_date = reference_date or current_day()

    total = len(tasks)
    completed = sum(1 for t in tasks if t.completed)
    overdue = sum(
        1 for t in tasks
        if t.due_date is not None and t.due_date < reference_date and not t.completed
    )
    due_today = sum(
        1 for t in tasks
        if t.due_date == reference_date and not t.completed
    )

    return DashboardStats(
        total_tasks=total,
        completed_tasks=completed,
        completion_rate=math.floor(completed * 100 / total + 0.5) if total else 0,
        overdue_tasks=overdue,
        due_today_tasks=due_today,
    )
