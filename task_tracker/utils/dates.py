"""
Date and time helpers shared by the service and statistics layers
"""
import re
from datetime import date, datetime, timezone
from typing import Any, Optional


DUE_TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today() -> date:
    """The calendar day used for "today", "upcoming" and streak windows."""
    return date.today()


def parse_due_date(value: Any) -> Optional[date]:
    """Parse an ISO calendar date (or the date part of an ISO timestamp). Returns None when invalid."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def parse_due_time(value: Any) -> Optional[str]:
    """Validate a 24-hour H:MM / HH:MM time string. Returns None when invalid."""
    if not isinstance(value, str):
        return None
    text = value.strip()
    if DUE_TIME_PATTERN.match(text):
        return text
    return None
