"""
Report schedule: Monday and Friday mornings, Israel time.
"""
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from lotto_ai.config import REPORT_DAYS, REPORT_HOURS, TIMEZONE

MANUAL_EVENTS = ("workflow_dispatch",)


def now_in_israel() -> datetime:
    return datetime.now(ZoneInfo(TIMEZONE))


def is_report_window(now: Optional[datetime] = None) -> bool:
    """Monday or Friday, 07:00 through 11:59 local time."""
    now = now or now_in_israel()
    start, end = REPORT_HOURS
    return now.weekday() in REPORT_DAYS and start <= now.hour <= end


def should_run(now: Optional[datetime] = None, event_name: Optional[str] = None,
               force: bool = False) -> bool:
    """Manual triggers and ``force`` always run; scheduled triggers only inside the window."""
    if force or event_name in MANUAL_EVENTS:
        return True
    return is_report_window(now)


def next_report_date(from_date: Optional[date] = None) -> date:
    """First report day strictly after ``from_date``."""
    d = (from_date or now_in_israel().date()) + timedelta(days=1)
    while d.weekday() not in REPORT_DAYS:
        d += timedelta(days=1)
    return d
