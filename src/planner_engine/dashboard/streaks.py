"""
Streak calculation for diary entries and task completions.

All streaks are counted on calendar dates. Callers convert timestamps to
dates before calling in; the helpers below do that for the model types.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Dict, Iterable

from planner_engine.core.dates import local_date
from planner_engine.core.models import DiaryEntry, Task

MAX_STREAK_DAYS = 365


def calculate_streak(
    entry_dates: Iterable[date],
    reference_date: date,
    max_days: int = MAX_STREAK_DAYS
) -> int:
    """
    Count consecutive days with an entry, walking back from reference_date.

    Args:
        entry_dates: Calendar dates that have a qualifying record
        reference_date: First day checked
        max_days: Upper bound on the walk

    Returns:
        Number of consecutive days, at most max_days
    """
    days = set(entry_dates)
    streak = 0
    check_date = reference_date

    while streak < max_days and check_date in days:
        streak += 1
        check_date -= timedelta(days=1)

    return streak


def diary_streak(
    entries: Iterable[DiaryEntry],
    reference_date: date,
    max_days: int = MAX_STREAK_DAYS
) -> int:
    """Current diary streak. Entries without a readable date are ignored."""
    dates = {e.entry_date for e in entries if e.entry_date is not None}
    return calculate_streak(dates, reference_date, max_days)


def completion_streak(
    tasks: Iterable[Task],
    now: datetime,
    max_days: int = MAX_STREAK_DAYS
) -> int:
    """
    Consecutive days on which at least one task was completed.

    Today does not break the streak: if nothing has been completed yet
    today, counting starts from yesterday.

    Args:
        tasks: Tasks of any status; only completion timestamps are used
        now: Reference instant, its time zone decides the calendar day
        max_days: Upper bound on the walk

    Returns:
        Completion streak in days
    """
    days = {
        local_date(t.completed_at, now)
        for t in tasks
        if t.is_completed() and t.completed_at is not None
    }
    today = now.date()
    start = today if today in days else today - timedelta(days=1)
    return calculate_streak(days, start, max_days)


def month_activity(
    entry_dates: Iterable[date],
    month_anchor: date
) -> Dict[date, bool]:
    """
    Map every day of the anchor's month to whether it has an entry.

    Args:
        entry_dates: Dates with entries
        month_anchor: Any date inside the month to lay out

    Returns:
        Dict ordered from the 1st to the last day of the month
    """
    days = set(entry_dates)
    _, last_day = calendar.monthrange(month_anchor.year, month_anchor.month)
    first = month_anchor.replace(day=1)
    return {
        first + timedelta(days=offset): (first + timedelta(days=offset)) in days
        for offset in range(last_day)
    }
