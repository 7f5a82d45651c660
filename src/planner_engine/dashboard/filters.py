"""
Task list filtering by status, due window, priority and category.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, List

from planner_engine.core.dates import as_utc, local_date, parse_datetime
from planner_engine.core.models import Task, TaskStatus
from planner_engine.dashboard.classifier import is_overdue

ALL = "all"


@dataclass(frozen=True)
class TaskFilters:
    """Active filter selection. "all" disables a filter."""
    status: str = ALL  # 'pending', 'in_progress', 'completed'
    due: str = ALL  # 'today', 'week', 'overdue'
    priority: str = ALL  # 'high', 'medium', 'low'
    category: str = ALL  # category display name


def _matches_due(task: Task, due: str, now: datetime) -> bool:
    if due == ALL:
        return True
    if task.due_date is None:
        return False
    if due == "today":
        return local_date(task.due_date, now) == now.date()
    if due == "week":
        moment = parse_datetime(task.due_date)
        if moment is None:
            return False
        reference = as_utc(now)
        return reference <= as_utc(moment) < reference + timedelta(days=7)
    if due == "overdue":
        return task.task_status is TaskStatus.PENDING and is_overdue(task.due_date, now)
    return False


def matches(task: Task, filters: TaskFilters, now: datetime) -> bool:
    """Check a single task against every active filter."""
    if filters.status != ALL and task.status != filters.status:
        return False
    if filters.priority != ALL and task.priority != filters.priority:
        return False
    if filters.category != ALL:
        if task.category is None or task.category.name != filters.category:
            return False
    return _matches_due(task, filters.due, now)


def apply_filters(tasks: Iterable[Task], filters: TaskFilters, now: datetime) -> List[Task]:
    """
    Filter tasks, keeping input order.

    Args:
        tasks: Tasks to filter
        filters: Active filter selection
        now: Reference instant for the due-window filters

    Returns:
        Tasks matching every active filter
    """
    return [t for t in tasks if matches(t, filters, now)]
