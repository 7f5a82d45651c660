"""
Ordering rules for task and event lists.

All sorts are stable, so items with equal keys keep their input order.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union

from planner_engine.core.dates import as_utc, parse_datetime
from planner_engine.core.models import CalendarEvent, Task, TaskPriority

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class SortKey(str, Enum):
    DUE_DATE = "due_date"
    PRIORITY = "priority"
    CREATED_AT = "created_at"


def _undated_last(when: Optional[datetime]) -> Tuple[bool, datetime]:
    # Values that cannot be normalized sort with the undated ones
    moment = parse_datetime(when)
    return (moment is None, as_utc(moment) if moment is not None else EPOCH)


def priority_rank(priority: Optional[str]) -> int:
    """high=3, medium=2, low=1, anything else 0."""
    parsed = TaskPriority.parse(priority)
    return parsed.rank if parsed is not None else 0


def sort_by_due_date(tasks: Iterable[Task]) -> List[Task]:
    """Earliest due first; tasks without a due date go last."""
    return sorted(tasks, key=lambda t: _undated_last(t.due_date))


def sort_by_priority(tasks: Iterable[Task]) -> List[Task]:
    """Highest priority first."""
    return sorted(tasks, key=lambda t: priority_rank(t.priority), reverse=True)


def _created_key(when: Optional[datetime]) -> datetime:
    moment = parse_datetime(when)
    return as_utc(moment) if moment is not None else EPOCH


def sort_by_created_at(tasks: Iterable[Task]) -> List[Task]:
    """Newest first; a missing creation time counts as the epoch."""
    return sorted(
        tasks,
        key=lambda t: _created_key(t.created_at),
        reverse=True,
    )


def sort_by_start(events: Iterable[CalendarEvent]) -> List[CalendarEvent]:
    """Earliest start first; events without a start go last."""
    return sorted(events, key=lambda e: _undated_last(e.start_at))


def sort_items(tasks: Iterable[Task], key: Union[SortKey, str]) -> List[Task]:
    """
    Sort tasks by the given key.

    Args:
        tasks: Tasks to order
        key: SortKey or its string value

    Returns:
        New sorted list; input order for an unknown key
    """
    try:
        sort_key = SortKey(key)
    except ValueError:
        logger.warning("Unknown sort key %r, keeping input order", key)
        return list(tasks)

    if sort_key is SortKey.DUE_DATE:
        return sort_by_due_date(tasks)
    elif sort_key is SortKey.PRIORITY:
        return sort_by_priority(tasks)
    else:
        return sort_by_created_at(tasks)


@dataclass(frozen=True)
class TimelineItem:
    """A task or event placed on a combined timeline."""
    kind: str  # 'task' or 'event'
    when: Optional[datetime]
    item: Union[Task, CalendarEvent]

    @property
    def title(self) -> str:
        return self.item.title


def sort_timeline(
    tasks: Iterable[Task],
    events: Iterable[CalendarEvent]
) -> List[TimelineItem]:
    """
    Merge tasks (by due date) and events (by start) chronologically.

    Undated items go after dated ones. On equal timestamps tasks come
    before events.
    """
    items = [TimelineItem("task", t.due_date, t) for t in tasks]
    items += [TimelineItem("event", e.start_at, e) for e in events]
    return sorted(items, key=lambda i: _undated_last(i.when))
