"""
Data aggregation module for the Life Planner dashboard.

Partitions raw task records into the buckets the pages display and
combines tasks, events, diary entries and supplements into a single
DashboardData snapshot computed against one reference instant.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from planner_engine.core.config import Config
from planner_engine.core.dates import local_date
from planner_engine.core.models import (
    CalendarEvent,
    DiaryEntry,
    Supplement,
    Task,
    TaskPriority,
    TaskStatus,
)
from planner_engine.dashboard.classifier import DateStatus, DateStatusClassifier, is_overdue
from planner_engine.dashboard.inventory import SupplementForecast, forecast_supplements
from planner_engine.dashboard.sorting import (
    TimelineItem,
    sort_by_due_date,
    sort_by_start,
    sort_timeline,
)
from planner_engine.dashboard.streaks import completion_streak, diary_streak

UNCATEGORIZED = "Uncategorized"


@dataclass
class TaskBuckets:
    """Task collection partitioned for display."""
    pending: List[Task] = field(default_factory=list)
    in_progress: List[Task] = field(default_factory=list)
    completed: List[Task] = field(default_factory=list)
    # Tasks whose status is missing or unknown
    unrecognized: List[Task] = field(default_factory=list)

    overdue: List[Task] = field(default_factory=list)

    high: List[Task] = field(default_factory=list)
    medium: List[Task] = field(default_factory=list)
    low: List[Task] = field(default_factory=list)

    by_category: Dict[str, List[Task]] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return (
            len(self.pending) + len(self.in_progress)
            + len(self.completed) + len(self.unrecognized)
        )

    @property
    def completion_rate(self) -> float:
        """Completed share of all tasks, in percent."""
        return len(self.completed) / self.total * 100 if self.total else 0.0

    def counts(self) -> Dict[str, int]:
        """Badge counts for every bucket."""
        return {
            "total": self.total,
            "pending": len(self.pending),
            "in_progress": len(self.in_progress),
            "completed": len(self.completed),
            "unrecognized": len(self.unrecognized),
            "overdue": len(self.overdue),
            "high": len(self.high),
            "medium": len(self.medium),
            "low": len(self.low),
        }


@dataclass(frozen=True)
class CategorySummary:
    """Per-category progress."""
    name: str
    total: int
    pending: int
    completed: int

    @property
    def completion_ratio(self) -> float:
        return self.completed / self.total if self.total else 0.0


def aggregate_tasks(
    tasks: Iterable[Task],
    now: datetime,
    uncategorized_label: str = UNCATEGORIZED
) -> TaskBuckets:
    """
    Partition tasks by status, priority and category.

    Args:
        tasks: Task records, left untouched
        now: Reference instant for the overdue bucket
        uncategorized_label: Group name for tasks without a category

    Returns:
        TaskBuckets built from fresh lists
    """
    buckets = TaskBuckets()
    status_buckets = {
        TaskStatus.PENDING: buckets.pending,
        TaskStatus.IN_PROGRESS: buckets.in_progress,
        TaskStatus.COMPLETED: buckets.completed,
    }
    priority_buckets = {
        TaskPriority.HIGH: buckets.high,
        TaskPriority.MEDIUM: buckets.medium,
        TaskPriority.LOW: buckets.low,
    }

    for task in tasks:
        status = task.task_status
        status_buckets.get(status, buckets.unrecognized).append(task)

        if status is TaskStatus.PENDING:
            if is_overdue(task.due_date, now):
                buckets.overdue.append(task)
            priority = task.task_priority
            if priority is not None:
                priority_buckets[priority].append(task)

        name = task.category.name if task.category is not None else uncategorized_label
        buckets.by_category.setdefault(name, []).append(task)

    return buckets


def category_summaries(buckets: TaskBuckets) -> List[CategorySummary]:
    """Summaries in the same order as buckets.by_category."""
    return [
        CategorySummary(
            name=name,
            total=len(tasks),
            pending=sum(1 for t in tasks if t.task_status is TaskStatus.PENDING),
            completed=sum(1 for t in tasks if t.task_status is TaskStatus.COMPLETED),
        )
        for name, tasks in buckets.by_category.items()
    ]


@dataclass
class DailyStats:
    """Statistics for the dashboard."""
    tasks_completed_today: int = 0
    tasks_remaining: int = 0
    tasks_overdue: int = 0
    events_today: int = 0
    completion_rate: float = 0.0


@dataclass
class DashboardData:
    """Complete dashboard data structure."""
    generated_at: datetime
    date: date
    greeting: str

    # Timelines
    today: List[TimelineItem]
    upcoming: List[TimelineItem]

    # Tasks
    buckets: TaskBuckets
    urgency: List[Tuple[Task, DateStatus]]
    categories: List[CategorySummary]

    # Streaks
    completion_streak: int
    diary_streak: int

    # Inventory
    supplements: List[SupplementForecast]

    stats: DailyStats


class TaskAggregator:
    """Task bucketing bound to configuration."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config if config else Config()
        self.classifier = DateStatusClassifier(self.config)

    def aggregate(self, tasks: Iterable[Task], now: datetime) -> TaskBuckets:
        label = self.config.get("uncategorized_label", "settings", UNCATEGORIZED)
        return aggregate_tasks(tasks, now, uncategorized_label=label)

    def tag_urgency(
        self,
        tasks: Iterable[Task],
        now: datetime
    ) -> List[Tuple[Task, DateStatus]]:
        """Pair each task with its due-date classification, soonest first."""
        return [(t, self.classifier.classify(t.due_date, now)) for t in sort_by_due_date(tasks)]


class DashboardAggregator:
    """
    Central data aggregation for the Today dashboard.

    Takes already-fetched record collections and combines them into a
    unified DashboardData structure. Every derived value uses the same
    reference instant.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize aggregator.

        Args:
            config: Configuration (creates default if not provided)
        """
        self.config = config if config else Config()
        self.task_aggregator = TaskAggregator(self.config)

    def _get_greeting(self, now: datetime) -> str:
        """
        Generate appropriate greeting based on time of day.

        Args:
            now: Current datetime

        Returns:
            Greeting string
        """
        hour = now.hour

        if hour < 12:
            return "Good morning"
        elif hour < 17:
            return "Good afternoon"
        else:
            return "Good evening"

    def get_today_items(
        self,
        tasks: Iterable[Task],
        events: Iterable[CalendarEvent],
        now: datetime
    ) -> List[TimelineItem]:
        """
        Pending tasks due today and events starting today, in time order.

        Args:
            tasks: Task records
            events: Event records
            now: Current datetime; its calendar day is "today"

        Returns:
            Chronological list of TimelineItem
        """
        today = now.date()
        due_today = [
            t for t in tasks
            if t.task_status is TaskStatus.PENDING
            and t.due_date is not None
            and local_date(t.due_date, now) == today
        ]
        events_today = [
            e for e in events
            if e.start_at is not None and local_date(e.start_at, now) == today
        ]
        return sort_timeline(due_today, events_today)

    def get_upcoming_items(
        self,
        tasks: Iterable[Task],
        events: Iterable[CalendarEvent],
        now: datetime
    ) -> List[TimelineItem]:
        """
        Pending tasks and events from tomorrow through the upcoming window.

        Each kind is capped at upcoming_limit items, nearest first, before
        the two are merged.

        Args:
            tasks: Task records
            events: Event records
            now: Current datetime

        Returns:
            Chronological list of TimelineItem
        """
        days = self.config.get("upcoming_days", "settings", 7)
        limit = self.config.get("upcoming_limit", "settings", 5)
        first_day = now.date() + timedelta(days=1)
        last_day = now.date() + timedelta(days=days)

        def in_window(moment: Optional[datetime]) -> bool:
            return moment is not None and first_day <= local_date(moment, now) <= last_day

        upcoming_tasks = sort_by_due_date(
            t for t in tasks
            if t.task_status is TaskStatus.PENDING and in_window(t.due_date)
        )[:limit]
        upcoming_events = sort_by_start(
            e for e in events if in_window(e.start_at)
        )[:limit]
        return sort_timeline(upcoming_tasks, upcoming_events)

    def get_daily_stats(
        self,
        buckets: TaskBuckets,
        events: Iterable[CalendarEvent],
        now: datetime
    ) -> DailyStats:
        """
        Get completion statistics for today.

        Args:
            buckets: Aggregated tasks
            events: Event records
            now: Current datetime

        Returns:
            DailyStats with counts and completion rate
        """
        today = now.date()
        completed_today = sum(
            1 for t in buckets.completed
            if t.completed_at is not None and local_date(t.completed_at, now) == today
        )
        remaining = len(buckets.pending) + len(buckets.in_progress)
        events_today = sum(
            1 for e in events
            if e.start_at is not None and local_date(e.start_at, now) == today
        )

        total_relevant = completed_today + remaining
        completion_rate = (
            (completed_today / total_relevant * 100)
            if total_relevant > 0 else 0.0
        )

        return DailyStats(
            tasks_completed_today=completed_today,
            tasks_remaining=remaining,
            tasks_overdue=len(buckets.overdue),
            events_today=events_today,
            completion_rate=completion_rate,
        )

    def aggregate(
        self,
        now: datetime,
        tasks: Iterable[Task] = (),
        events: Iterable[CalendarEvent] = (),
        diary_entries: Iterable[DiaryEntry] = (),
        supplements: Iterable[Supplement] = ()
    ) -> DashboardData:
        """
        Aggregate all data for the dashboard.

        Main entry point for deriving dashboard data from fetched records.

        Args:
            now: Reference instant shared by every derived value
            tasks: Task records
            events: Event records
            diary_entries: Diary entries of the current user
            supplements: Supplement inventory

        Returns:
            Complete DashboardData structure
        """
        tasks = list(tasks)
        events = list(events)
        today = now.date()
        streak_cap = self.config.get("streak_cap_days", "thresholds", 365)

        buckets = self.task_aggregator.aggregate(tasks, now)

        return DashboardData(
            generated_at=now,
            date=today,
            greeting=self._get_greeting(now),
            today=self.get_today_items(tasks, events, now),
            upcoming=self.get_upcoming_items(tasks, events, now),
            buckets=buckets,
            urgency=self.task_aggregator.tag_urgency(buckets.pending, now),
            categories=category_summaries(buckets),
            completion_streak=completion_streak(tasks, now, streak_cap),
            diary_streak=diary_streak(diary_entries, today, streak_cap),
            supplements=forecast_supplements(supplements, today, self.config),
            stats=self.get_daily_stats(buckets, events, now),
        )
