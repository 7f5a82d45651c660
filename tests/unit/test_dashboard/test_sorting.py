"""
Unit tests for the sorting module.
"""

from datetime import datetime, timedelta, timezone

from planner_engine.core.models import CalendarEvent, Task
from planner_engine.dashboard.sorting import (
    SortKey,
    priority_rank,
    sort_by_start,
    sort_items,
    sort_timeline,
)


BASE = datetime(2025, 3, 10, 9, 0, tzinfo=timezone.utc)


def ids(items):
    return [t.id for t in items]


class TestSortByDueDate:
    """Tests for due date ordering."""

    def test_undated_sorts_last(self):
        """[None, D2, D1] with D1 < D2 gives [D1, D2, None]."""
        tasks = [
            Task(id="none", due_date=None),
            Task(id="d2", due_date=BASE + timedelta(days=2)),
            Task(id="d1", due_date=BASE + timedelta(days=1)),
        ]
        assert ids(sort_items(tasks, SortKey.DUE_DATE)) == ["d1", "d2", "none"]

    def test_undated_keep_input_order(self):
        tasks = [
            Task(id="a"),
            Task(id="dated", due_date=BASE),
            Task(id="b"),
            Task(id="c"),
        ]
        assert ids(sort_items(tasks, "due_date")) == ["dated", "a", "b", "c"]

    def test_equal_due_dates_are_stable(self):
        tasks = [Task(id=str(i), due_date=BASE) for i in range(5)]
        assert ids(sort_items(tasks, SortKey.DUE_DATE)) == ["0", "1", "2", "3", "4"]

    def test_mixed_naive_and_aware(self):
        """Naive timestamps are read as UTC and compare with aware ones."""
        tasks = [
            Task(id="aware", due_date=BASE),
            Task(id="naive", due_date=datetime(2025, 3, 10, 8, 0)),
        ]
        assert ids(sort_items(tasks, SortKey.DUE_DATE)) == ["naive", "aware"]

    def test_out_of_range_due_date_sorts_with_undated(self):
        """A timestamp that cannot be normalized to UTC does not break the sort."""
        edge = datetime(9999, 12, 31, 23, 59, 59, tzinfo=timezone(timedelta(hours=-5)))
        tasks = [
            Task(id="edge", due_date=edge),
            Task(id="none"),
            Task(id="dated", due_date=BASE),
        ]
        assert ids(sort_items(tasks, SortKey.DUE_DATE)) == ["dated", "edge", "none"]

    def test_input_not_mutated(self):
        tasks = [Task(id="b", due_date=BASE + timedelta(days=1)), Task(id="a", due_date=BASE)]
        sort_items(tasks, SortKey.DUE_DATE)
        assert ids(tasks) == ["b", "a"]


class TestSortByPriority:
    """Tests for priority ordering."""

    def test_rank_values(self):
        assert priority_rank("high") == 3
        assert priority_rank("medium") == 2
        assert priority_rank("low") == 1
        assert priority_rank(None) == 0
        assert priority_rank("urgent") == 0

    def test_highest_first_ties_stable(self):
        tasks = [
            Task(id="low", priority="low"),
            Task(id="none", priority=None),
            Task(id="high1", priority="high"),
            Task(id="med", priority="medium"),
            Task(id="high2", priority="high"),
            Task(id="weird", priority="urgent"),
        ]
        assert ids(sort_items(tasks, SortKey.PRIORITY)) == [
            "high1", "high2", "med", "low", "none", "weird",
        ]


class TestSortByCreatedAt:
    """Tests for creation time ordering."""

    def test_newest_first_missing_last(self):
        tasks = [
            Task(id="missing"),
            Task(id="old", created_at=BASE - timedelta(days=3)),
            Task(id="new", created_at=BASE),
        ]
        assert ids(sort_items(tasks, SortKey.CREATED_AT)) == ["new", "old", "missing"]

    def test_missing_keep_input_order(self):
        tasks = [Task(id="a"), Task(id="b")]
        assert ids(sort_items(tasks, "created_at")) == ["a", "b"]


class TestSortItemsKeys:
    """Tests for key handling."""

    def test_unknown_key_keeps_order(self):
        tasks = [Task(id="b"), Task(id="a")]
        assert ids(sort_items(tasks, "title")) == ["b", "a"]

    def test_accepts_generator(self):
        tasks = (Task(id=str(i), due_date=BASE - timedelta(days=i)) for i in range(3))
        assert ids(sort_items(tasks, SortKey.DUE_DATE)) == ["2", "1", "0"]


class TestTimeline:
    """Tests for merged task/event timelines."""

    def test_merges_chronologically(self):
        tasks = [
            Task(id="t-late", title="Late task", due_date=BASE + timedelta(hours=5)),
            Task(id="t-none", title="Undated"),
        ]
        events = [
            CalendarEvent(id="e-early", title="Standup", start_at=BASE),
            CalendarEvent(id="e-mid", title="Lunch", start_at=BASE + timedelta(hours=3)),
        ]
        timeline = sort_timeline(tasks, events)

        assert [i.item.id for i in timeline] == ["e-early", "e-mid", "t-late", "t-none"]
        assert [i.kind for i in timeline] == ["event", "event", "task", "task"]
        assert timeline[0].title == "Standup"

    def test_tasks_before_events_on_tie(self):
        tasks = [Task(id="t", due_date=BASE)]
        events = [CalendarEvent(id="e", start_at=BASE)]
        assert [i.item.id for i in sort_timeline(tasks, events)] == ["t", "e"]

    def test_sort_by_start(self):
        events = [
            CalendarEvent(id="none"),
            CalendarEvent(id="b", start_at=BASE + timedelta(hours=1)),
            CalendarEvent(id="a", start_at=BASE),
        ]
        assert ids(sort_by_start(events)) == ["a", "b", "none"]
