"""
Unit tests for the streaks module.
"""

from datetime import date, datetime, timedelta, timezone

from planner_engine.core.models import DiaryEntry, Task
from planner_engine.dashboard.streaks import (
    MAX_STREAK_DAYS,
    calculate_streak,
    completion_streak,
    diary_streak,
    month_activity,
)


TODAY = date(2025, 3, 10)


def days_back(count, start=TODAY):
    return {start - timedelta(days=i) for i in range(count)}


class TestCalculateStreak:
    """Tests for the backward day walk."""

    def test_no_entries_is_zero(self):
        assert calculate_streak(set(), TODAY) == 0

    def test_missing_today_is_zero(self):
        """A streak must include the reference date."""
        assert calculate_streak({TODAY - timedelta(days=1)}, TODAY) == 0

    def test_contiguous_days(self):
        """k consecutive days ending today gives k."""
        assert calculate_streak(days_back(5), TODAY) == 5

    def test_stops_at_first_gap(self):
        """Entries before a gap do not count."""
        dates = days_back(3) | {TODAY - timedelta(days=5), TODAY - timedelta(days=6)}
        assert calculate_streak(dates, TODAY) == 3

    def test_future_entries_ignored(self):
        """Entries after the reference date do not extend the streak."""
        dates = days_back(2) | {TODAY + timedelta(days=1)}
        assert calculate_streak(dates, TODAY) == 2

    def test_capped_at_365(self):
        """Streaks longer than a year report the cap."""
        assert calculate_streak(days_back(500), TODAY) == MAX_STREAK_DAYS == 365

    def test_custom_cap(self):
        assert calculate_streak(days_back(20), TODAY, max_days=10) == 10

    def test_accepts_any_iterable(self):
        """Duplicates and lists are fine."""
        dates = [TODAY, TODAY, TODAY - timedelta(days=1)]
        assert calculate_streak(dates, TODAY) == 2


class TestDiaryStreak:
    """Tests for diary_streak."""

    def test_counts_entry_dates(self):
        entries = [
            DiaryEntry(id=str(i), user_id="u1", entry_date=d)
            for i, d in enumerate(days_back(4))
        ]
        assert diary_streak(entries, TODAY) == 4

    def test_entries_without_date_ignored(self):
        entries = [
            DiaryEntry(id="1", entry_date=TODAY),
            DiaryEntry(id="2", entry_date=None),
        ]
        assert diary_streak(entries, TODAY) == 1


class TestCompletionStreak:
    """Tests for completion_streak."""

    NOW = datetime(2025, 3, 10, 15, 0, tzinfo=timezone.utc)

    def completed(self, day_offset, hour=9):
        moment = self.NOW.replace(hour=hour) - timedelta(days=day_offset)
        return Task(id=f"t{day_offset}", title="done", status="completed", completed_at=moment)

    def test_counts_from_today(self):
        tasks = [self.completed(0), self.completed(1), self.completed(2)]
        assert completion_streak(tasks, self.NOW) == 3

    def test_today_without_completion_does_not_break(self):
        """Nothing done yet today: the streak runs from yesterday."""
        tasks = [self.completed(1), self.completed(2)]
        assert completion_streak(tasks, self.NOW) == 2

    def test_gap_yesterday_breaks(self):
        tasks = [self.completed(2), self.completed(3)]
        assert completion_streak(tasks, self.NOW) == 0

    def test_ignores_not_completed_tasks(self):
        """Only completed tasks with a completion time count."""
        tasks = [
            Task(id="a", status="pending", completed_at=self.NOW),
            Task(id="b", status="completed", completed_at=None),
        ]
        assert completion_streak(tasks, self.NOW) == 0

    def test_multiple_completions_same_day_count_once(self):
        tasks = [self.completed(0, hour=8), self.completed(0, hour=10), self.completed(1)]
        assert completion_streak(tasks, self.NOW) == 2

    def test_day_boundary_uses_reference_time_zone(self):
        """23:30 UTC is already the next day at UTC+2."""
        tz = timezone(timedelta(hours=2))
        now = datetime(2025, 3, 10, 12, 0, tzinfo=tz)
        late = datetime(2025, 3, 9, 23, 30, tzinfo=timezone.utc)
        tasks = [Task(id="x", status="completed", completed_at=late)]
        assert completion_streak(tasks, now) == 1


class TestMonthActivity:
    """Tests for the month calendar map."""

    def test_covers_every_day_in_order(self):
        result = month_activity(set(), date(2024, 2, 14))
        days = list(result)
        assert len(days) == 29
        assert days[0] == date(2024, 2, 1)
        assert days[-1] == date(2024, 2, 29)

    def test_marks_entries(self):
        result = month_activity({date(2025, 3, 1), date(2025, 4, 1)}, TODAY)
        assert result[date(2025, 3, 1)] is True
        assert result[date(2025, 3, 2)] is False
        assert date(2025, 4, 1) not in result
