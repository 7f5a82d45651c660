"""
Unit tests for the classifier module.
Tests due-date classification against an explicit reference instant.
"""

import pytest
from datetime import datetime, timedelta, timezone

from planner_engine.core.config import Config
from planner_engine.dashboard.classifier import (
    DateStatus,
    DateStatusClassifier,
    classify_date,
    is_overdue,
)


NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


class TestClassifyDate:
    """Tests for classify_date boundaries."""

    def test_missing_timestamp_is_no_date(self):
        """None classifies as NO_DATE."""
        assert classify_date(None, NOW) is DateStatus.NO_DATE

    def test_empty_string_is_no_date(self):
        """An empty string is treated as an absent timestamp."""
        assert classify_date("", NOW) is DateStatus.NO_DATE

    @pytest.mark.parametrize("delta", [
        timedelta(microseconds=1),
        timedelta(hours=1),
        timedelta(days=400),
    ])
    def test_past_timestamp_is_overdue(self, delta):
        """Anything strictly before now is OVERDUE."""
        assert classify_date(NOW - delta, NOW) is DateStatus.OVERDUE

    def test_exactly_now_is_due_soon(self):
        """now itself is the first instant of the due-soon band."""
        assert classify_date(NOW, NOW) is DateStatus.DUE_SOON

    def test_just_under_24_hours_is_due_soon(self):
        """now + 24h - 1us is still due soon."""
        due = NOW + timedelta(hours=24) - timedelta(microseconds=1)
        assert classify_date(due, NOW) is DateStatus.DUE_SOON

    def test_exactly_24_hours_is_upcoming(self):
        """now + 24h is the first upcoming instant."""
        assert classify_date(NOW + timedelta(hours=24), NOW) is DateStatus.UPCOMING

    def test_far_future_is_upcoming(self):
        """Dates weeks ahead are UPCOMING."""
        assert classify_date(NOW + timedelta(days=30), NOW) is DateStatus.UPCOMING

    def test_iso_string_is_parsed(self):
        """ISO strings from the storage layer are accepted."""
        assert classify_date("2025-03-10T11:00:00+00:00", NOW) is DateStatus.OVERDUE
        assert classify_date("2025-03-10T18:00:00Z", NOW) is DateStatus.DUE_SOON

    def test_garbage_string_is_invalid_date(self):
        """Unparseable input yields INVALID_DATE instead of raising."""
        assert classify_date("not a date", NOW) is DateStatus.INVALID_DATE

    def test_unsupported_type_is_invalid_date(self):
        """Non-date types yield INVALID_DATE instead of raising."""
        assert classify_date(12345, NOW) is DateStatus.INVALID_DATE

    @pytest.mark.parametrize("value", [
        "9999-12-31T23:59:59-05:00",
        "0001-01-01T00:00:00+05:00",
        "9999-12-31T12:00:00Z",
    ])
    def test_calendar_edge_is_invalid_date(self, value):
        """Timestamps that overflow when normalized to UTC yield INVALID_DATE."""
        assert classify_date(value, NOW) is DateStatus.INVALID_DATE

    def test_partial_date_does_not_depend_on_clock(self):
        """Non-ISO strings are rejected rather than completed from the wall clock."""
        assert classify_date("Mar 5", NOW) is DateStatus.INVALID_DATE
        assert classify_date("Mar 5", datetime(2020, 1, 1, 12, tzinfo=timezone.utc)) is DateStatus.INVALID_DATE

    def test_naive_timestamp_compares_with_aware_now(self):
        """Naive timestamps are read as UTC so they compare with aware now."""
        naive = datetime(2025, 3, 10, 11, 59)
        assert classify_date(naive, NOW) is DateStatus.OVERDUE

    def test_other_time_zone_compares_by_instant(self):
        """Offsets are respected: 13:30+02:00 is 11:30 UTC, before noon UTC."""
        due = datetime(2025, 3, 10, 13, 30, tzinfo=timezone(timedelta(hours=2)))
        assert classify_date(due, NOW) is DateStatus.OVERDUE


class TestIsOverdue:
    """Tests for the is_overdue helper."""

    def test_none_is_not_overdue(self):
        assert is_overdue(None, NOW) is False

    def test_past_is_overdue(self):
        assert is_overdue(NOW - timedelta(minutes=1), NOW) is True

    def test_now_is_not_overdue(self):
        assert is_overdue(NOW, NOW) is False


class TestDateStatusClassifier:
    """Tests for the configured classifier."""

    def test_default_window_is_24_hours(self):
        """Default config uses a 24 hour due-soon band."""
        classifier = DateStatusClassifier()
        assert classifier.due_soon_window == timedelta(hours=24)
        assert classifier.classify(NOW + timedelta(hours=23), NOW) is DateStatus.DUE_SOON

    def test_window_from_config(self):
        """The due-soon band follows the configured hours."""
        config = Config()
        config.set("due_soon_hours", 2, section="thresholds")
        classifier = DateStatusClassifier(config)

        assert classifier.classify(NOW + timedelta(hours=1), NOW) is DateStatus.DUE_SOON
        assert classifier.classify(NOW + timedelta(hours=3), NOW) is DateStatus.UPCOMING
