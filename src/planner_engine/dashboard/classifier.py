"""
Due-date classification for the Life Planner dashboard.

Places a single due/start timestamp relative to a reference instant:

    - No timestamp:                   NO_DATE
    - Strictly before now:            OVERDUE
    - now <= t < now + window (24h):  DUE_SOON
    - Everything later:               UPCOMING
    - Unreadable timestamp:           INVALID_DATE

The reference instant is always passed in; nothing here reads the clock.
"""

import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Optional, Union

from planner_engine.core.config import Config
from planner_engine.core.dates import InvalidDateError, as_utc, to_datetime

logger = logging.getLogger(__name__)

DEFAULT_DUE_SOON_WINDOW = timedelta(hours=24)


class DateStatus(str, Enum):
    """Urgency of a timestamp relative to now."""
    NO_DATE = "no-date"
    OVERDUE = "overdue"
    DUE_SOON = "due-soon"
    UPCOMING = "upcoming"
    INVALID_DATE = "invalid-date"


def classify_date(
    due_or_start: Union[datetime, str, None],
    now: datetime,
    due_soon_window: timedelta = DEFAULT_DUE_SOON_WINDOW
) -> DateStatus:
    """
    Classify a due or start timestamp against now.

    Args:
        due_or_start: Timestamp (datetime or ISO string), or None
        now: Reference instant
        due_soon_window: Width of the due-soon band after now

    Returns:
        DateStatus for the timestamp
    """
    try:
        moment = to_datetime(due_or_start)
    except InvalidDateError:
        logger.debug("Cannot classify malformed timestamp %r", due_or_start)
        return DateStatus.INVALID_DATE

    if moment is None:
        return DateStatus.NO_DATE

    moment = as_utc(moment)
    reference = as_utc(now)

    if moment < reference:
        return DateStatus.OVERDUE
    if moment < reference + due_soon_window:
        return DateStatus.DUE_SOON
    return DateStatus.UPCOMING


def is_overdue(due: Optional[datetime], now: datetime) -> bool:
    """True when due is present and strictly before now."""
    return classify_date(due, now) is DateStatus.OVERDUE


class DateStatusClassifier:
    """Classifier bound to the due-soon window from configuration."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config if config else Config()
        hours = self.config.get("due_soon_hours", "thresholds", 24)
        self.due_soon_window = timedelta(hours=hours)

    def classify(self, due_or_start: Any, now: datetime) -> DateStatus:
        return classify_date(due_or_start, now, self.due_soon_window)
