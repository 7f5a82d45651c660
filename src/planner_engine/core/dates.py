"""
Date and time helpers shared by the engine.

Rows arrive from the storage layer with timestamps as ISO strings, native
datetimes, or occasionally garbage. Everything here is tolerant: parsing
failures come back as None instead of raising.
"""

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Optional

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

# Widest UTC offset a value may be shifted by when shown in another zone
ZONE_MARGIN = timedelta(days=1)


class InvalidDateError(ValueError):
    """Raised by the strict converters when a value cannot be read as a date."""


def to_datetime(value: Any) -> Optional[datetime]:
    """
    Strictly convert a value to a datetime.

    Only ISO-8601 strings are accepted; no field is filled in from the clock.

    Args:
        value: datetime, date, ISO-8601 string or None

    Returns:
        datetime, or None when value is None/empty

    Raises:
        InvalidDateError: If the value is present but not a readable timestamp,
            or too close to the calendar limits to convert between zones
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _checked(value)
    if isinstance(value, date):
        return _checked(datetime.combine(value, time.min))
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = date_parser.isoparse(text)
        except (ValueError, OverflowError) as exc:
            raise InvalidDateError(f"Unreadable timestamp: {value!r}") from exc
        return _checked(parsed)
    raise InvalidDateError(f"Unsupported timestamp type: {type(value).__name__}")


def _checked(dt: datetime) -> datetime:
    """Reject values that would overflow when normalized or localized."""
    try:
        moment = as_utc(dt)
        moment - ZONE_MARGIN
        moment + ZONE_MARGIN
    except OverflowError as exc:
        raise InvalidDateError(f"Timestamp out of range: {dt!r}") from exc
    return dt


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse a timestamp from a database row, returning None if unreadable."""
    try:
        return to_datetime(value)
    except InvalidDateError:
        logger.debug("Ignoring malformed timestamp %r", value)
        return None


def parse_date(value: Any) -> Optional[date]:
    """Parse a calendar date (YYYY-MM-DD or a full timestamp) from a row."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def as_utc(dt: datetime) -> datetime:
    """
    Normalize a datetime to an aware UTC value.

    Naive datetimes are taken to already be in UTC, which is how the storage
    layer writes them. This keeps naive and aware values comparable.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def localize(dt: datetime, reference: datetime) -> datetime:
    """Express dt in the time zone of reference (naive stays naive UTC)."""
    if reference.tzinfo is None:
        if dt.tzinfo is None:
            return dt
        return as_utc(dt).replace(tzinfo=None)
    return as_utc(dt).astimezone(reference.tzinfo)


def local_date(dt: datetime, reference: datetime) -> date:
    """Calendar date of dt as seen from the time zone of reference."""
    return localize(dt, reference).date()
