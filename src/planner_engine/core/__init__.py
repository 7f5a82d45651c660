"""
Core module for the Life Planner engine
Contains configuration, date helpers and model definitions
"""

from .config import Config
from .dates import as_utc, parse_date, parse_datetime
from .models import (
    Category,
    CalendarEvent,
    DiaryEntry,
    Supplement,
    Task,
    TaskPriority,
    TaskStatus,
)

__all__ = [
    'Config',
    'as_utc',
    'parse_date',
    'parse_datetime',
    'Category',
    'CalendarEvent',
    'DiaryEntry',
    'Supplement',
    'Task',
    'TaskPriority',
    'TaskStatus',
]
