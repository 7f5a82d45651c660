"""
Data models for the Life Planner engine
Read-only snapshots of tasks, events, diary entries, supplements and categories
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional

from .dates import parse_date, parse_datetime


class TaskStatus(str, Enum):
    """Workflow status of a task"""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional['TaskStatus']:
        """Map a raw status string to a member, or None if unrecognized"""
        try:
            return cls(value)
        except (TypeError, ValueError):
            return None


class TaskPriority(str, Enum):
    """Priority label of a task"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional['TaskPriority']:
        """Map a raw priority string to a member, or None if unrecognized"""
        try:
            return cls(value)
        except (TypeError, ValueError):
            return None

    @property
    def rank(self) -> int:
        return PRIORITY_RANKS[self]


PRIORITY_RANKS = {
    TaskPriority.HIGH: 3,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 1,
}


@dataclass(frozen=True)
class Category:
    """Category shared by tasks and events"""
    id: Optional[str] = None
    name: str = ""
    icon: Optional[str] = None
    color: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['Category']:
        """Create Category from a joined row, or None when absent"""
        if not isinstance(data, dict) or not data.get('name'):
            return None
        return cls(
            id=data.get('id'),
            name=data['name'],
            icon=data.get('icon'),
            color=data.get('color'),
        )


def _category_from_row(data: Dict[str, Any]) -> Optional[Category]:
    # Rows joined through the query client carry the relation as 'categories'
    return Category.from_dict(data.get('category') or data.get('categories'))


@dataclass(frozen=True)
class Task:
    """Task data model"""
    id: Optional[str] = None
    title: str = ""
    description: Optional[str] = None
    status: Optional[str] = "pending"  # 'pending', 'in_progress', 'completed'
    priority: Optional[str] = None  # 'high', 'medium', 'low'
    due_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    category: Optional[Category] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Task':
        """Create Task from database row dictionary"""
        return cls(
            id=data.get('id'),
            title=data.get('title') or '',
            description=data.get('description'),
            status=data.get('status'),
            priority=data.get('priority'),
            due_date=parse_datetime(data.get('due_date')),
            created_at=parse_datetime(data.get('created_at')),
            completed_at=parse_datetime(data.get('completed_at')),
            category=_category_from_row(data),
        )

    @property
    def task_status(self) -> Optional[TaskStatus]:
        return TaskStatus.parse(self.status)

    @property
    def task_priority(self) -> Optional[TaskPriority]:
        return TaskPriority.parse(self.priority)

    def is_completed(self) -> bool:
        """Check if task is completed"""
        return self.task_status is TaskStatus.COMPLETED


@dataclass(frozen=True)
class CalendarEvent:
    """Calendar event data model"""
    id: Optional[str] = None
    title: str = ""
    description: Optional[str] = None
    location: Optional[str] = None
    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None
    category: Optional[Category] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CalendarEvent':
        """Create CalendarEvent from database row dictionary"""
        return cls(
            id=data.get('id'),
            title=data.get('title') or '',
            description=data.get('description'),
            location=data.get('location'),
            start_at=parse_datetime(data.get('start_at')),
            end_at=parse_datetime(data.get('end_at')),
            category=_category_from_row(data),
        )


@dataclass(frozen=True)
class DiaryEntry:
    """Diary entry, one per user per calendar day"""
    id: Optional[str] = None
    user_id: Optional[str] = None
    entry_date: Optional[date] = None
    content: str = ""
    mood: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DiaryEntry':
        """Create DiaryEntry from database row dictionary"""
        return cls(
            id=data.get('id'),
            user_id=data.get('user_id'),
            entry_date=parse_date(data.get('date') or data.get('entry_date')),
            content=data.get('content') or '',
            mood=data.get('mood'),
        )


@dataclass(frozen=True)
class Supplement:
    """Supplement inventory item"""
    id: Optional[str] = None
    name: str = ""
    quantity_servings: Optional[float] = None
    servings_per_day: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Supplement':
        """Create Supplement from database row dictionary"""
        return cls(
            id=data.get('id'),
            name=data.get('name') or '',
            quantity_servings=_parse_number(data.get('quantity_servings')),
            servings_per_day=_parse_number(data.get('servings_per_day')),
        )


def _parse_number(value: Any) -> Optional[float]:
    """Parse a numeric column, treating unreadable values as absent"""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
