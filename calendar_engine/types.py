"""
Data types and constants for the calendar engine.

This module contains:
- DTOs (Data Transfer Objects) for service layer operations
- Transient geometry records produced by the layout functions
- Constants used across the application
"""

from dataclasses import dataclass, field
from datetime import date, time, timedelta
from typing import Any, List, Optional


FREQUENCY_DAILY = 'daily'
FREQUENCY_WEEKLY = 'weekly'

FREQUENCY_CHOICES = [
    (FREQUENCY_DAILY, 'Daily'),
    (FREQUENCY_WEEKLY, 'Weekly'),
]

FREQUENCY_STEP_DAYS = {
    FREQUENCY_DAILY: 1,
    FREQUENCY_WEEKLY: 7,
}

THEME_LIGHT = 'light'
THEME_DARK = 'dark'

DAYS_PER_WEEK = 7

DATE_FORMAT = '%Y-%m-%d'
TIME_FORMAT = '%H:%M'


@dataclass(frozen=True)
class RecurrenceRule:
    """DTO describing a recurring series of sessions to materialize."""
    start_date: date
    end_date: date
    start_time: time
    frequency: str = FREQUENCY_WEEKLY


@dataclass(frozen=True)
class ExpansionResult:
    """Dates retained by expanding a recurrence rule."""
    dates: List[date] = field(default_factory=list)

    @property
    def nothing_to_create(self) -> bool:
        return not self.dates

    def __len__(self):
        return len(self.dates)


@dataclass
class MaterializationResult:
    """Outcome of bulk-creating sessions from a recurrence rule."""
    created: List[Any] = field(default_factory=list)

    @property
    def nothing_to_create(self) -> bool:
        return not self.created

    @property
    def count(self) -> int:
        return len(self.created)


@dataclass(frozen=True)
class WeekWindow:
    """Seven consecutive calendar dates, Monday first."""
    first: date

    @property
    def last(self) -> date:
        return self.first + timedelta(days=DAYS_PER_WEEK - 1)

    @property
    def days(self) -> List[date]:
        return [self.first + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]

    def contains(self, day: date) -> bool:
        return self.first <= day <= self.last

    def column_of(self, day: date) -> int:
        """1-based column of a date inside this week."""
        return (day - self.first).days + 1


@dataclass
class Segment:
    """One rental's visible portion within a single week."""
    rental: Any
    start_column: int
    span: int
    is_start: bool
    is_end: bool
    row: Optional[int] = None

    @property
    def end_column(self) -> int:
        """Inclusive last column."""
        return self.start_column + self.span - 1

    @property
    def columns(self) -> range:
        return range(self.start_column, self.start_column + self.span)


@dataclass
class PositionedSession:
    """A session with its pixel and percentage geometry on the time grid."""
    session: Any
    top: float
    height: float
    left: float = 1.0
    width: float = 97.5
    column: int = 0
    cluster_size: int = 1

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass
class DragState:
    """Live state of a drag, present only while a session is being dragged."""
    session: Any
    original_time: time
    original_top: float
    current_top: float
    proposed_time: time

    @property
    def has_moved(self) -> bool:
        return self.proposed_time != self.original_time


@dataclass(frozen=True)
class CompletedMove:
    """The last committed drag, kept so it can be undone."""
    session_id: Any
    previous_time: time
    new_time: time
