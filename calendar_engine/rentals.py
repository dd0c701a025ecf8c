"""
Month-grid layout of multi-day rentals.

A rental that crosses week boundaries is split into one segment per week it
touches. Segments of one week are then stacked into as few rows as possible.
"""

import calendar
from datetime import date, timedelta
from typing import Iterable, List, Optional

from .types import DAYS_PER_WEEK, Segment, WeekWindow


def week_of(day: date) -> WeekWindow:
    """The Monday-first week containing ``day``."""
    return WeekWindow(first=day - timedelta(days=day.weekday()))


def month_weeks(year: int, month: int) -> List[WeekWindow]:
    """Monday-first weeks covering every day of a month."""
    first_day = date(year, month, 1)
    last_day = date(year, month, calendar.monthrange(year, month)[1])

    weeks = []
    week = week_of(first_day)
    while week.first <= last_day:
        weeks.append(week)
        week = WeekWindow(first=week.first + timedelta(days=DAYS_PER_WEEK))
    return weeks


def split_rental(rental, week: WeekWindow) -> Optional[Segment]:
    """
    Slice a rental to the part visible in one week.

    Args:
        rental: object with inclusive start_date and end_date
        week: WeekWindow

    Returns:
        Segment, or None when the rental does not touch the week
    """
    if rental.end_date < week.first or rental.start_date > week.last:
        return None

    is_start = rental.start_date >= week.first
    is_end = rental.end_date <= week.last

    start_column = week.column_of(rental.start_date) if is_start else 1
    end_column_exclusive = week.column_of(rental.end_date) + 1 if is_end else DAYS_PER_WEEK + 1

    span = end_column_exclusive - start_column
    if span <= 0:
        return None

    return Segment(
        rental=rental,
        start_column=start_column,
        span=span,
        is_start=is_start,
        is_end=is_end,
    )


def pack_rows(segments: Iterable[Segment]) -> List[Segment]:
    """
    Stack segments into rows so that no two segments in a row share a column.

    Segments are placed in (start column, widest first) order into the first
    row with room. Each segment's ``row`` is set in place.

    Returns:
        The segments in placement order
    """
    ordered = sorted(segments, key=lambda segment: (segment.start_column, -segment.span))
    occupied: List[set] = []

    for segment in ordered:
        columns = set(segment.columns)
        for row, taken in enumerate(occupied):
            if not taken & columns:
                break
        else:
            row = len(occupied)
            occupied.append(set())

        occupied[row] |= columns
        segment.row = row

    return ordered


def row_count(segments: Iterable[Segment]) -> int:
    rows = [segment.row for segment in segments if segment.row is not None]
    return max(rows) + 1 if rows else 0


def layout_week_rentals(rentals, week: WeekWindow) -> List[Segment]:
    """Split every rental against one week and pack the visible segments."""
    segments = []
    for rental in rentals:
        segment = split_rental(rental, week)
        if segment is not None:
            segments.append(segment)
    return pack_rows(segments)
