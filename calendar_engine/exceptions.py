"""
Errors raised at the calendar's persistence boundary.

The layout functions never raise for representable input; degenerate cases
are filtered out instead. Only operations that talk to the data store fail.
"""


class CalendarEngineError(Exception):
    """Base class for calendar engine errors."""


class SchedulingError(CalendarEngineError, ValueError):
    """A scheduling operation was rejected (e.g. moving a booked session)."""


class PersistenceError(CalendarEngineError):
    """The data store failed to apply a mutation."""
