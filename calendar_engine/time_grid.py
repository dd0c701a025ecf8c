"""
Mapping between time of day and vertical pixel offset on the time grid.

The grid covers the business-hours window. Offsets are measured from the top
of the window; times outside it still map to a (possibly negative) offset and
hiding them is left to the caller.
"""

import math
from datetime import time, datetime

from .conf import get_engine_settings
from .types import TIME_FORMAT


def parse_time(value):
    """Parse ``HH:MM`` (seconds are tolerated and dropped) into a time."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    return datetime.strptime(value[:5], TIME_FORMAT).time()


def format_time(value):
    return value.strftime(TIME_FORMAT)


class TimeGridMapper:
    """
    Convert between time of day and pixel offsets.

    ``time_to_offset`` and ``offset_to_time`` are near-inverses: for any time
    on a snap boundary inside the window, ``offset_to_time(time_to_offset(t))``
    returns ``t``.
    """

    def __init__(self, start_hour=7, end_hour=23, pixels_per_hour=64, snap_minutes=15):
        self.start_hour = start_hour
        self.end_hour = end_hour
        self.pixels_per_hour = pixels_per_hour
        self.snap_minutes = snap_minutes

    @classmethod
    def from_settings(cls):
        engine = get_engine_settings()
        return cls(
            start_hour=engine.business_start_hour,
            end_hour=engine.business_end_hour,
            pixels_per_hour=engine.pixels_per_hour,
            snap_minutes=engine.snap_minutes,
        )

    @property
    def minute_height(self):
        return self.pixels_per_hour / 60

    @property
    def grid_height(self):
        return (self.end_hour - self.start_hour) * self.pixels_per_hour

    def hour_labels(self):
        return [f"{hour:02d}:00" for hour in range(self.start_hour, self.end_hour)]

    def contains(self, value):
        return self.start_hour <= value.hour < self.end_hour

    def time_to_offset(self, value):
        minutes = (value.hour - self.start_hour) * 60 + value.minute
        return minutes * self.minute_height

    def offset_to_time(self, pixels):
        # Clamp to the grid; NaN resolves to the top edge.
        pixels = max(0.0, min(pixels, float(self.grid_height)))
        total_minutes = pixels / self.minute_height + self.start_hour * 60
        # Half-up rounding; round() would round half to even.
        snapped = math.floor(total_minutes / self.snap_minutes + 0.5) * self.snap_minutes
        hours, minutes = divmod(snapped, 60)

        if hours < self.start_hour:
            return time(self.start_hour, 0)
        return time(min(hours, self.end_hour - 1), minutes)

    def duration_to_height(self, minutes):
        return minutes * self.minute_height
