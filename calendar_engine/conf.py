"""
Calendar engine configuration.

Options are read from the ``CALENDAR_ENGINE`` dict in Django settings; any
key left out falls back to the defaults below.
"""

from dataclasses import dataclass

from django.conf import settings


DEFAULTS = {
    'BUSINESS_START_HOUR': 7,
    'BUSINESS_END_HOUR': 23,
    'SNAP_MINUTES': 15,
    'PIXELS_PER_HOUR': 64,
    'DRAG_HOLD_MS': 150,
    'MIN_SESSION_HEIGHT': 24,
}


@dataclass(frozen=True)
class EngineSettings:
    business_start_hour: int
    business_end_hour: int
    snap_minutes: int
    pixels_per_hour: int
    drag_hold_ms: int
    min_session_height: int

    def __post_init__(self):
        if not 0 <= self.business_start_hour < self.business_end_hour <= 24:
            raise ValueError("Business hours must satisfy 0 <= start < end <= 24")
        if self.snap_minutes <= 0 or self.pixels_per_hour <= 0:
            raise ValueError("Snap minutes and pixels per hour must be positive")


def get_engine_settings() -> EngineSettings:
    """Build engine settings from Django settings merged over the defaults."""
    options = dict(DEFAULTS)
    options.update(getattr(settings, 'CALENDAR_ENGINE', {}) or {})

    return EngineSettings(
        business_start_hour=int(options['BUSINESS_START_HOUR']),
        business_end_hour=int(options['BUSINESS_END_HOUR']),
        snap_minutes=int(options['SNAP_MINUTES']),
        pixels_per_hour=int(options['PIXELS_PER_HOUR']),
        drag_hold_ms=int(options['DRAG_HOLD_MS']),
        min_session_height=int(options['MIN_SESSION_HEIGHT']),
    )
