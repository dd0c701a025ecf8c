"""
Status styling for sessions on the calendar.

A session's appearance depends on two things: what state it is in
(cancelled, booked or available) and whether it already happened. Both are
resolved once into an immutable ``SessionStyle``.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from django.utils import timezone

from .types import THEME_DARK, THEME_LIGHT


class StatusKind(Enum):
    CANCELLED = 'cancelled'
    BOOKED = 'booked'
    AVAILABLE = 'available'


class Tense(Enum):
    PAST = 'past'
    FUTURE = 'future'


@dataclass(frozen=True)
class SessionStyle:
    kind: StatusKind
    tense: Tense
    background: str
    border: str
    text: str
    opacity: float
    strikethrough: bool

    @property
    def draggable(self):
        return self.kind is StatusKind.AVAILABLE

    def as_dict(self):
        return {
            'kind': self.kind.value,
            'tense': self.tense.value,
            'background': self.background,
            'border': self.border,
            'text': self.text,
            'opacity': self.opacity,
            'strikethrough': self.strikethrough,
            'draggable': self.draggable,
        }


# (background, border, text) per kind and theme
_KIND_COLORS = {
    (StatusKind.CANCELLED, THEME_LIGHT): ('#e5e5e5', '#a3a3a3', '#737373'),
    (StatusKind.CANCELLED, THEME_DARK): ('#404040', '#a3a3a3', '#a3a3a3'),
    (StatusKind.BOOKED, THEME_LIGHT): ('#fef3c7', '#f59e0b', '#92400e'),
    (StatusKind.BOOKED, THEME_DARK): ('#78350f66', '#f59e0b', '#fde68a'),
    (StatusKind.AVAILABLE, THEME_LIGHT): ('#ccfbf1', '#0d9488', '#115e59'),
    (StatusKind.AVAILABLE, THEME_DARK): ('#134e4a66', '#0d9488', '#99f6e4'),
}


def status_kind(session):
    if session.status == 'cancelled':
        return StatusKind.CANCELLED
    if session.status == 'booked' or session.spots_available == 0:
        return StatusKind.BOOKED
    return StatusKind.AVAILABLE


def session_tense(session, now):
    if timezone.is_aware(now):
        now = timezone.make_naive(now)
    starts_at = datetime.combine(session.session_date, session.start_time)
    return Tense.PAST if starts_at < now else Tense.FUTURE


def resolve_session_style(session, now, theme=THEME_LIGHT):
    """
    Resolve the style of one session.

    Args:
        session: object with status, spots_available, session_date, start_time
        now: reference datetime (naive, or aware in the display timezone)
        theme: 'light' or 'dark'

    Returns:
        SessionStyle
    """
    kind = status_kind(session)
    tense = session_tense(session, now)
    theme = THEME_DARK if theme == THEME_DARK else THEME_LIGHT
    background, border, text = _KIND_COLORS[(kind, theme)]

    if kind is StatusKind.CANCELLED:
        opacity = 0.7
    elif tense is Tense.PAST:
        opacity = 0.5
    else:
        opacity = 1.0

    return SessionStyle(
        kind=kind,
        tense=tense,
        background=background,
        border=border,
        text=text,
        opacity=opacity,
        strikethrough=kind is StatusKind.CANCELLED,
    )
