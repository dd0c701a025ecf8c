"""
Day, week and month view geometry.

Combines the time grid, overlap placement, rental segments, colours and
status styles into plain payloads for the rendering layer. Nothing here
touches the database; callers pass in the records for the visible range.
"""

from collections import defaultdict

from .colors import color_for
from .conf import get_engine_settings
from .overlap import position_sessions
from .rentals import layout_week_rentals, month_weeks, row_count, week_of
from .styles import resolve_session_style
from .time_grid import TimeGridMapper, format_time
from .types import DATE_FORMAT, THEME_LIGHT


def _sessions_by_date(sessions):
    grouped = defaultdict(list)
    for session in sessions:
        grouped[session.session_date].append(session)
    return grouped


def _positioned_payload(item, now, theme):
    session = item.session
    return {
        'id': session.pk,
        'experience_id': session.experience_id,
        'experience_title': session.experience.title,
        'start_time': format_time(session.start_time),
        'duration_minutes': session.duration_minutes,
        'spots_total': session.spots_total,
        'spots_available': session.spots_available,
        'top': item.top,
        'height': item.height,
        'left': item.left,
        'width': item.width,
        'column': item.column,
        'cluster_size': item.cluster_size,
        'color': color_for(session.experience_id).as_dict(theme),
        'style': resolve_session_style(session, now, theme).as_dict(),
    }


def _day_payload(day, sessions, now, theme, mapper, min_height):
    positioned = position_sessions(sessions, mapper, min_height=min_height)
    return {
        'date': day.strftime(DATE_FORMAT),
        'sessions': [_positioned_payload(item, now, theme) for item in positioned],
    }


def _grid_payload(mapper):
    return {
        'start_hour': mapper.start_hour,
        'end_hour': mapper.end_hour,
        'pixels_per_hour': mapper.pixels_per_hour,
        'snap_minutes': mapper.snap_minutes,
        'height': mapper.grid_height,
        'hour_labels': mapper.hour_labels(),
    }


def build_day_view(day, sessions, now, theme=THEME_LIGHT, mapper=None):
    """
    Geometry of one day column.

    Args:
        day: date being rendered
        sessions: sessions dated ``day``
        now: reference datetime for past/future styling
        theme: 'light' or 'dark'
        mapper: TimeGridMapper (defaults to configured one)
    """
    mapper = mapper or TimeGridMapper.from_settings()
    min_height = get_engine_settings().min_session_height
    day_sessions = [session for session in sessions if session.session_date == day]

    payload = _day_payload(day, day_sessions, now, theme, mapper, min_height)
    payload['grid'] = _grid_payload(mapper)
    return payload


def build_week_view(week_start, sessions, now, theme=THEME_LIGHT, mapper=None):
    """Geometry of the seven day columns of the week containing ``week_start``."""
    mapper = mapper or TimeGridMapper.from_settings()
    min_height = get_engine_settings().min_session_height
    week = week_of(week_start)
    grouped = _sessions_by_date(sessions)

    return {
        'start': week.first.strftime(DATE_FORMAT),
        'end': week.last.strftime(DATE_FORMAT),
        'grid': _grid_payload(mapper),
        'days': [
            _day_payload(day, grouped.get(day, []), now, theme, mapper, min_height)
            for day in week.days
        ],
    }


def _segment_payload(segment, theme):
    rental = segment.rental
    return {
        'rental_id': rental.pk,
        'experience_id': rental.experience_id,
        'experience_title': rental.experience.title,
        'guest_name': rental.guest_name,
        'participants': rental.participants,
        'start_date': rental.start_date.strftime(DATE_FORMAT),
        'end_date': rental.end_date.strftime(DATE_FORMAT),
        'start_column': segment.start_column,
        'span': segment.span,
        'row': segment.row,
        'is_start': segment.is_start,
        'is_end': segment.is_end,
        'color': color_for(rental.experience_id).as_dict(theme),
    }


def _pill_payload(session, now, theme):
    return {
        'id': session.pk,
        'experience_id': session.experience_id,
        'experience_title': session.experience.title,
        'start_time': format_time(session.start_time),
        'color': color_for(session.experience_id).as_dict(theme),
        'style': resolve_session_style(session, now, theme).as_dict(),
    }


def build_month_view(year, month, sessions, rentals, now, theme=THEME_LIGHT):
    """
    Geometry of a month grid: Monday-first weeks with stacked rental bars
    and the sessions of each day as pills.
    """
    grouped = _sessions_by_date(sessions)
    weeks = []

    for week in month_weeks(year, month):
        segments = layout_week_rentals(rentals, week)
        weeks.append({
            'start': week.first.strftime(DATE_FORMAT),
            'end': week.last.strftime(DATE_FORMAT),
            'row_count': row_count(segments),
            'segments': [_segment_payload(segment, theme) for segment in segments],
            'days': [
                {
                    'date': day.strftime(DATE_FORMAT),
                    'in_month': day.month == month,
                    'sessions': [
                        _pill_payload(session, now, theme)
                        for session in sorted(grouped.get(day, []), key=lambda s: s.start_time)
                    ],
                }
                for day in week.days
            ],
        })

    return {
        'year': year,
        'month': month,
        'start': weeks[0]['start'],
        'end': weeks[-1]['end'],
        'weeks': weeks,
    }


def month_range(year, month):
    """First and last date shown on a month grid."""
    weeks = month_weeks(year, month)
    return weeks[0].first, weeks[-1].last
