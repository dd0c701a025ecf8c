"""
Service layer for calendar business logic.

This is the persistence boundary of the calendar: reads for a visible date
range, the reschedule mutation issued by a drag, and the bulk insert of
materialized recurring sessions. Store failures surface as PersistenceError.
"""

import logging
from datetime import date, time
from typing import List, Optional

from django.db import DatabaseError, transaction
from django.utils import timezone

from .exceptions import PersistenceError, SchedulingError
from .models import Experience, Rental, Session
from .recurrence import build_sessions
from .time_grid import format_time, parse_time
from .types import MaterializationResult, RecurrenceRule

logger = logging.getLogger(__name__)


def get_sessions_in_range(
    start_date: date,
    end_date: date,
    experience: Optional[Experience] = None,
    status: Optional[str] = None
) -> List[Session]:
    """
    Get sessions dated within an inclusive date range.

    Args:
        start_date: Range start
        end_date: Range end
        experience: Optional owning experience filter
        status: Optional status filter ('available', 'booked', 'cancelled')

    Returns:
        List of Session instances

    Raises:
        ValueError: If start_date > end_date
    """
    if start_date > end_date:
        raise ValueError("Start date must not be after end date")

    queryset = Session.objects.in_range(start_date, end_date)

    if experience is not None:
        queryset = queryset.for_experience(experience)
    if status:
        queryset = queryset.with_status(status)

    return list(queryset)


def get_rentals_in_range(
    start_date: date,
    end_date: date,
    experience: Optional[Experience] = None
) -> List[Rental]:
    """
    Get rentals whose dates touch an inclusive date range.

    Raises:
        ValueError: If start_date > end_date
    """
    if start_date > end_date:
        raise ValueError("Start date must not be after end date")

    queryset = Rental.objects.overlapping(start_date, end_date)

    if experience is not None:
        queryset = queryset.for_experience(experience)

    return list(queryset)


def create_session(
    experience: Experience,
    session_date: date,
    start_time: time,
    spots_total: int = 1,
    price_override_cents: Optional[int] = None
) -> Session:
    """
    Create a single available session.

    Raises:
        ValueError: If spots_total is not positive
        PersistenceError: If the insert fails
    """
    _validate_spots(spots_total)

    try:
        with transaction.atomic():
            return Session.objects.create(
                experience=experience,
                session_date=session_date,
                start_time=parse_time(start_time),
                status=Session.STATUS_AVAILABLE,
                spots_total=spots_total,
                spots_available=spots_total,
                price_override_cents=price_override_cents,
            )
    except DatabaseError as exc:
        logger.error("Insert of session for experience %s failed: %s", experience.pk, exc)
        raise PersistenceError("Could not create session") from exc


def create_recurring_sessions(
    experience: Experience,
    rule: RecurrenceRule,
    spots_total: int = 1,
    price_override_cents: Optional[int] = None,
    now=None
) -> MaterializationResult:
    """
    Materialize a recurrence rule into sessions.

    Past dates (and today, once its time has passed) are skipped. When nothing
    is left, the result reports ``nothing_to_create`` and nothing is written.

    Args:
        experience: Owning experience
        rule: RecurrenceRule describing the series
        spots_total: Capacity of every created session
        price_override_cents: Optional price override of every created session
        now: Reference time (defaults to timezone.now())

    Returns:
        MaterializationResult

    Raises:
        ValueError: If spots_total is not positive
        PersistenceError: If the bulk insert fails
    """
    _validate_spots(spots_total)

    sessions = build_sessions(
        experience,
        rule,
        now or timezone.now(),
        spots_total,
        price_override_cents=price_override_cents,
    )
    if not sessions:
        logger.info("Recurrence for experience %s has no future dates; nothing to create", experience.pk)
        return MaterializationResult()

    try:
        with transaction.atomic():
            created = Session.objects.bulk_create(sessions)
    except DatabaseError as exc:
        logger.error("Bulk insert of %d sessions failed: %s", len(sessions), exc)
        raise PersistenceError("Could not create recurring sessions") from exc

    logger.info("Created %d %s sessions for experience %s", len(created), rule.frequency, experience.pk)
    return MaterializationResult(created=created)


def reschedule_session(session: Session, new_time) -> Session:
    """
    Move a session to another time of day on the same date.

    Args:
        session: Session instance
        new_time: time or 'HH:MM'

    Returns:
        Updated Session instance

    Raises:
        SchedulingError: If the session is booked, full or cancelled
        PersistenceError: If the update fails
    """
    if session.status in (Session.STATUS_BOOKED, Session.STATUS_CANCELLED):
        raise SchedulingError(f"Cannot move a {session.status} session")
    if session.is_full:
        raise SchedulingError("Cannot move a fully booked session")

    new_time = parse_time(new_time)
    previous = session.start_time

    try:
        with transaction.atomic():
            updated = Session.objects.filter(pk=session.pk).update(
                start_time=new_time,
                updated_at=timezone.now(),
            )
    except DatabaseError as exc:
        logger.error("Reschedule of session %s failed: %s", session.pk, exc)
        raise PersistenceError("Could not move session") from exc

    if not updated:
        raise PersistenceError(f"Session {session.pk} no longer exists")

    session.start_time = new_time
    logger.info("Session %s rescheduled from %s to %s", session.pk, format_time(previous), format_time(new_time))
    return session


def commit_reschedule(session_id, new_time) -> Session:
    """Reschedule by primary key; the commit hook of DragRescheduler."""
    try:
        session = Session.objects.get(pk=session_id)
    except Session.DoesNotExist as exc:
        raise PersistenceError(f"Session {session_id} no longer exists") from exc
    return reschedule_session(session, new_time)


@transaction.atomic
def cancel_session(session: Session) -> Session:
    """
    Cancel a session (soft delete).

    Raises:
        ValueError: If the session is already cancelled
    """
    if session.status == Session.STATUS_CANCELLED:
        raise ValueError("Session is already cancelled")

    session.status = Session.STATUS_CANCELLED
    session.save()
    return session


def _validate_spots(spots_total: int) -> None:
    """Validate capacity is positive."""
    if spots_total <= 0:
        raise ValueError("Spots must be positive")
