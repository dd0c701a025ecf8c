"""
Expansion of recurrence rules into concrete session dates.

Expansion happens once, when a recurring series is created; the calendar only
ever renders the materialized sessions.
"""

from datetime import timedelta
from typing import List

from django.utils import timezone

from .models import Session
from .types import FREQUENCY_STEP_DAYS, ExpansionResult, RecurrenceRule


def expand(rule: RecurrenceRule, now) -> ExpansionResult:
    """
    Expand a rule into the dates still worth creating.

    Dates run from start_date to end_date inclusive, stepping one day (daily)
    or seven days (weekly). Dates before today are dropped, and today is kept
    only if the rule's time of day is still ahead of ``now``.

    Args:
        rule: RecurrenceRule
        now: current datetime; aware values are converted to local time

    Returns:
        ExpansionResult (empty when there is nothing to create)
    """
    step_days = FREQUENCY_STEP_DAYS.get(rule.frequency)
    if step_days is None or rule.end_date < rule.start_date:
        return ExpansionResult()

    if timezone.is_aware(now):
        now = timezone.localtime(now)
    today = now.date()
    current_time = now.time()

    dates = []
    current_date = rule.start_date
    step = timedelta(days=step_days)

    while current_date <= rule.end_date:
        if current_date > today or (current_date == today and rule.start_time > current_time):
            dates.append(current_date)
        current_date += step

    return ExpansionResult(dates=dates)


def build_sessions(experience, rule: RecurrenceRule, now, spots_total: int,
                   price_override_cents=None) -> List[Session]:
    """Create unsaved Session objects for every date the rule expands to."""
    expansion = expand(rule, now)
    return [
        Session(
            experience=experience,
            session_date=session_date,
            start_time=rule.start_time,
            status=Session.STATUS_AVAILABLE,
            spots_total=spots_total,
            spots_available=spots_total,
            price_override_cents=price_override_cents,
        )
        for session_date in expansion.dates
    ]
