"""
Management command to create the sessions of a recurring series.

Past dates are skipped; if every date of the series has already passed the
command reports that there is nothing to create.
"""

from datetime import date

from django.core.management.base import BaseCommand, CommandError

from calendar_engine import services
from calendar_engine.exceptions import PersistenceError
from calendar_engine.models import Experience
from calendar_engine.time_grid import parse_time
from calendar_engine.types import FREQUENCY_STEP_DAYS, FREQUENCY_WEEKLY, RecurrenceRule


class Command(BaseCommand):
    help = 'Create sessions for an experience from a daily or weekly recurrence'

    def add_arguments(self, parser):
        parser.add_argument('experience', type=int, help='Experience id')
        parser.add_argument('--start', required=True, type=date.fromisoformat, help='First date (YYYY-MM-DD)')
        parser.add_argument('--end', required=True, type=date.fromisoformat, help='Last date, inclusive (YYYY-MM-DD)')
        parser.add_argument('--time', required=True, type=parse_time, help='Time of day (HH:MM)')
        parser.add_argument(
            '--frequency',
            choices=sorted(FREQUENCY_STEP_DAYS),
            default=FREQUENCY_WEEKLY,
            help='Recurrence frequency (default: weekly)'
        )
        parser.add_argument('--spots', type=int, default=1, help='Capacity of each session (default: 1)')

    def handle(self, *args, **options):
        try:
            experience = Experience.objects.get(pk=options['experience'])
        except Experience.DoesNotExist:
            raise CommandError(f"Experience {options['experience']} does not exist")

        rule = RecurrenceRule(
            start_date=options['start'],
            end_date=options['end'],
            start_time=options['time'],
            frequency=options['frequency'],
        )

        try:
            result = services.create_recurring_sessions(experience, rule, spots_total=options['spots'])
        except (ValueError, PersistenceError) as exc:
            raise CommandError(str(exc))

        if result.nothing_to_create:
            self.stdout.write(self.style.WARNING('Nothing to create: every date is in the past'))
            return

        self.stdout.write(
            self.style.SUCCESS(
                f'Successfully created {result.count} session(s) for "{experience.title}"'
            )
        )
