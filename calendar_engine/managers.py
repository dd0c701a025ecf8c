"""
Custom managers and querysets for calendar models.

QuerySets define chainable query methods.
Managers use QuerySets to enable method chaining.
No business logic should be here - only query operations.
"""

from django.db import models


class SessionQuerySet(models.QuerySet):
    """Custom queryset for Session model with chainable methods."""

    def available(self):
        """Get sessions that can still be booked."""
        return self.filter(status='available')

    def active(self):
        """Get all sessions that are not cancelled."""
        return self.exclude(status='cancelled')

    def in_range(self, start_date, end_date):
        """
        Get sessions dated within an inclusive date range.

        Args:
            start_date: date object
            end_date: date object
        """
        return self.filter(
            session_date__gte=start_date,
            session_date__lte=end_date
        )

    def on_date(self, day):
        return self.filter(session_date=day)

    def for_experience(self, experience):
        """
        Get all sessions owned by an experience.

        Args:
            experience: Experience instance or primary key
        """
        return self.filter(experience=experience)

    def with_status(self, status):
        return self.filter(status=status)


class SessionManager(models.Manager):
    """Custom manager for Session model."""

    def get_queryset(self):
        """Return custom queryset for method chaining."""
        return SessionQuerySet(self.model, using=self._db).select_related('experience')

    def available(self):
        return self.get_queryset().available()

    def active(self):
        return self.get_queryset().active()

    def in_range(self, start_date, end_date):
        return self.get_queryset().in_range(start_date, end_date)

    def on_date(self, day):
        return self.get_queryset().on_date(day)

    def for_experience(self, experience):
        return self.get_queryset().for_experience(experience)


class RentalQuerySet(models.QuerySet):
    """Custom queryset for Rental model with chainable methods."""

    def overlapping(self, start_date, end_date):
        """
        Get rentals whose inclusive date range touches [start_date, end_date].

        Args:
            start_date: date object
            end_date: date object
        """
        return self.filter(
            start_date__lte=end_date,
            end_date__gte=start_date
        )

    def for_experience(self, experience):
        return self.filter(experience=experience)


class RentalManager(models.Manager):
    """Custom manager for Rental model."""

    def get_queryset(self):
        """Return custom queryset for method chaining."""
        return RentalQuerySet(self.model, using=self._db).select_related('experience')

    def overlapping(self, start_date, end_date):
        return self.get_queryset().overlapping(start_date, end_date)

    def for_experience(self, experience):
        return self.get_queryset().for_experience(experience)
