"""
Models for the booking dashboard calendar.

The calendar reads three kinds of records:
- Experience is the owning series; it defines the duration of its sessions
- Session is one bookable, point-in-time instance of an experience
- Rental is a multi-day booking with inclusive start and end dates
"""

from django.db import models
from django.core.exceptions import ValidationError

from .managers import RentalManager, SessionManager


class Experience(models.Model):
    """
    The series that owns sessions and rentals.

    Per-session experiences are scheduled as sessions on the time grid.
    Per-day experiences are booked as rentals and drawn as bars on the month grid.
    """

    PRICING_CHOICES = [
        ('per_session', 'Per session'),
        ('per_day', 'Per day'),
    ]

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')
    duration_minutes = models.PositiveIntegerField(default=60)
    pricing_type = models.CharField(
        max_length=20,
        choices=PRICING_CHOICES,
        default='per_session'
    )
    max_participants = models.PositiveIntegerField(default=10)
    price_cents = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['title']

    def __str__(self):
        return self.title

    def clean(self):
        super().clean()

        if self.duration_minutes == 0:
            raise ValidationError({
                'duration_minutes': 'Duration must be positive.'
            })


class Session(models.Model):
    """
    A bookable instance of an experience on one date at one time of day.

    Created singly or in bulk when a recurrence is materialized.
    Within the calendar only the time of day is ever moved (drag reschedule).
    """

    STATUS_AVAILABLE = 'available'
    STATUS_BOOKED = 'booked'
    STATUS_CANCELLED = 'cancelled'

    STATUS_CHOICES = [
        (STATUS_AVAILABLE, 'Available'),
        (STATUS_BOOKED, 'Booked'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    experience = models.ForeignKey(
        Experience,
        on_delete=models.CASCADE,
        related_name='sessions'
    )
    session_date = models.DateField()
    start_time = models.TimeField(help_text="Time of day, minute precision")

    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_AVAILABLE
    )
    spots_total = models.PositiveIntegerField(default=1)
    spots_available = models.PositiveIntegerField(default=1)
    price_override_cents = models.PositiveIntegerField(null=True, blank=True)
    price_note = models.CharField(max_length=200, blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = SessionManager()

    class Meta:
        ordering = ['session_date', 'start_time']
        indexes = [
            models.Index(fields=['session_date', 'status'], name='session_date_status_idx'),
            models.Index(fields=['experience', 'session_date'], name='session_experience_date_idx'),
        ]

    def __str__(self):
        status_str = f" [{self.status}]" if self.status != self.STATUS_AVAILABLE else ""
        return f"{self.experience.title} - {self.session_date} {self.start_time.strftime('%H:%M')}{status_str}"

    @property
    def duration_minutes(self):
        """Duration is defined by the owning experience."""
        return self.experience.duration_minutes

    @property
    def bookings_count(self):
        return self.spots_total - self.spots_available

    @property
    def is_full(self):
        return self.spots_available == 0

    @property
    def is_cancelled(self):
        return self.status == self.STATUS_CANCELLED

    def clean(self):
        """Validate capacity."""
        super().clean()

        if self.spots_available > self.spots_total:
            raise ValidationError({
                'spots_available': 'Available spots cannot exceed total spots.'
            })

    def save(self, *args, **kwargs):
        """Save with validation."""
        self.full_clean()
        super().save(*args, **kwargs)


class Rental(models.Model):
    """
    A multi-day booking of an experience.

    Both dates are inclusive calendar dates with no time component.
    """

    experience = models.ForeignKey(
        Experience,
        on_delete=models.CASCADE,
        related_name='rentals'
    )
    guest_name = models.CharField(max_length=200, blank=True, default='')
    participants = models.PositiveIntegerField(default=1)
    start_date = models.DateField()
    end_date = models.DateField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = RentalManager()

    class Meta:
        ordering = ['start_date', 'end_date']
        indexes = [
            models.Index(fields=['start_date', 'end_date'], name='rental_date_range_idx'),
        ]

    def __str__(self):
        return f"{self.experience.title} - {self.start_date} to {self.end_date}"

    @property
    def nights(self):
        return (self.end_date - self.start_date).days

    def clean(self):
        """Validate rental dates."""
        super().clean()

        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError({
                'end_date': 'End date cannot be before start date.'
            })

    def save(self, *args, **kwargs):
        """Save with validation."""
        self.full_clean()
        super().save(*args, **kwargs)
