"""
Serializers for the calendar API.
"""

from rest_framework import serializers

from .models import Experience, Rental, Session
from .types import FREQUENCY_CHOICES, FREQUENCY_WEEKLY, THEME_DARK, THEME_LIGHT

TIME_INPUT_FORMATS = ['%H:%M', '%H:%M:%S']


class ExperienceSerializer(serializers.ModelSerializer):
    """Serializer for reading Experience (output)."""

    class Meta:
        model = Experience
        fields = [
            'id',
            'title',
            'description',
            'duration_minutes',
            'pricing_type',
            'max_participants',
            'price_cents',
        ]


class SessionReadSerializer(serializers.ModelSerializer):
    """Serializer for reading/displaying Session (output)."""

    session_date = serializers.DateField(format='%Y-%m-%d')
    start_time = serializers.TimeField(format='%H:%M')
    experience_title = serializers.CharField(source='experience.title', read_only=True)
    duration_minutes = serializers.IntegerField(read_only=True)
    bookings_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Session
        fields = [
            'id',
            'experience',
            'experience_title',
            'session_date',
            'start_time',
            'duration_minutes',
            'status',
            'spots_total',
            'spots_available',
            'bookings_count',
            'price_override_cents',
            'price_note',
            'created_at',
            'updated_at',
        ]


class SessionCreateSerializer(serializers.Serializer):
    """Serializer for creating a single session."""

    experience = serializers.PrimaryKeyRelatedField(queryset=Experience.objects.all())
    session_date = serializers.DateField()
    start_time = serializers.TimeField(input_formats=TIME_INPUT_FORMATS)
    spots_total = serializers.IntegerField(min_value=1, default=1)
    price_override_cents = serializers.IntegerField(min_value=0, required=False, allow_null=True)


class RecurringSessionCreateSerializer(serializers.Serializer):
    """Serializer for materializing a recurring series of sessions."""

    experience = serializers.PrimaryKeyRelatedField(queryset=Experience.objects.all())
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    start_time = serializers.TimeField(input_formats=TIME_INPUT_FORMATS)
    frequency = serializers.ChoiceField(choices=FREQUENCY_CHOICES, default=FREQUENCY_WEEKLY)
    spots_total = serializers.IntegerField(min_value=1, default=1)
    price_override_cents = serializers.IntegerField(min_value=0, required=False, allow_null=True)

    def validate(self, data):
        """Ensure the range is not reversed."""
        if data['end_date'] < data['start_date']:
            raise serializers.ValidationError({
                'end_date': 'End date cannot be before start date.'
            })
        return data


class RescheduleSerializer(serializers.Serializer):
    """Serializer for the drag reschedule mutation."""

    start_time = serializers.TimeField(input_formats=TIME_INPUT_FORMATS)


class RentalSerializer(serializers.ModelSerializer):
    """Serializer for reading Rental (output)."""

    experience_title = serializers.CharField(source='experience.title', read_only=True)

    class Meta:
        model = Rental
        fields = [
            'id',
            'experience',
            'experience_title',
            'guest_name',
            'participants',
            'start_date',
            'end_date',
        ]


class DateRangeQuerySerializer(serializers.Serializer):
    """Serializer for date range query parameters."""

    start = serializers.DateField(required=True)
    end = serializers.DateField(required=True)
    experience = serializers.IntegerField(required=False, min_value=1)
    status = serializers.ChoiceField(
        choices=[choice for choice, _ in Session.STATUS_CHOICES],
        required=False,
        allow_null=True
    )

    def validate(self, data):
        """Ensure start is not after end."""
        if data['start'] > data['end']:
            raise serializers.ValidationError(
                "Start date must not be after end date."
            )
        return data


class CalendarQuerySerializer(serializers.Serializer):
    """Common query parameters of the calendar views."""

    experience = serializers.IntegerField(required=False, min_value=1)
    theme = serializers.ChoiceField(choices=[THEME_LIGHT, THEME_DARK], default=THEME_LIGHT)


class DayQuerySerializer(CalendarQuerySerializer):
    date = serializers.DateField()


class WeekQuerySerializer(CalendarQuerySerializer):
    start = serializers.DateField()


class MonthQuerySerializer(CalendarQuerySerializer):
    month = serializers.RegexField(r'^\d{4}-(0[1-9]|1[0-2])$')

    def validate_month(self, value):
        year, month = value.split('-')
        return int(year), int(month)
