"""Views for the booking dashboard calendar."""

from django.shortcuts import get_object_or_404
from django.utils import timezone

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import PersistenceError, SchedulingError
from .layout import build_day_view, build_month_view, build_week_view, month_range
from .models import Session
from .rentals import week_of
from .serializers import (
    DateRangeQuerySerializer,
    DayQuerySerializer,
    MonthQuerySerializer,
    RecurringSessionCreateSerializer,
    RentalSerializer,
    RescheduleSerializer,
    SessionCreateSerializer,
    SessionReadSerializer,
    WeekQuerySerializer,
)
from . import services
from .types import RecurrenceRule


def _persistence_failure(exc):
    return Response({'error': str(exc)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)


class DayCalendarView(APIView):
    """
    Positioned sessions of one day.

    GET /api/calendar/day/?date=YYYY-MM-DD&experience=ID&theme=light
    """

    def get(self, request):
        query = DayQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        data = query.validated_data

        day = data['date']
        sessions = services.get_sessions_in_range(day, day, experience=data.get('experience'))
        return Response(build_day_view(day, sessions, timezone.now(), theme=data['theme']))


class WeekCalendarView(APIView):
    """
    Positioned sessions of the Monday-first week containing ``start``.

    GET /api/calendar/week/?start=YYYY-MM-DD&experience=ID&theme=light
    """

    def get(self, request):
        query = WeekQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        data = query.validated_data

        week = week_of(data['start'])
        sessions = services.get_sessions_in_range(week.first, week.last, experience=data.get('experience'))
        return Response(build_week_view(week.first, sessions, timezone.now(), theme=data['theme']))


class MonthCalendarView(APIView):
    """
    Month grid with stacked rental bars and session pills.

    GET /api/calendar/month/?month=YYYY-MM&experience=ID&theme=light
    """

    def get(self, request):
        query = MonthQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        data = query.validated_data

        year, month = data['month']
        first, last = month_range(year, month)
        experience = data.get('experience')
        sessions = services.get_sessions_in_range(first, last, experience=experience)
        rentals = services.get_rentals_in_range(first, last, experience=experience)

        return Response(build_month_view(year, month, sessions, rentals, timezone.now(), theme=data['theme']))


class SessionListView(APIView):
    """
    List sessions within a date range or create a single session.

    GET /api/sessions/?start=X&end=Y - List sessions in range
    POST /api/sessions/ - Create a session
    """

    def get(self, request):
        """List sessions within a date range."""
        query_serializer = DateRangeQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)
        data = query_serializer.validated_data

        sessions = services.get_sessions_in_range(
            data['start'],
            data['end'],
            experience=data.get('experience'),
            status=data.get('status')
        )

        serializer = SessionReadSerializer(sessions, many=True)
        return Response(serializer.data)

    def post(self, request):
        """Create a single session."""
        serializer = SessionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            session = services.create_session(
                experience=data['experience'],
                session_date=data['session_date'],
                start_time=data['start_time'],
                spots_total=data.get('spots_total', 1),
                price_override_cents=data.get('price_override_cents')
            )
        except PersistenceError as exc:
            return _persistence_failure(exc)

        response_serializer = SessionReadSerializer(session)
        return Response(response_serializer.data, status=status.HTTP_201_CREATED)


class RecurringSessionCreateView(APIView):
    """
    Materialize a recurring series of sessions.

    POST /api/sessions/recurring/
    """

    def post(self, request):
        serializer = RecurringSessionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        rule = RecurrenceRule(
            start_date=data['start_date'],
            end_date=data['end_date'],
            start_time=data['start_time'],
            frequency=data['frequency'],
        )
        try:
            result = services.create_recurring_sessions(
                experience=data['experience'],
                rule=rule,
                spots_total=data.get('spots_total', 1),
                price_override_cents=data.get('price_override_cents')
            )
        except PersistenceError as exc:
            return _persistence_failure(exc)

        if result.nothing_to_create:
            return Response({
                'nothing_to_create': True,
                'sessions_created': 0,
                'message': 'All dates of this series are in the past.'
            }, status=status.HTTP_200_OK)

        return Response({
            'nothing_to_create': False,
            'sessions_created': result.count,
            'sessions': SessionReadSerializer(result.created, many=True).data,
        }, status=status.HTTP_201_CREATED)


class SessionDetailView(APIView):
    """
    Retrieve or cancel a session.

    GET /api/sessions/{id}/ - Retrieve session
    DELETE /api/sessions/{id}/ - Cancel session
    """

    def get(self, request, pk):
        session = get_object_or_404(Session.objects.all(), pk=pk)
        serializer = SessionReadSerializer(session)
        return Response(serializer.data)

    def delete(self, request, pk):
        """Cancel a session."""
        session = get_object_or_404(Session.objects.all(), pk=pk)

        try:
            services.cancel_session(session)
        except ValueError as exc:
            return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            'message': f'Session on {session.session_date} at {session.start_time:%H:%M} has been cancelled.'
        }, status=status.HTTP_200_OK)


class SessionRescheduleView(APIView):
    """
    Move a session to another time of day.

    PATCH /api/sessions/{id}/reschedule/ {"start_time": "HH:MM"}
    """

    def patch(self, request, pk):
        session = get_object_or_404(Session.objects.all(), pk=pk)
        serializer = RescheduleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            updated = services.reschedule_session(session, serializer.validated_data['start_time'])
        except SchedulingError as exc:
            return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except PersistenceError as exc:
            return _persistence_failure(exc)

        return Response(SessionReadSerializer(updated).data)


class RentalListView(APIView):
    """
    List rentals touching a date range.

    GET /api/rentals/?start=X&end=Y&experience=ID
    """

    def get(self, request):
        query_serializer = DateRangeQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)
        data = query_serializer.validated_data

        rentals = services.get_rentals_in_range(
            data['start'],
            data['end'],
            experience=data.get('experience')
        )
        return Response(RentalSerializer(rentals, many=True).data)
