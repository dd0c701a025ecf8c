"""
URL routing for the calendar API.
"""

from django.urls import path
from .views import (
    DayCalendarView,
    WeekCalendarView,
    MonthCalendarView,
    SessionListView,
    RecurringSessionCreateView,
    SessionDetailView,
    SessionRescheduleView,
    RentalListView,
)

urlpatterns = [
    path('calendar/day/', DayCalendarView.as_view(), name='calendar-day'),
    path('calendar/week/', WeekCalendarView.as_view(), name='calendar-week'),
    path('calendar/month/', MonthCalendarView.as_view(), name='calendar-month'),
    path('sessions/', SessionListView.as_view(), name='session-list-create'),
    path('sessions/recurring/', RecurringSessionCreateView.as_view(), name='session-recurring'),
    path('sessions/<int:pk>/', SessionDetailView.as_view(), name='session-detail'),
    path('sessions/<int:pk>/reschedule/', SessionRescheduleView.as_view(), name='session-reschedule'),
    path('rentals/', RentalListView.as_view(), name='rental-list'),
]
