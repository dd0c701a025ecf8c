"""
Admin configuration for the calendar app.
"""

from django.contrib import admin
from .models import Experience, Rental, Session


@admin.register(Experience)
class ExperienceAdmin(admin.ModelAdmin):
    """Admin interface for Experience model."""

    list_display = ['title', 'pricing_type', 'duration_minutes', 'max_participants', 'price_cents']
    list_filter = ['pricing_type', 'created_at']
    search_fields = ['title', 'description']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Session)
class SessionAdmin(admin.ModelAdmin):
    """Admin interface for Session model."""

    list_display = ['experience', 'session_date', 'start_time', 'status', 'spots_available', 'spots_total']
    list_filter = ['status', 'experience', 'session_date']
    search_fields = ['experience__title', 'price_note']
    date_hierarchy = 'session_date'

    fieldsets = (
        ('Basic Information', {
            'fields': ('experience', 'status')
        }),
        ('Schedule', {
            'fields': ('session_date', 'start_time')
        }),
        ('Capacity & Price', {
            'fields': ('spots_total', 'spots_available', 'price_override_cents', 'price_note')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    readonly_fields = ['created_at', 'updated_at']


@admin.register(Rental)
class RentalAdmin(admin.ModelAdmin):
    """Admin interface for Rental model."""

    list_display = ['experience', 'guest_name', 'start_date', 'end_date', 'participants']
    list_filter = ['experience']
    search_fields = ['guest_name', 'experience__title']
    date_hierarchy = 'start_date'
    readonly_fields = ['created_at', 'updated_at']
