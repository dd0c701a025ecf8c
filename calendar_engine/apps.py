from django.apps import AppConfig


class CalendarEngineConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'calendar_engine'
    verbose_name = 'Calendar'
