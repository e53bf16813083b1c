"""Django app configuration for attendance module."""

from django.apps import AppConfig


class AttendanceConfig(AppConfig):
    """Attendance module app configuration."""

    name = "agencyops.attendance"
    label = "agencyops_attendance"
    verbose_name = "Attendance"
    default_auto_field = "django.db.models.BigAutoField"
