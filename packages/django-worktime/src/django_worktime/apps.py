from django.apps import AppConfig


class DjangoWorktimeConfig(AppConfig):
    name = "django_worktime"
    verbose_name = "Work Time"
    default_auto_field = "django.db.models.BigAutoField"
