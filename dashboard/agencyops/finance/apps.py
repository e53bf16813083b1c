"""Django app configuration for finance module."""

from django.apps import AppConfig


class FinanceConfig(AppConfig):
    """Finance module app configuration."""

    name = "agencyops.finance"
    label = "agencyops_finance"
    verbose_name = "Finance"
    default_auto_field = "django.db.models.BigAutoField"
