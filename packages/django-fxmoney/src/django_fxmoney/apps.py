from django.apps import AppConfig


class DjangoFxMoneyConfig(AppConfig):
    name = "django_fxmoney"
    verbose_name = "Currencies"
    default_auto_field = "django.db.models.BigAutoField"
