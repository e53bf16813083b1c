"""Settings for the test suite: in-memory SQLite, no network."""

from .settings import *  # noqa: F401,F403

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# Rates come from fixtures and mock transports only
FXMONEY_AUTO_REFRESH = False
FXMONEY_DEFAULT_CURRENCY = "USD"
FXMONEY_UNKNOWN_CURRENCY_POLICY = "raise"

# Let records reach pytest's caplog handler
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "loggers": {
        "django_worktime": {"level": "DEBUG"},
        "django_fxmoney": {"level": "DEBUG"},
        "agencyops": {"level": "DEBUG"},
    },
}
