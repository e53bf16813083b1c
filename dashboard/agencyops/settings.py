"""
Django settings for the agencyops project.

Database dialect is chosen with DATABASE_ENGINE ("postgresql" or "mysql");
PostgreSQL is the default.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv("SECRET_KEY", "django-insecure-agencyops-key-change-in-production")

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.getenv("DEBUG", "True").lower() in ("true", "1", "yes")

ALLOWED_HOSTS = [h for h in os.getenv("ALLOWED_HOSTS", "*").split(",") if h]

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Reusable apps
    "django_worktime",
    "django_fxmoney",
    # Dashboard modules
    "agencyops.attendance",
    "agencyops.finance",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "agencyops.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "agencyops.wsgi.application"

# Database - PostgreSQL (default) or MySQL
DATABASE_ENGINE = os.getenv("DATABASE_ENGINE", "postgresql").lower()

if DATABASE_ENGINE == "mysql":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.mysql",
            "NAME": os.getenv("DATABASE_NAME", "agencyops"),
            "USER": os.getenv("DATABASE_USER", "root"),
            "PASSWORD": os.getenv("DATABASE_PASSWORD", ""),
            "HOST": os.getenv("DATABASE_HOST", "localhost"),
            "PORT": os.getenv("DATABASE_PORT", "3306"),
            "OPTIONS": {
                "charset": "utf8mb4",
                "connect_timeout": 10,
            },
        }
    }
elif DATABASE_ENGINE == "postgresql":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.getenv("DATABASE_NAME", "agencyops"),
            "USER": os.getenv("DATABASE_USER", "postgres"),
            "PASSWORD": os.getenv("DATABASE_PASSWORD", "postgres"),
            "HOST": os.getenv("DATABASE_HOST", "localhost"),
            "PORT": os.getenv("DATABASE_PORT", "5432"),
            "OPTIONS": {
                "connect_timeout": 10,
            },
            "TEST": {
                "NAME": os.getenv("DATABASE_TEST_NAME", "test_agencyops"),
            },
        }
    }
else:
    raise ValueError(f"DATABASE_ENGINE must be 'postgresql' or 'mysql', got {DATABASE_ENGINE!r}")

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = os.getenv("TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Currency configuration
FXMONEY_BASE_CURRENCY = "USD"
FXMONEY_DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "USD")
FXMONEY_CACHE_SECONDS = int(os.getenv("EXCHANGE_RATE_CACHE_SECONDS", "3600"))
FXMONEY_AUTO_REFRESH = os.getenv("EXCHANGE_RATE_AUTO_REFRESH", "True").lower() in ("true", "1", "yes")
FXMONEY_UNKNOWN_CURRENCY_POLICY = os.getenv("UNKNOWN_CURRENCY_POLICY", "raise")

# Attendance configuration
WORKTIME_DEFAULT_BREAK_TYPE = "short"

# Logging configuration
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "INFO",
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": os.getenv("DJANGO_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "agencyops": {
            "handlers": ["console"],
            "level": "DEBUG",
            "propagate": False,
        },
        "django_worktime": {
            "handlers": ["console"],
            "level": os.getenv("WORKTIME_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "django_fxmoney": {
            "handlers": ["console"],
            "level": os.getenv("FXMONEY_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
