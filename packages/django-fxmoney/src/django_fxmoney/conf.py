"""Django FxMoney configuration.

All settings can be overridden in your Django settings.py.

Example:
    # settings.py
    FXMONEY_BASE_CURRENCY = 'USD'
    FXMONEY_DEFAULT_CURRENCY = 'USD'
    FXMONEY_CACHE_SECONDS = 3600
    FXMONEY_AUTO_REFRESH = False
    FXMONEY_UNKNOWN_CURRENCY_POLICY = 'raise'
"""

from django.conf import settings

UNKNOWN_CURRENCY_POLICIES = ("raise", "skip")


def get_setting(name: str, default=None):
    """Get a setting with FXMONEY_ prefix."""
    return getattr(settings, f"FXMONEY_{name}", default)


def base_currency() -> str:
    return get_setting("BASE_CURRENCY", "USD")


def default_currency() -> str:
    return get_setting("DEFAULT_CURRENCY", "USD")


def cache_seconds() -> int:
    return int(get_setting("CACHE_SECONDS", 3600))


def auto_refresh() -> bool:
    return bool(get_setting("AUTO_REFRESH", False))


def rates_url() -> str:
    return get_setting("RATES_URL", "https://open.er-api.com/v6/latest/{base}")


def http_timeout() -> float:
    return float(get_setting("HTTP_TIMEOUT", 10.0))


def unknown_currency_policy() -> str:
    policy = get_setting("UNKNOWN_CURRENCY_POLICY", "raise")
    if policy not in UNKNOWN_CURRENCY_POLICIES:
        raise ValueError(
            f"FXMONEY_UNKNOWN_CURRENCY_POLICY must be one of {UNKNOWN_CURRENCY_POLICIES}, got {policy!r}"
        )
    return policy


# =============================================================================
# DEFAULT SETTINGS REFERENCE
# =============================================================================

# FXMONEY_BASE_CURRENCY = 'USD'  # Currency every snapshot is quoted against
# FXMONEY_DEFAULT_CURRENCY = 'USD'  # Display currency and fallback for items without one
# FXMONEY_CACHE_SECONDS = 3600  # How long a snapshot is considered fresh
# FXMONEY_AUTO_REFRESH = False  # Fetch from the provider when no fresh snapshot exists
# FXMONEY_RATES_URL = 'https://open.er-api.com/v6/latest/{base}'
# FXMONEY_HTTP_TIMEOUT = 10.0  # Seconds
# FXMONEY_UNKNOWN_CURRENCY_POLICY = 'raise'  # or 'skip' (logs a warning per dropped item)
