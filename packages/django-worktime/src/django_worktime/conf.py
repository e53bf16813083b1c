"""Django Worktime configuration.

All settings can be overridden in your Django settings.py.

Example:
    # settings.py
    WORKTIME_DEFAULT_BREAK_TYPE = 'short'
    WORKTIME_MAX_BREAK_TYPE_LENGTH = 32
"""

from django.conf import settings


def get_setting(name: str, default=None):
    """Get a setting with WORKTIME_ prefix."""
    return getattr(settings, f"WORKTIME_{name}", default)


def default_break_type() -> str:
    return get_setting("DEFAULT_BREAK_TYPE", "short")


def max_break_type_length() -> int:
    return get_setting("MAX_BREAK_TYPE_LENGTH", 32)


# =============================================================================
# DEFAULT SETTINGS REFERENCE
# =============================================================================

# WORKTIME_DEFAULT_BREAK_TYPE = 'short'  # Used when a break is taken without a type
# WORKTIME_MAX_BREAK_TYPE_LENGTH = 32  # Longest custom break type accepted
