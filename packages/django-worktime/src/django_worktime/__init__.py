"""Django Worktime - Daily attendance sessions built from work/break segments."""

__version__ = "0.1.0"

__all__ = [
    "WorkSession",
    "SessionStatus",
    "WorkInterval",
    "BreakInterval",
    "compute_totals",
]


def __getattr__(name):
    """Lazy import models to avoid AppRegistryNotReady errors."""
    if name in ("WorkSession", "SessionStatus"):
        from django_worktime import models
        return getattr(models, name)
    if name in ("WorkInterval", "BreakInterval"):
        from django_worktime import segments
        return getattr(segments, name)
    if name == "compute_totals":
        from django_worktime.durations import compute_totals
        return compute_totals
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
