"""Duration arithmetic over segment lists.

Totals are a pure function of (segments, now): every segment contributes
whole seconds, floored per segment, and the open segment is measured up
to ``now``.
"""

import math
from datetime import datetime
from typing import Iterable, NamedTuple, Optional

from django.utils import timezone

from .segments import BreakInterval, WorkInterval, WorkSegment


class SessionTotals(NamedTuple):
    worked_seconds: int
    break_seconds: int


def segment_seconds(segment: WorkSegment, now: datetime) -> int:
    """Whole seconds covered by a segment, measuring an open one up to now."""
    end = segment.end_at if segment.end_at is not None else now
    seconds = (end - segment.start_at).total_seconds()
    return max(0, math.floor(seconds))


def compute_totals(segments: Iterable[WorkSegment], now: Optional[datetime] = None) -> SessionTotals:
    """
    Sum worked and break seconds across segments.

    Args:
        segments: Parsed segments (WorkInterval / BreakInterval)
        now: Clock value for the open segment (defaults to timezone.now())

    Returns:
        SessionTotals(worked_seconds, break_seconds)
    """
    if now is None:
        now = timezone.now()

    worked = 0
    on_break = 0
    for segment in segments:
        if isinstance(segment, WorkInterval):
            worked += segment_seconds(segment, now)
        elif isinstance(segment, BreakInterval):
            on_break += segment_seconds(segment, now)
        else:
            raise TypeError(f"Unsupported segment: {segment!r}")

    return SessionTotals(worked_seconds=worked, break_seconds=on_break)


def format_duration(seconds: int) -> str:
    """Render seconds as HH:MM:SS (hours may exceed 24)."""
    seconds = max(0, int(seconds))
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
