"""Work and break segments.

A session's history is an append-only list of segments. Each segment is
either a WorkInterval or a BreakInterval; only the last one may be open
(no end_at).

Stored form (JSON column and API payloads):

    {"type": "work", "startAt": "2025-01-15T09:00:00+00:00", "endAt": "..."}
    {"type": "break", "startAt": "...", "breakType": "lunch", "note": "..."}
"""

import re
from dataclasses import dataclass, replace
from datetime import datetime, timezone as dt_timezone
from typing import Iterable, Optional, Union

from django.utils import timezone
from django.utils.dateparse import parse_datetime

from . import conf
from .exceptions import InvalidSegment


KNOWN_BREAK_TYPES = ("short", "long", "lunch", "meeting", "other")

_BREAK_TYPE_RE = re.compile(r"^[a-z][a-z0-9_-]*$")


@dataclass(frozen=True)
class WorkInterval:
    start_at: datetime
    end_at: Optional[datetime] = None

    kind = "work"

    @property
    def is_open(self) -> bool:
        return self.end_at is None

    def close(self, at: datetime) -> "WorkInterval":
        return replace(self, end_at=_closing_time(self, at))

    def to_dict(self) -> dict:
        data = {"type": self.kind, "startAt": self.start_at.isoformat()}
        if self.end_at is not None:
            data["endAt"] = self.end_at.isoformat()
        return data


@dataclass(frozen=True)
class BreakInterval:
    start_at: datetime
    end_at: Optional[datetime] = None
    break_type: str = "short"
    note: str = ""

    kind = "break"

    @property
    def is_open(self) -> bool:
        return self.end_at is None

    def close(self, at: datetime) -> "BreakInterval":
        return replace(self, end_at=_closing_time(self, at))

    def to_dict(self) -> dict:
        data = {
            "type": self.kind,
            "startAt": self.start_at.isoformat(),
            "breakType": self.break_type,
        }
        if self.end_at is not None:
            data["endAt"] = self.end_at.isoformat()
        if self.note:
            data["note"] = self.note
        return data


WorkSegment = Union[WorkInterval, BreakInterval]


def _closing_time(segment: WorkSegment, at: datetime) -> datetime:
    if segment.end_at is not None:
        raise InvalidSegment("Closed segments cannot be modified")
    # A clock step backwards must not produce a negative interval.
    return max(at, segment.start_at)


def _parse_timestamp(value, field: str) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        parsed = parse_datetime(value)
    else:
        parsed = None
    if parsed is None:
        raise InvalidSegment(f"Segment {field} is missing or not an ISO-8601 timestamp: {value!r}")
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, dt_timezone.utc)
    return parsed


def normalize_break_type(value: Optional[str]) -> str:
    """Validate a break type against the open break-type vocabulary.

    Known values are listed in KNOWN_BREAK_TYPES; any other lowercase slug
    is accepted as a custom type.
    """
    if value is None or value == "":
        return conf.default_break_type()
    if not isinstance(value, str):
        raise InvalidSegment(f"breakType must be a string, got {type(value).__name__}")
    value = value.strip().lower()
    if len(value) > conf.max_break_type_length() or not _BREAK_TYPE_RE.match(value):
        raise InvalidSegment(f"Invalid breakType: {value!r}")
    return value


def segment_from_dict(data: dict) -> WorkSegment:
    """Parse one stored segment, dispatching on its type tag."""
    if not isinstance(data, dict):
        raise InvalidSegment(f"Segment must be an object, got {type(data).__name__}")

    start_at = _parse_timestamp(data.get("startAt"), "startAt")
    end_at = None
    if data.get("endAt") is not None:
        end_at = _parse_timestamp(data["endAt"], "endAt")
        if end_at < start_at:
            raise InvalidSegment("Segment endAt is before startAt")

    kind = data.get("type")
    if kind == WorkInterval.kind:
        return WorkInterval(start_at=start_at, end_at=end_at)
    if kind == BreakInterval.kind:
        return BreakInterval(
            start_at=start_at,
            end_at=end_at,
            break_type=normalize_break_type(data.get("breakType")),
            note=data.get("note") or "",
        )
    raise InvalidSegment(f"Unknown segment type: {kind!r}")


def parse_segments(raw: Optional[Iterable[dict]]) -> list:
    return [segment_from_dict(item) for item in (raw or [])]


def dump_segments(segments: Iterable[WorkSegment]) -> list:
    return [segment.to_dict() for segment in segments]


def open_segment(segments: list) -> Optional[WorkSegment]:
    """Return the open segment, if any. It is always the last element."""
    if segments and segments[-1].is_open:
        return segments[-1]
    return None


def validate_segments(status: str, segments: list) -> None:
    """
    Check the segment invariants for a session in the given status.

    - At most one open segment, and it is the last one
    - not_started sessions have no segments
    - ended sessions have no open segment
    - working/on_break sessions have an open work/break segment respectively

    Raises:
        InvalidSegment: If any invariant is broken
    """
    for segment in segments[:-1]:
        if segment.is_open:
            raise InvalidSegment("Only the last segment may be open")

    for earlier, later in zip(segments, segments[1:]):
        if later.start_at < earlier.end_at:
            raise InvalidSegment("Segments must be in chronological order")

    current = open_segment(segments)

    if status == "not_started":
        if segments:
            raise InvalidSegment("A session that has not started cannot have segments")
    elif status == "ended":
        if current is not None:
            raise InvalidSegment("An ended session cannot have an open segment")
    elif status == "working":
        if current is None or current.kind != WorkInterval.kind:
            raise InvalidSegment("A working session must end with an open work segment")
    elif status == "on_break":
        if current is None or current.kind != BreakInterval.kind:
            raise InvalidSegment("A session on break must end with an open break segment")
    else:
        raise InvalidSegment(f"Unknown session status: {status!r}")
