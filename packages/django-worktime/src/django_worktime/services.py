"""Service functions for django-worktime.

Provides:
- get_session: Get (or lazily create) an employee's session for a day
- start_work / take_break / resume_work / end_work: The daily transitions
- reopen_session: Let an ended day continue (admin correction)
- set_notes: Replace the free-text notes on a session

Every transition runs atomically: the session row is locked with
select_for_update() and written with an update that is conditional on the
status and version read under the lock.
"""

import logging
from datetime import date
from typing import Callable, Optional

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from .durations import compute_totals
from .exceptions import InvalidTransition, SessionConflict
from .models import SessionStatus, WorkSession
from .segments import (
    BreakInterval,
    WorkInterval,
    dump_segments,
    normalize_break_type,
    validate_segments,
)

logger = logging.getLogger(__name__)


# transition -> (allowed source statuses, target status)
TRANSITIONS = {
    "start": ((SessionStatus.NOT_STARTED,), SessionStatus.WORKING),
    "break": ((SessionStatus.WORKING,), SessionStatus.ON_BREAK),
    "resume": ((SessionStatus.ON_BREAK,), SessionStatus.WORKING),
    "end": ((SessionStatus.WORKING, SessionStatus.ON_BREAK), SessionStatus.ENDED),
    "reopen": ((SessionStatus.ENDED,), SessionStatus.WORKING),
}


def allowed_transitions(status: str) -> list:
    """Names of the transitions that may be applied from a status."""
    return [name for name, (sources, _) in TRANSITIONS.items() if status in sources]


def get_session(employee, day: Optional[date] = None) -> WorkSession:
    """
    Get the employee's session for a day, creating it if absent.

    New sessions start as not_started with no segments.

    Args:
        employee: The user the session belongs to
        day: Calendar day (defaults to today in the current timezone)

    Returns:
        The WorkSession for (employee, day)
    """
    if day is None:
        day = timezone.localdate()
    # get_or_create retries the lookup itself when a concurrent insert wins.
    session, created = WorkSession.objects.get_or_create(employee=employee, date=day)
    if created:
        logger.debug("Created work session %s for employee %s on %s", session.pk, employee.pk, day)
    return session


def _lock_session(employee, day: date) -> WorkSession:
    get_session(employee, day)
    return WorkSession.objects.select_for_update().get(employee=employee, date=day)


def _apply_transition(
    employee,
    day: Optional[date],
    transition: str,
    build: Callable[[list, object], list],
    **field_updates,
) -> WorkSession:
    """
    Run one transition under a row lock.

    Args:
        employee: Session owner
        day: Calendar day (defaults to today)
        transition: Key into TRANSITIONS
        build: Function (segments, now) -> new segment list
        **field_updates: Extra columns to set; callables receive now

    Raises:
        InvalidTransition: If the session status does not allow the transition
        SessionConflict: If the row changed between the read and the write
    """
    if day is None:
        day = timezone.localdate()
    sources, target = TRANSITIONS[transition]

    with transaction.atomic():
        session = _lock_session(employee, day)
        if session.status not in sources:
            raise InvalidTransition(transition, session.status)

        now = timezone.now()
        segments = build(session.get_segments(), now)
        validate_segments(target, segments)
        totals = compute_totals(segments, now)

        values = {
            key: value(now) if callable(value) else value
            for key, value in field_updates.items()
        }
        updated = WorkSession.objects.filter(
            pk=session.pk,
            status=session.status,
            version=session.version,
        ).update(
            status=target,
            segments=dump_segments(segments),
            total_duration=totals.worked_seconds,
            break_duration=totals.break_seconds,
            version=F("version") + 1,
            updated_at=now,
            **values,
        )
        if updated != 1:
            raise SessionConflict(session.pk, session.status)

    session.refresh_from_db()
    logger.info(
        "Work session %s: %s -> %s (employee=%s, date=%s)",
        session.pk, transition, target, employee.pk, day,
    )
    return session


def start_work(employee, day: Optional[date] = None) -> WorkSession:
    """
    Start the working day.

    Appends an open work segment. Allowed only from not_started.

    Raises:
        InvalidTransition: If the day has already been started
    """
    def build(segments, now):
        return segments + [WorkInterval(start_at=now)]

    return _apply_transition(employee, day, "start", build, started_at=lambda now: now)


def take_break(
    employee,
    day: Optional[date] = None,
    break_type: Optional[str] = None,
    note: str = "",
) -> WorkSession:
    """
    Close the open work segment and open a break segment.

    Args:
        employee: Session owner
        day: Calendar day (defaults to today)
        break_type: short/long/lunch/meeting/other or a custom slug
        note: Optional free text

    Raises:
        InvalidTransition: If the session is not working
        InvalidSegment: If break_type is malformed (checked after the status)
    """
    def build(segments, now):
        pause = BreakInterval(
            start_at=now,
            break_type=normalize_break_type(break_type),
            note=note or "",
        )
        return segments[:-1] + [segments[-1].close(now), pause]

    return _apply_transition(employee, day, "break", build)


def resume_work(employee, day: Optional[date] = None) -> WorkSession:
    """
    Close the open break segment and open a new work segment.

    Raises:
        InvalidTransition: If the session is not on break
    """
    def build(segments, now):
        closed = segments[:-1] + [segments[-1].close(now)]
        return closed + [WorkInterval(start_at=now)]

    return _apply_transition(employee, day, "resume", build)


def end_work(employee, day: Optional[date] = None) -> WorkSession:
    """
    End the working day.

    Closes whichever segment is open and stores the final totals.

    Raises:
        InvalidTransition: If the session is not working or on break
    """
    def build(segments, now):
        return segments[:-1] + [segments[-1].close(now)]

    return _apply_transition(employee, day, "end", build, ended_at=lambda now: now)


def reopen_session(employee, day: Optional[date] = None) -> WorkSession:
    """
    Continue an ended day by appending a new open work segment.

    Earlier segments are left untouched; the gap between the end and the
    reopen is counted as neither work nor break.

    Raises:
        InvalidTransition: If the session has not ended
    """
    def build(segments, now):
        return segments + [WorkInterval(start_at=now)]

    return _apply_transition(employee, day, "reopen", build, ended_at=None)


@transaction.atomic
def set_notes(employee, day: Optional[date], notes: str) -> WorkSession:
    """Replace the free-text notes on a session (status is unaffected)."""
    if day is None:
        day = timezone.localdate()
    session = _lock_session(employee, day)
    session.notes = notes or ""
    session.save(update_fields=["notes", "updated_at"])
    return session
