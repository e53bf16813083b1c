"""Read-only queries over work sessions."""

import datetime
from dataclasses import dataclass
from typing import Iterable, Optional

from django.db.models import QuerySet

from .models import WorkSession


@dataclass
class EmployeeSummary:
    """Totals for one employee across a set of sessions."""

    employee_id: int
    days: int = 0
    worked_seconds: int = 0
    break_seconds: int = 0


def list_sessions(
    employee=None,
    date: Optional[datetime.date] = None,
    start_date: Optional[datetime.date] = None,
    end_date: Optional[datetime.date] = None,
    status: Optional[str] = None,
) -> QuerySet:
    """
    Filter sessions, newest day first.

    All filters are optional and combine with AND; start_date and end_date
    are inclusive.
    """
    sessions = WorkSession.objects.select_related("employee")
    if employee is not None:
        sessions = sessions.filter(employee=employee)
    if date is not None:
        sessions = sessions.filter(date=date)
    if start_date is not None:
        sessions = sessions.filter(date__gte=start_date)
    if end_date is not None:
        sessions = sessions.filter(date__lte=end_date)
    if status:
        sessions = sessions.filter(status=status)
    return sessions.order_by("-date", "employee_id")


def summarize_sessions(sessions: Iterable[WorkSession], now=None) -> list:
    """
    Sum worked and break seconds per employee.

    Open sessions are measured live against ``now``. Sessions that never
    started do not count as days.
    """
    summaries = {}
    for session in sessions:
        summary = summaries.setdefault(
            session.employee_id, EmployeeSummary(employee_id=session.employee_id)
        )
        totals = session.totals(now)
        if session.status != "not_started":
            summary.days += 1
        summary.worked_seconds += totals.worked_seconds
        summary.break_seconds += totals.break_seconds
    return sorted(summaries.values(), key=lambda s: s.worked_seconds, reverse=True)
