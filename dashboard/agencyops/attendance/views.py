"""JSON API for daily work sessions."""

from django.contrib.auth import get_user_model
from django.core.paginator import Paginator
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from django_worktime.durations import format_duration
from django_worktime.models import SessionStatus
from django_worktime.segments import dump_segments
from django_worktime.selectors import list_sessions, summarize_sessions
from django_worktime.services import (
    allowed_transitions,
    end_work,
    get_session,
    reopen_session,
    resume_work,
    set_notes,
    start_work,
    take_break,
)

from agencyops.api import (
    HANDLED_ERRORS,
    BadRequest,
    error_response,
    parse_day,
    parse_json_body,
)

User = get_user_model()

PAGE_SIZE = 100
MAX_PAGE_SIZE = 500


def session_to_dict(session, now=None) -> dict:
    """Session JSON, with live totals measured at now."""
    now = now or timezone.now()
    totals = session.totals(now)
    return {
        "id": str(session.pk),
        "employeeId": session.employee_id,
        "date": session.date.isoformat(),
        "status": session.status,
        "segments": dump_segments(session.get_segments()),
        "totalDuration": session.total_duration,
        "breakDuration": session.break_duration,
        "workedSeconds": totals.worked_seconds,
        "breakSeconds": totals.break_seconds,
        "workedDisplay": format_duration(totals.worked_seconds),
        "startedAt": session.started_at.isoformat() if session.started_at else None,
        "endedAt": session.ended_at.isoformat() if session.ended_at else None,
        "notes": session.notes,
        "allowedTransitions": allowed_transitions(session.status),
    }


def _session_filters(request) -> dict:
    filters = {}
    params = request.GET
    if params.get("employee"):
        filters["employee"] = get_object_or_404(User, pk=params["employee"])
    for name in ("date", "start_date", "end_date"):
        if params.get(name):
            filters[name] = parse_day(params[name], name)
    status = params.get("status")
    if status:
        if status not in SessionStatus.values:
            raise BadRequest(f"Invalid status: {status!r}")
        filters["status"] = status
    return filters


def _positive_int(params, name: str, default: int) -> int:
    value = params.get(name)
    if not value:
        return default
    try:
        number = int(value)
    except ValueError:
        number = 0
    if number < 1:
        raise BadRequest(f"Invalid {name}: {value!r}")
    return number


@require_GET
def api_sessions(request):
    """API: One page of sessions filtered by employee, date range and status.

    Query: page (1-based), page_size (at most MAX_PAGE_SIZE).
    """
    try:
        sessions = list_sessions(**_session_filters(request))
        page_number = _positive_int(request.GET, "page", 1)
        page_size = min(_positive_int(request.GET, "page_size", PAGE_SIZE), MAX_PAGE_SIZE)
    except BadRequest as e:
        return error_response(e)

    paginator = Paginator(sessions, page_size)
    if page_number > paginator.num_pages:
        return error_response(BadRequest(f"Page {page_number} is out of range"))
    page = paginator.page(page_number)

    now = timezone.now()
    return JsonResponse({
        "sessions": [session_to_dict(s, now) for s in page.object_list],
        "count": paginator.count,
        "page": page.number,
        "numPages": paginator.num_pages,
        "next": page.next_page_number() if page.has_next() else None,
    })


@require_GET
def api_sessions_summary(request):
    """API: Per-employee worked/break totals for the filtered sessions."""
    try:
        sessions = list_sessions(**_session_filters(request))
    except BadRequest as e:
        return error_response(e)

    summaries = summarize_sessions(sessions)
    return JsonResponse({
        "employees": [
            {
                "employeeId": s.employee_id,
                "days": s.days,
                "workedSeconds": s.worked_seconds,
                "breakSeconds": s.break_seconds,
                "workedDisplay": format_duration(s.worked_seconds),
            }
            for s in summaries
        ]
    })


@require_GET
def api_session_today(request, employee_id):
    """API: Today's session for an employee, created if absent."""
    employee = get_object_or_404(User, pk=employee_id)
    return JsonResponse(session_to_dict(get_session(employee)))


@require_GET
def api_session_detail(request, employee_id, day):
    """API: An employee's session for a given day, created if absent."""
    employee = get_object_or_404(User, pk=employee_id)
    try:
        session = get_session(employee, parse_day(day))
    except BadRequest as e:
        return error_response(e)
    return JsonResponse(session_to_dict(session))


def _run_transition(request, employee_id, day, action):
    employee = get_object_or_404(User, pk=employee_id)
    try:
        session = action(employee, parse_day(day))
    except HANDLED_ERRORS as e:
        return error_response(e)
    return JsonResponse(session_to_dict(session))


@csrf_exempt
@require_POST
def api_start(request, employee_id, day):
    """API: Start the working day."""
    return _run_transition(request, employee_id, day, start_work)


@csrf_exempt
@require_POST
def api_break(request, employee_id, day):
    """API: Take a break. Body: {"breakType": "lunch", "note": "..."}."""
    try:
        body = parse_json_body(request)
    except BadRequest as e:
        return error_response(e)

    note = body.get("note") or ""
    if not isinstance(note, str):
        return error_response(BadRequest("note must be a string"))

    def action(employee, session_day):
        return take_break(employee, session_day, break_type=body.get("breakType"), note=note)

    return _run_transition(request, employee_id, day, action)


@csrf_exempt
@require_POST
def api_resume(request, employee_id, day):
    """API: Resume work after a break."""
    return _run_transition(request, employee_id, day, resume_work)


@csrf_exempt
@require_POST
def api_end(request, employee_id, day):
    """API: End the working day."""
    return _run_transition(request, employee_id, day, end_work)


@csrf_exempt
@require_POST
def api_reopen(request, employee_id, day):
    """API: Reopen an ended day (staff only)."""
    user = request.user
    if not (user.is_authenticated and user.is_staff):
        return JsonResponse(
            {"error": "forbidden", "detail": "Only staff can reopen sessions"},
            status=403,
        )
    return _run_transition(request, employee_id, day, reopen_session)


@csrf_exempt
@require_POST
def api_notes(request, employee_id, day):
    """API: Replace a session's notes. Body: {"notes": "..."}."""
    try:
        body = parse_json_body(request)
    except BadRequest as e:
        return error_response(e)

    notes = body.get("notes") or ""
    if not isinstance(notes, str):
        return error_response(BadRequest("notes must be a string"))

    def action(employee, session_day):
        return set_notes(employee, session_day, notes)

    return _run_transition(request, employee_id, day, action)
