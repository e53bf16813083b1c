"""Helpers shared by the JSON API views."""

import json
import logging
from datetime import date

from django.http import JsonResponse
from django.utils.dateparse import parse_date

from django_fxmoney.exceptions import (
    RateProviderError,
    RatesUnavailable,
    UnknownCurrency,
)
from django_worktime.exceptions import InvalidSegment, InvalidTransition, SessionConflict

logger = logging.getLogger(__name__)


class BadRequest(ValueError):
    """Raised for malformed request input."""
    pass


# exception class -> (error code, HTTP status)
ERROR_RESPONSES = [
    (InvalidTransition, "invalid_transition", 400),
    (SessionConflict, "conflict", 409),
    (InvalidSegment, "invalid_segment", 400),
    (UnknownCurrency, "unknown_currency", 400),
    (RatesUnavailable, "rates_unavailable", 503),
    (RateProviderError, "rate_provider_error", 502),
    (BadRequest, "bad_request", 400),
]

HANDLED_ERRORS = tuple(exc_class for exc_class, _, _ in ERROR_RESPONSES)


def error_response(exc: Exception) -> JsonResponse:
    """Translate a domain exception into a JSON error response."""
    for exc_class, code, status in ERROR_RESPONSES:
        if isinstance(exc, exc_class):
            if status >= 500:
                logger.warning("API error %s: %s", code, exc)
            return JsonResponse({"error": code, "detail": str(exc)}, status=status)
    raise exc


def parse_json_body(request) -> dict:
    """Decode a JSON object body; an empty body is an empty object."""
    if not request.body:
        return {}
    try:
        body = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise BadRequest("Request body is not valid JSON")
    if not isinstance(body, dict):
        raise BadRequest("Request body must be a JSON object")
    return body


def parse_day(value, field: str = "date") -> date:
    """Parse an ISO date (YYYY-MM-DD) from a path or query value."""
    try:
        day = parse_date(value) if value else None
    except ValueError:
        day = None
    if day is None:
        raise BadRequest(f"Invalid {field}: {value!r}")
    return day
