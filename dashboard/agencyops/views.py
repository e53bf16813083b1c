"""Views for agencyops."""

import logging

from django.db import DatabaseError, connection
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def health_check(request):
    """Health check endpoint for container orchestration."""
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        db_status = "ok"
    except DatabaseError as e:
        logger.error("Health check database query failed: %s", e)
        db_status = f"error: {e}"

    return JsonResponse({
        "status": "ok" if db_status == "ok" else "degraded",
        "database": db_status,
    })
