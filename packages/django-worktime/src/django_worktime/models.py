"""Models for django-worktime."""

import uuid

from django.conf import settings
from django.db import models

from .durations import SessionTotals, compute_totals
from .segments import open_segment, parse_segments


class WorktimeBaseModel(models.Model):
    """Base model with UUID PK and timestamps."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class SessionStatus(models.TextChoices):
    NOT_STARTED = "not_started", "Not started"
    WORKING = "working", "Working"
    ON_BREAK = "on_break", "On break"
    ENDED = "ended", "Ended"


class WorkSession(WorktimeBaseModel):
    """
    One employee's attendance record for one calendar day.

    Key invariants:
    - One session per (employee, date)
    - segments is an append-only log; only the last segment may be open
    - status only changes through the transition services
    - total_duration/break_duration are caches of compute_totals(segments)
    """

    employee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="work_sessions",
    )
    date = models.DateField()
    status = models.CharField(
        max_length=20,
        choices=SessionStatus.choices,
        default=SessionStatus.NOT_STARTED,
    )
    segments = models.JSONField(default=list, blank=True)

    total_duration = models.PositiveIntegerField(default=0)
    break_duration = models.PositiveIntegerField(default=0)

    started_at = models.DateTimeField(null=True, blank=True)
    ended_at = models.DateTimeField(null=True, blank=True)
    notes = models.TextField(blank=True, default="")

    # Bumped on every transition; writes are conditional on it.
    version = models.PositiveIntegerField(default=0)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["employee", "date"],
                name="worktime_one_session_per_employee_day",
            ),
            models.CheckConstraint(
                condition=models.Q(status__in=SessionStatus.values),
                name="worktime_status_valid",
            ),
        ]
        indexes = [
            models.Index(fields=["date", "status"], name="worktime_date_status_idx"),
        ]
        ordering = ["-date"]

    def __str__(self):
        return f"WorkSession({self.employee_id}, {self.date}, {self.status})"

    def get_segments(self) -> list:
        return parse_segments(self.segments)

    @property
    def open_segment(self):
        return open_segment(self.get_segments())

    def totals(self, now=None) -> SessionTotals:
        """Totals recomputed from the segment log.

        Live while a segment is open; static once every segment is closed.
        """
        return compute_totals(self.get_segments(), now=now)

    def worked_seconds(self, now=None) -> int:
        return self.totals(now).worked_seconds

    def break_seconds(self, now=None) -> int:
        return self.totals(now).break_seconds
