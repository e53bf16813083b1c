"""Custom exceptions for django-worktime."""


class WorktimeError(Exception):
    """Base exception for worktime errors."""
    pass


class InvalidTransition(WorktimeError):
    """Raised when a transition is not allowed from the session's current status."""

    def __init__(self, transition: str, status: str):
        self.transition = transition
        self.status = status
        super().__init__(f"Cannot {transition} a session that is '{status}'")


class SessionConflict(WorktimeError):
    """Raised when a concurrent transition changed the session first.

    Transient: re-fetch the session and retry the intended transition.
    """

    def __init__(self, session_id, expected_status: str):
        self.session_id = session_id
        self.expected_status = expected_status
        super().__init__(
            f"Session '{session_id}' changed concurrently (expected status '{expected_status}')"
        )


class InvalidSegment(WorktimeError, ValueError):
    """Raised when segment data is malformed or breaks the segment invariants."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)
