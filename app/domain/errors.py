"""Error hierarchy for schedule validation, layout and persistence.

Validation errors are raised locally before any network write. The HTTP
layer maps them onto status codes; ``PersistenceError`` is the only one
that originates outside this package.
"""

from __future__ import annotations


class ScheduleError(Exception):
    """Base exception for all schedule errors."""


class ScheduleValidationError(ScheduleError):
    """A candidate interval was rejected before reaching the store."""


class InvalidTimeFormat(ScheduleValidationError):
    """A time string is not a 24-hour ``HH:MM`` value."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid time {value!r}: expected HH:MM (00:00-23:59)")


class EndBeforeStart(ScheduleValidationError):
    """``end_time`` is not strictly after ``start_time``."""

    def __init__(self, start_time: str, end_time: str) -> None:
        self.start_time = start_time
        self.end_time = end_time
        super().__init__(
            f"End time {end_time} must be after start time {start_time}"
        )


class OverlapConflict(ScheduleValidationError):
    """The candidate intersects one or more existing entries in scope."""

    def __init__(self, conflicting_ids: list[int]) -> None:
        self.conflicting_ids = conflicting_ids
        ids = ", ".join(str(i) for i in conflicting_ids)
        super().__init__(f"Schedule overlaps with existing class(es): {ids}")


class InvalidScheduleGeometry(ScheduleError):
    """Layout inputs were degenerate and a fallback block was substituted."""


class PersistenceError(ScheduleError):
    """The Schedule Service rejected or failed to process a request.

    ``message`` is the server's own text, passed through unchanged.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InvalidTransition(ScheduleError):
    """A lifecycle operation was attempted from the wrong state."""
