"""Local checks a candidate must pass before it is sent to the store."""

from __future__ import annotations

from collections.abc import Iterable

from app.domain.errors import EndBeforeStart, OverlapConflict
from app.domain.models import ScheduleEntry, TimeSlot
from app.services.conflicts import find_conflicts
from app.services.timeconv import to_minutes


def validate_candidate(
    candidate: TimeSlot,
    existing_entries: Iterable[ScheduleEntry],
    exclude_id: int | None = None,
) -> None:
    """Raise the first validation error for *candidate*, if any.

    Order is fixed: ``InvalidTimeFormat`` on either end, then
    ``EndBeforeStart``, then ``OverlapConflict``. No network calls.
    """
    start = to_minutes(candidate.start_time)
    end = to_minutes(candidate.end_time)
    if end <= start:
        raise EndBeforeStart(candidate.start_time, candidate.end_time)

    overlapping = find_conflicts(candidate, existing_entries, exclude_id)
    if overlapping:
        raise OverlapConflict([entry.id for entry in overlapping])
