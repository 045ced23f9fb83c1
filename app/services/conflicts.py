"""Service for detecting overlapping classes within one weekday."""

from __future__ import annotations

from collections.abc import Iterable

from app.domain.models import ScheduleEntry, TimeSlot
from app.services.timeconv import to_minutes


def _in_scope(
    candidate: TimeSlot, entry: ScheduleEntry, exclude_id: int | None
) -> bool:
    if entry.weekday != candidate.weekday:
        return False
    if exclude_id is not None and entry.id == exclude_id:
        return False
    group_id = getattr(candidate, "group_id", None)
    if group_id is not None and entry.group_id != group_id:
        return False
    return True


def find_conflicts(
    candidate: TimeSlot,
    existing_entries: Iterable[ScheduleEntry],
    exclude_id: int | None = None,
) -> list[ScheduleEntry]:
    """Return entries in the candidate's scope that overlap it.

    Scope is the candidate's weekday, its group when it carries one, and
    every entry except ``exclude_id`` (the entry being edited).

    Overlap rule: conflict if cs < ee AND ce > es on minute offsets.
    Exact boundary touches (end == start) are NOT considered conflicts.
    Only the given entries are compared: a teacher booked in another
    group's schedule at the same time goes unnoticed.
    """
    cs = to_minutes(candidate.start_time)
    ce = to_minutes(candidate.end_time)
    return [
        entry
        for entry in existing_entries
        if _in_scope(candidate, entry, exclude_id)
        and cs < to_minutes(entry.end_time)
        and ce > to_minutes(entry.start_time)
    ]


def conflicts(
    candidate: TimeSlot,
    existing_entries: Iterable[ScheduleEntry],
    exclude_id: int | None = None,
) -> bool:
    return bool(find_conflicts(candidate, existing_entries, exclude_id))
