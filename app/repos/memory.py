"""In-memory repository for schedule entries."""

from __future__ import annotations

import threading

from app.domain.models import EntryStatus, ScheduleEntry, ScheduleEntryIn
from app.domain.weekdays import Weekday
from app.services.validation import validate_candidate


class ScheduleRepository:
    """Dict-backed store for ScheduleEntry instances, keyed by id.

    Writes re-run the overlap check against the stored entries while
    holding the store lock, so two conflicting writes cannot both land
    even if each passed a client-side check on an older snapshot.
    """

    def __init__(self) -> None:
        self._store: dict[int, ScheduleEntry] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def get(self, entry_id: int) -> ScheduleEntry | None:
        return self._store.get(entry_id)

    def list_for_group(
        self, group_id: int, weekday: Weekday | None = None
    ) -> list[ScheduleEntry]:
        with self._lock:
            entries = [
                e
                for e in self._store.values()
                if e.group_id == group_id
                and (weekday is None or e.weekday == weekday)
            ]
        return sorted(entries, key=lambda e: (e.weekday, e.start_time, e.id))

    def create(self, group_id: int, data: ScheduleEntryIn) -> ScheduleEntry:
        with self._lock:
            validate_candidate(data.as_candidate(group_id), self._store.values())
            entry = ScheduleEntry(
                id=self._next_id,
                group_id=group_id,
                status=EntryStatus.ACTIVE,
                **data.model_dump(),
            )
            self._store[entry.id] = entry
            self._next_id += 1
            return entry

    def update(
        self, entry_id: int, group_id: int, data: ScheduleEntryIn
    ) -> ScheduleEntry:
        """Replace an entry, checking the new interval against all others."""
        with self._lock:
            if entry_id not in self._store:
                raise KeyError(entry_id)
            validate_candidate(
                data.as_candidate(group_id),
                self._store.values(),
                exclude_id=entry_id,
            )
            entry = ScheduleEntry(
                id=entry_id,
                group_id=group_id,
                status=EntryStatus.ACTIVE,
                **data.model_dump(),
            )
            self._store[entry_id] = entry
            return entry

    def delete(self, entry_id: int) -> None:
        with self._lock:
            self._store.pop(entry_id, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self._next_id = 1
