"""Draft -> Validated -> Persisted -> Deleted lifecycle of one schedule entry.

Validation runs against a locally held snapshot of the group's day and
the write goes to the Schedule Service afterwards. Another client can
land a conflicting write in between; the service's own overlap check is
what finally rejects it, and that rejection comes back here as a
``PersistenceError``.
"""

from __future__ import annotations

from collections.abc import Iterable

from app.clients.schedule_client import ScheduleClient
from app.core.logging import get_logger
from app.domain.errors import InvalidTransition, PersistenceError
from app.domain.models import EntryState, ScheduleEntry, ScheduleEntryIn
from app.services.validation import validate_candidate

log = get_logger(__name__)


class ScheduleEntryLifecycle:
    """Drives a single entry through validation, persistence and deletion.

    Start from a new form (``ScheduleEntryLifecycle(client, group_id, data)``)
    or from a stored record (``ScheduleEntryLifecycle.from_entry``).
    """

    def __init__(
        self, client: ScheduleClient, group_id: int, data: ScheduleEntryIn
    ) -> None:
        self.client = client
        self.group_id = group_id
        self.data = data
        self.state = EntryState.DRAFT
        self.entry: ScheduleEntry | None = None

    @classmethod
    def from_entry(
        cls, client: ScheduleClient, entry: ScheduleEntry
    ) -> ScheduleEntryLifecycle:
        lifecycle = cls(client, entry.group_id, entry.to_input())
        lifecycle.entry = entry
        lifecycle.state = EntryState.PERSISTED
        return lifecycle

    @property
    def exclude_id(self) -> int | None:
        """Id skipped by the overlap check: the entry itself while editing."""
        return self.entry.id if self.entry is not None else None

    def _require(self, *states: EntryState) -> None:
        if self.state not in states:
            allowed = ", ".join(s.value for s in states)
            raise InvalidTransition(
                f"Cannot do this from state {self.state.value!r} (needs {allowed})"
            )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def validate(self, existing: Iterable[ScheduleEntry] | None = None) -> None:
        """Draft -> Validated.

        Fetches the group's entries for the candidate's weekday when no
        snapshot is given. Raises ``InvalidTimeFormat``, ``EndBeforeStart``
        or ``OverlapConflict``; the state stays ``Draft`` on failure.
        """
        self._require(EntryState.DRAFT)
        if existing is None:
            existing = self.client.list_schedules(self.group_id, self.data.weekday)
        validate_candidate(
            self.data.as_candidate(self.group_id), existing, self.exclude_id
        )
        self.state = EntryState.VALIDATED

    def persist(self) -> ScheduleEntry:
        """Validated -> Persisted.

        A ``PersistenceError`` is re-raised unchanged and sends the entry
        back to ``Draft`` so it is validated again before the next write.
        """
        self._require(EntryState.VALIDATED)
        try:
            if self.entry is None:
                saved = self.client.create(self.group_id, self.data)
            else:
                saved = self.client.update(self.group_id, self.entry.id, self.data)
        except PersistenceError:
            self.state = EntryState.DRAFT
            raise
        self.entry = saved
        self.state = EntryState.PERSISTED
        log.info(
            "schedule_entry_persisted",
            schedule_id=saved.id,
            group_id=self.group_id,
        )
        return saved

    def submit(self, existing: Iterable[ScheduleEntry] | None = None) -> ScheduleEntry:
        """Validate and persist in one step."""
        self.validate(existing)
        return self.persist()

    def edit(self, data: ScheduleEntryIn) -> None:
        """Persisted -> Draft with new values; the next validation skips self."""
        self._require(EntryState.PERSISTED)
        self.data = data
        self.state = EntryState.DRAFT

    def delete(self) -> None:
        """Persisted -> Deleted (terminal)."""
        self._require(EntryState.PERSISTED)
        if self.entry is None:
            raise InvalidTransition("Entry has no stored id to delete")
        self.client.delete(self.group_id, self.entry.id)
        self.state = EntryState.DELETED
        log.info(
            "schedule_entry_deleted",
            schedule_id=self.entry.id,
            group_id=self.group_id,
        )
