"""Domain models for weekly class schedules and grid layout."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.domain.errors import InvalidScheduleGeometry, InvalidTimeFormat
from app.domain.weekdays import Weekday, parse_weekday
from app.services.timeconv import to_minutes


class ClassMode(StrEnum):
    IN_PERSON = "in_person"
    REMOTE = "remote"
    HYBRID = "hybrid"


class EntryStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class EntryState(StrEnum):
    DRAFT = "draft"
    VALIDATED = "validated"
    PERSISTED = "persisted"
    DELETED = "deleted"


_LEGACY_MODES = {
    "presencial": ClassMode.IN_PERSON,
    "virtual": ClassMode.REMOTE,
    "híbrido": ClassMode.HYBRID,
    "hibrido": ClassMode.HYBRID,
}

_LEGACY_STATUSES = {
    "activo": EntryStatus.ACTIVE,
    "inactivo": EntryStatus.INACTIVE,
}


class _WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python; both accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Schedule entries
# ---------------------------------------------------------------------------


class TimeSlot(_WireModel):
    """A weekday plus a ``[start_time, end_time)`` interval.

    Times are kept as raw ``HH:MM`` strings and are not checked here;
    stored records may be malformed and the grid has to survive them.
    """

    weekday: Weekday
    start_time: str
    end_time: str

    @field_validator("weekday", mode="before")
    @classmethod
    def _coerce_weekday(cls, value: object) -> Weekday:
        return parse_weekday(value)


class ScheduleCandidate(TimeSlot):
    """An interval proposed for a group, checked before it is written."""

    group_id: int | None = None


class ScheduleEntryIn(TimeSlot):
    """Request body for creating or replacing a schedule entry."""

    subject_id: int
    teacher_id: int | None = None
    mode: ClassMode = ClassMode.IN_PERSON
    room_id: int | None = None

    @field_validator("mode", mode="before")
    @classmethod
    def _coerce_mode(cls, value: object) -> object:
        if isinstance(value, str):
            return _LEGACY_MODES.get(value.strip().lower(), value)
        return value

    def as_candidate(self, group_id: int | None = None) -> ScheduleCandidate:
        return ScheduleCandidate(
            weekday=self.weekday,
            start_time=self.start_time,
            end_time=self.end_time,
            group_id=group_id,
        )


class ScheduleEntry(ScheduleEntryIn):
    id: int
    group_id: int
    status: EntryStatus = EntryStatus.ACTIVE

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: object) -> object:
        if isinstance(value, str):
            return _LEGACY_STATUSES.get(value.strip().lower(), value)
        return value

    def to_input(self) -> ScheduleEntryIn:
        return ScheduleEntryIn(
            weekday=self.weekday,
            start_time=self.start_time,
            end_time=self.end_time,
            subject_id=self.subject_id,
            teacher_id=self.teacher_id,
            mode=self.mode,
            room_id=self.room_id,
        )


# ---------------------------------------------------------------------------
# Grid geometry
# ---------------------------------------------------------------------------


class TimeGridConfig(_WireModel):
    first_slot_start: str = "07:00"
    last_slot_end: str = "15:00"
    pixels_per_hour: float = Field(default=60, gt=0, allow_inf_nan=False)

    @field_validator("first_slot_start", "last_slot_end")
    @classmethod
    def _valid_time(cls, value: str) -> str:
        try:
            to_minutes(value)
        except InvalidTimeFormat as exc:
            raise ValueError(str(exc)) from exc
        return value

    @model_validator(mode="after")
    def _range_not_empty(self) -> TimeGridConfig:
        if to_minutes(self.last_slot_end) <= to_minutes(self.first_slot_start):
            raise ValueError("last_slot_end must be after first_slot_start")
        return self


class LayoutResult(_WireModel):
    model_config = ConfigDict(frozen=True)

    top_offset_px: float
    height_px: float
    needs_scroll: bool
    degraded: bool = False
    degraded_reason: str | None = None

    def raise_for_degraded(self) -> None:
        """Raise ``InvalidScheduleGeometry`` if a fallback block was used."""
        if self.degraded:
            raise InvalidScheduleGeometry(self.degraded_reason or "degraded layout")


class GridBlock(_WireModel):
    entry: ScheduleEntry
    layout: LayoutResult


class DayColumn(_WireModel):
    weekday: Weekday
    label: str
    blocks: list[GridBlock] = Field(default_factory=list)


class WeekGrid(_WireModel):
    time_slots: list[str]
    height_px: float
    columns: list[DayColumn]
