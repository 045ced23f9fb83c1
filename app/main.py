"""FastAPI application: reference implementation of the Schedule Service."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException

from app.core.config import get_settings
from app.core.exceptions import register_exception_handlers
from app.core.logging import get_logger, setup_logging
from app.domain.models import ScheduleEntry, ScheduleEntryIn
from app.domain.weekdays import Weekday, parse_weekday
from app.repos.memory import ScheduleRepository

settings = get_settings()
setup_logging(json_output=settings.log_json, log_level=settings.log_level)
log = get_logger(__name__)

app = FastAPI(title="Schedule Service")
register_exception_handlers(app)

# ── Singletons (created at import time for simplicity) ────────────────
schedule_repo = ScheduleRepository()


def _get_owned(group_id: int, schedule_id: int) -> ScheduleEntry:
    entry = schedule_repo.get(schedule_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Schedule not found")
    if entry.group_id != group_id:
        raise HTTPException(
            status_code=403, detail="Schedule does not belong to this group"
        )
    return entry


# ── Routes ────────────────────────────────────────────────────────────


@app.get("/groups/{group_id}/schedules", response_model=list[ScheduleEntry])
def list_schedules(group_id: int, day: str | None = None) -> list[ScheduleEntry]:
    """Return a group's schedule, optionally for a single weekday.

    ``day`` is the weekday index; legacy day names ("lunes") are accepted.
    """
    weekday: Weekday | None = None
    if day is not None:
        try:
            weekday = parse_weekday(day)
        except ValueError:
            raise HTTPException(status_code=422, detail=f"Invalid weekday: {day}")
    return schedule_repo.list_for_group(group_id, weekday)


@app.post(
    "/groups/{group_id}/schedules", response_model=ScheduleEntry, status_code=201
)
def create_schedule(group_id: int, body: ScheduleEntryIn) -> ScheduleEntry:
    """Store a new class; rejected with 409 if it overlaps the group's day."""
    entry = schedule_repo.create(group_id, body)
    log.info(
        "schedule_created",
        schedule_id=entry.id,
        group_id=group_id,
        weekday=int(entry.weekday),
        start_time=entry.start_time,
        end_time=entry.end_time,
    )
    return entry


@app.put("/groups/{group_id}/schedules/{schedule_id}", response_model=ScheduleEntry)
def update_schedule(
    group_id: int, schedule_id: int, body: ScheduleEntryIn
) -> ScheduleEntry:
    """Replace a class; the overlap check skips the class being replaced."""
    _get_owned(group_id, schedule_id)
    try:
        entry = schedule_repo.update(schedule_id, group_id, body)
    except KeyError:
        raise HTTPException(status_code=404, detail="Schedule not found")
    log.info(
        "schedule_updated",
        schedule_id=schedule_id,
        group_id=group_id,
        weekday=int(entry.weekday),
        start_time=entry.start_time,
        end_time=entry.end_time,
    )
    return entry


@app.delete("/groups/{group_id}/schedules/{schedule_id}")
def delete_schedule(group_id: int, schedule_id: int) -> dict:
    _get_owned(group_id, schedule_id)
    schedule_repo.delete(schedule_id)
    log.info("schedule_deleted", schedule_id=schedule_id, group_id=group_id)
    return {"message": "Schedule deleted"}
