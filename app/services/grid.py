"""Weekly grid composition: one independent column per weekday."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence

from app.core.config import get_settings
from app.core.logging import get_logger
from app.domain.models import (
    DayColumn,
    GridBlock,
    ScheduleEntry,
    TimeGridConfig,
    WeekGrid,
)
from app.domain.weekdays import DEFAULT_LOCALE, SCHOOL_DAYS, Weekday, weekday_label
from app.services.layout import compute_layout, grid_height_px, time_slots

log = get_logger(__name__)


def _start_sort_key(entry: ScheduleEntry) -> tuple[str, int]:
    # Malformed times still sort deterministically.
    return entry.start_time, entry.id


def compose_week(
    entries: Iterable[ScheduleEntry],
    grid_config: TimeGridConfig | None = None,
    days: Sequence[Weekday] = SCHOOL_DAYS,
    *,
    with_actions: bool = False,
    content_min_height_px: float | None = None,
    locale: str = DEFAULT_LOCALE,
    strict: bool = False,
) -> WeekGrid:
    """Partition *entries* by weekday and lay out each column.

    Columns are computed independently; entries on days outside *days*
    are left out. Degraded layouts are logged as warnings, or raised as
    ``InvalidScheduleGeometry`` when *strict* is set.
    """
    settings = get_settings()
    if grid_config is None:
        grid_config = settings.grid_config()
    if content_min_height_px is None:
        content_min_height_px = (
            settings.content_min_height_with_actions_px
            if with_actions
            else settings.content_min_height_px
        )

    by_day: dict[Weekday, list[ScheduleEntry]] = defaultdict(list)
    for entry in entries:
        by_day[entry.weekday].append(entry)

    columns: list[DayColumn] = []
    for day in days:
        blocks: list[GridBlock] = []
        for entry in sorted(by_day.get(day, []), key=_start_sort_key):
            layout = compute_layout(entry, grid_config, content_min_height_px)
            if layout.degraded:
                if strict:
                    layout.raise_for_degraded()
                log.warning(
                    "layout_degraded",
                    entry_id=entry.id,
                    group_id=entry.group_id,
                    weekday=int(entry.weekday),
                    start_time=entry.start_time,
                    end_time=entry.end_time,
                    reason=layout.degraded_reason,
                )
            blocks.append(GridBlock(entry=entry, layout=layout))
        columns.append(
            DayColumn(weekday=day, label=weekday_label(day, locale), blocks=blocks)
        )

    skipped = sum(len(v) for k, v in by_day.items() if k not in days)
    if skipped:
        log.debug("entries_outside_grid_days", count=skipped)

    return WeekGrid(
        time_slots=time_slots(grid_config),
        height_px=grid_height_px(grid_config),
        columns=columns,
    )
