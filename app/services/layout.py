"""Time-to-pixel geometry for calendar-style schedule grids.

Everything here is pure: no logging, no I/O. A degraded result is
returned to the caller, who decides how to report it.
"""

from __future__ import annotations

from app.domain.errors import InvalidTimeFormat
from app.domain.models import LayoutResult, TimeGridConfig, TimeSlot
from app.services.timeconv import format_minutes, to_minutes

FALLBACK_DURATION_MINUTES = 60


def compute_layout(
    candidate: TimeSlot,
    grid_config: TimeGridConfig,
    content_min_height_px: float,
) -> LayoutResult:
    """Place *candidate* on the grid described by *grid_config*.

    Offsets are measured from ``grid_config.first_slot_start``. If the
    times do not parse, the block starts before the grid, or its duration
    is not positive, a one-hour block at the top of the grid is returned
    with ``degraded`` set.

    ``needs_scroll`` is true when the block is shorter than the height
    its content needs (e.g. 110px for a block with action buttons).
    """
    reason: str | None = None
    try:
        start = to_minutes(candidate.start_time)
        end = to_minutes(candidate.end_time)
    except InvalidTimeFormat as exc:
        reason = str(exc)
    else:
        start_offset = start - to_minutes(grid_config.first_slot_start)
        duration = end - start
        if start_offset < 0:
            reason = (
                f"starts at {candidate.start_time}, before grid start "
                f"{grid_config.first_slot_start}"
            )
        elif duration <= 0:
            reason = (
                f"non-positive duration {candidate.start_time}-{candidate.end_time}"
            )

    if reason is not None:
        start_offset = 0
        duration = FALLBACK_DURATION_MINUTES

    pixels_per_minute = grid_config.pixels_per_hour / 60
    height_px = duration * pixels_per_minute
    return LayoutResult(
        top_offset_px=start_offset * pixels_per_minute,
        height_px=height_px,
        needs_scroll=height_px < content_min_height_px,
        degraded=reason is not None,
        degraded_reason=reason,
    )


def grid_height_px(grid_config: TimeGridConfig) -> float:
    """Total height of a column spanning first_slot_start..last_slot_end."""
    span = to_minutes(grid_config.last_slot_end) - to_minutes(
        grid_config.first_slot_start
    )
    return span * grid_config.pixels_per_hour / 60


def time_slots(grid_config: TimeGridConfig) -> list[str]:
    """Hourly row labels, both grid bounds included.

    The default grid yields ``["07:00", "08:00", ..., "15:00"]``.
    """
    first = to_minutes(grid_config.first_slot_start)
    last = to_minutes(grid_config.last_slot_end)
    return [format_minutes(m) for m in range(first, last + 1, 60)]
