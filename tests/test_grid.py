"""Tests for weekly grid composition."""

from __future__ import annotations

import pytest

from app.domain.errors import InvalidScheduleGeometry
from app.domain.models import ScheduleEntry, TimeGridConfig
from app.domain.weekdays import SCHOOL_DAYS, Weekday
from app.services import grid
from app.services.grid import compose_week


class _RecordingLog:
    def __init__(self) -> None:
        self.warnings: list[tuple[str, dict]] = []

    def warning(self, event: str, **kw) -> None:
        self.warnings.append((event, kw))

    def debug(self, event: str, **kw) -> None:
        pass


@pytest.fixture()
def log(monkeypatch):
    recorder = _RecordingLog()
    monkeypatch.setattr(grid, "log", recorder)
    return recorder


def _make_entry(entry_id: int, weekday: Weekday, start: str, end: str) -> ScheduleEntry:
    return ScheduleEntry(
        id=entry_id,
        group_id=1,
        weekday=weekday,
        start_time=start,
        end_time=end,
        subject_id=entry_id,
    )


_ENTRIES = [
    _make_entry(1, Weekday.MONDAY, "10:00", "11:00"),
    _make_entry(2, Weekday.MONDAY, "08:00", "09:30"),
    _make_entry(3, Weekday.WEDNESDAY, "07:00", "08:00"),
    _make_entry(4, Weekday.SATURDAY, "09:00", "10:00"),
]


def test_columns_follow_requested_days(log):
    week = compose_week(_ENTRIES, TimeGridConfig())
    assert [c.weekday for c in week.columns] == list(SCHOOL_DAYS)
    assert [c.label for c in week.columns] == [
        "Lunes", "Martes", "Miércoles", "Jueves", "Viernes",
    ]


def test_entries_partitioned_and_sorted_by_start(log):
    week = compose_week(_ENTRIES, TimeGridConfig())
    monday, tuesday, wednesday = week.columns[:3]
    assert [b.entry.id for b in monday.blocks] == [2, 1]
    assert tuesday.blocks == []
    assert [b.entry.id for b in wednesday.blocks] == [3]


def test_days_outside_grid_are_left_out(log):
    week = compose_week(_ENTRIES, TimeGridConfig())
    ids = [b.entry.id for c in week.columns for b in c.blocks]
    assert 4 not in ids

    week = compose_week(_ENTRIES, TimeGridConfig(), days=[Weekday.SATURDAY])
    assert [b.entry.id for b in week.columns[0].blocks] == [4]


def test_blocks_carry_layout(log):
    week = compose_week(_ENTRIES, TimeGridConfig(), content_min_height_px=50)
    monday = week.columns[0]
    first, second = monday.blocks
    assert (first.layout.top_offset_px, first.layout.height_px) == (60, 90)
    assert (second.layout.top_offset_px, second.layout.height_px) == (180, 60)
    assert week.time_slots[0] == "07:00"
    assert week.time_slots[-1] == "15:00"
    assert week.height_px == 480


def test_columns_are_independent(log):
    alone = compose_week([_ENTRIES[2]], TimeGridConfig())
    together = compose_week(_ENTRIES, TimeGridConfig())
    assert alone.columns[2] == together.columns[2]


def test_action_buttons_raise_content_height(log):
    plain = compose_week(_ENTRIES, TimeGridConfig())
    with_actions = compose_week(_ENTRIES, TimeGridConfig(), with_actions=True)
    # 90px block (08:00-09:30): fits plain content (90), not action buttons (110).
    assert plain.columns[0].blocks[0].layout.needs_scroll is False
    assert with_actions.columns[0].blocks[0].layout.needs_scroll is True


def test_degraded_layout_is_logged(log):
    bad = _make_entry(9, Weekday.TUESDAY, "11:00", "10:00")
    week = compose_week([bad], TimeGridConfig())
    layout = week.columns[1].blocks[0].layout
    assert layout.degraded is True
    assert len(log.warnings) == 1
    event, fields = log.warnings[0]
    assert event == "layout_degraded"
    assert fields["entry_id"] == 9
    assert fields["reason"] == layout.degraded_reason


def test_valid_layouts_are_not_logged(log):
    compose_week(_ENTRIES, TimeGridConfig())
    assert log.warnings == []


def test_strict_mode_raises(log):
    bad = _make_entry(9, Weekday.TUESDAY, "nine", "10:00")
    with pytest.raises(InvalidScheduleGeometry):
        compose_week([bad], TimeGridConfig(), strict=True)


def test_english_labels(log):
    week = compose_week([], TimeGridConfig(), locale="en")
    assert week.columns[0].label == "Monday"


def test_defaults_come_from_settings(log):
    week = compose_week([])
    assert len(week.time_slots) == 9
    assert len(week.columns) == 5
