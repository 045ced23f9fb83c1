"""Conversion between ``HH:MM`` strings and minutes since midnight."""

from __future__ import annotations

import re

from app.domain.errors import InvalidTimeFormat

MINUTES_PER_DAY = 24 * 60

_TIME_RE = re.compile(r"([01][0-9]|2[0-3]):([0-5][0-9])")


def to_minutes(time: str) -> int:
    """Return minutes since midnight for a 24-hour ``HH:MM`` string.

    Both fields are exactly two digits: ``"08:05"`` is 485, while
    ``"8:5"``, ``"24:00"`` and ``"08:60"`` raise ``InvalidTimeFormat``.
    """
    if not isinstance(time, str):
        raise InvalidTimeFormat(time)
    match = _TIME_RE.fullmatch(time)
    if match is None:
        raise InvalidTimeFormat(time)
    return int(match.group(1)) * 60 + int(match.group(2))


def format_minutes(minutes: int) -> str:
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"minutes out of range: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
