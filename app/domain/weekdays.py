"""Weekday index and its display/localization layer.

Scheduling logic only ever sees ``Weekday``; day names exist for display
and for reading legacy payloads that sent localized names.
"""

from __future__ import annotations

import unicodedata
from enum import IntEnum


class Weekday(IntEnum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


SCHOOL_DAYS: tuple[Weekday, ...] = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
)

DEFAULT_LOCALE = "es"

_LABELS: dict[str, tuple[str, ...]] = {
    "es": ("Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado", "Domingo"),
    "en": ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
}


def _fold(name: str) -> str:
    """Lowercase and strip accents: 'Miércoles' -> 'miercoles'."""
    decomposed = unicodedata.normalize("NFKD", name.strip().lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


_BY_NAME: dict[str, Weekday] = {
    _fold(label): Weekday(index)
    for labels in _LABELS.values()
    for index, label in enumerate(labels)
}


def weekday_label(day: Weekday | int, locale: str = DEFAULT_LOCALE) -> str:
    """Return the display name of *day* in *locale*."""
    try:
        labels = _LABELS[locale]
    except KeyError:
        raise ValueError(f"Unsupported locale: {locale!r}") from None
    return labels[Weekday(day)]


def parse_weekday(value: object) -> Weekday:
    """Coerce an index, digit string or localized day name into a Weekday.

    Raises ``ValueError`` for anything else.
    """
    if isinstance(value, Weekday):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid weekday: {value!r}")
    if isinstance(value, int):
        return Weekday(value)
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return Weekday(int(text))
        day = _BY_NAME.get(_fold(text))
        if day is not None:
            return day
    raise ValueError(f"Invalid weekday: {value!r}")
