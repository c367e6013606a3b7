"""Weekday name resolution and next-occurrence calendar arithmetic.

Weekdays are numbered from Sunday (0) to Saturday (6), the numbering used by
the contract ``scheduleDays`` data. Python's own ``date.weekday()`` starts the
week on Monday, so all conversions go through this module.
"""

from datetime import date, timedelta
from enum import IntEnum
from typing import Optional


class Weekday(IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def label(self) -> str:
        return self.name.lower()


# Unknown day names resolve here instead of failing the whole run
FALLBACK_WEEKDAY = Weekday.MONDAY

_DAY_NAMES = {weekday.label: weekday for weekday in Weekday}


def is_known_weekday(name: Optional[str]) -> bool:
    if not isinstance(name, str):
        return False
    return name.strip().lower() in _DAY_NAMES


def weekday_number(name: Optional[str]) -> Weekday:
    """Map a case-insensitive English day name to its weekday number.

    Unrecognised names fall back to Monday. Use ``is_known_weekday`` first when
    the fallback needs to be reported.
    """
    if not isinstance(name, str):
        return FALLBACK_WEEKDAY
    return _DAY_NAMES.get(name.strip().lower(), FALLBACK_WEEKDAY)


def python_weekday_to_number(day: date) -> Weekday:
    """Weekday number (Sunday = 0) of a calendar date"""
    return Weekday(day.isoweekday() % 7)


def next_occurrence_on_or_after(day: date, weekday: int) -> date:
    """Return ``day`` if it falls on ``weekday``, otherwise the next date that does"""
    days_until = (int(weekday) - python_weekday_to_number(day) + 7) % 7
    return day + timedelta(days=days_until)
