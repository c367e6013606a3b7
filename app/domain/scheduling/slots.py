"""
Boundary validation for schedule-day pattern data.

Contract ``scheduleDays`` arrive as loosely typed JSON, e.g.::

    [{"day": "monday", "startTime": "09:00", "durationMinutes": 120, "tasks": ["Kitchen"]},
     "friday"]

Entries are turned into strict ``ScheduleDay`` values here. A malformed entry
never aborts the run: it is dropped and reported as a ``SkippedSlotWarning``.
"""

from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Any, Iterable, Optional, Union

from .errors import SkippedSlotWarning
from .weekdays import FALLBACK_WEEKDAY, Weekday, is_known_weekday, weekday_number

TIME_FORMAT = "%H:%M"


@dataclass(frozen=True)
class ScheduleDay:
    weekday: Weekday
    start_time: time
    duration_minutes: int
    tasks: tuple = field(default_factory=tuple)
    position: int = 0


class InvalidSlotValue(ValueError):
    pass


def parse_start_time(value: Union[str, time]) -> time:
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    if not isinstance(value, str):
        raise InvalidSlotValue(f"unparseable start time {value!r}")
    try:
        return datetime.strptime(value.strip(), TIME_FORMAT).time()
    except ValueError:
        raise InvalidSlotValue(f"unparseable start time {value!r}") from None


def parse_duration(value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidSlotValue(f"invalid duration {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidSlotValue(f"duration must be whole minutes, got {value!r}")
        value = int(value)
    elif isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise InvalidSlotValue(f"invalid duration {value!r}") from None
    elif not isinstance(value, int):
        raise InvalidSlotValue(f"invalid duration {value!r}")

    if value <= 0:
        raise InvalidSlotValue(f"duration must be positive, got {value}")
    return value


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_schedule_day(
    raw: Any,
    position: int,
    default_start_time: Union[str, time],
    default_duration_minutes: int,
) -> tuple[Optional[ScheduleDay], list[SkippedSlotWarning]]:
    """Validate one pattern entry. Returns (slot or None, warnings)."""
    if isinstance(raw, str):
        raw = {"day": raw}
    if not isinstance(raw, dict):
        return None, [SkippedSlotWarning(position, None, f"unsupported schedule day entry {raw!r}")]

    day_name = raw.get("day") or raw.get("weekday")
    if _is_missing(day_name) or not isinstance(day_name, str):
        return None, [SkippedSlotWarning(position, None, "missing day name")]

    warnings = []
    if not is_known_weekday(day_name):
        warnings.append(
            SkippedSlotWarning(
                position,
                day_name,
                f"unrecognised day name, defaulting to {FALLBACK_WEEKDAY.label}",
            )
        )

    raw_start = raw.get("startTime")
    raw_duration = raw.get("durationMinutes")
    try:
        start_time = parse_start_time(
            default_start_time if _is_missing(raw_start) else raw_start
        )
        duration = parse_duration(
            default_duration_minutes if _is_missing(raw_duration) else raw_duration
        )
    except InvalidSlotValue as e:
        warnings.append(SkippedSlotWarning(position, day_name, f"skipped: {e}"))
        return None, warnings

    raw_tasks = raw.get("tasks")
    slot = ScheduleDay(
        weekday=weekday_number(day_name),
        start_time=start_time,
        duration_minutes=duration,
        tasks=tuple(raw_tasks) if isinstance(raw_tasks, (list, tuple)) else (),
        position=position,
    )
    return slot, warnings


def parse_schedule_days(
    raw_days: Optional[Iterable[Any]],
    default_start_time: Union[str, time],
    default_duration_minutes: int,
) -> tuple[list[ScheduleDay], list[SkippedSlotWarning]]:
    """Validate a whole pattern, keeping every usable slot"""
    slots = []
    warnings = []
    for position, raw in enumerate(raw_days or ()):
        slot, slot_warnings = parse_schedule_day(
            raw, position, default_start_time, default_duration_minutes
        )
        warnings.extend(slot_warnings)
        if slot is not None:
            slots.append(slot)
    return slots, warnings
