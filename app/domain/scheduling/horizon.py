"""Generation window (horizon) calculation"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union

from .errors import ScheduleValidationError

DateLike = Union[date, datetime]


def as_calendar_date(value: DateLike) -> date:
    """Drop the time-of-day component; engine dates are plain calendar dates"""
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class GenerationWindow:
    """Inclusive range of calendar dates a single generation run may fill"""

    start: date
    end: date

    def contains(self, day: DateLike) -> bool:
        return self.start <= as_calendar_date(day) <= self.end

    def week_anchors(self) -> Iterator[date]:
        """First day of each 7-day block of the window"""
        anchor = self.start
        while anchor <= self.end:
            yield anchor
            anchor += timedelta(days=7)

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


def compute_window(
    as_of: DateLike,
    weeks_ahead: int,
    contract_start: DateLike,
    contract_end: Optional[DateLike] = None,
) -> Optional[GenerationWindow]:
    """
    Resolve the window of dates to generate jobs for.

    The window opens on the later of ``as_of`` and the contract start and covers
    ``weeks_ahead * 7`` calendar days from there, so the bound
    ``start + weeks_ahead weeks`` itself is excluded. A contract end date clips
    the window and is itself inclusive.

    Returns None when clipping leaves nothing to generate.

    Raises:
        ScheduleValidationError: If weeks_ahead is not a positive integer
    """
    if isinstance(weeks_ahead, bool) or not isinstance(weeks_ahead, int) or weeks_ahead < 1:
        raise ScheduleValidationError(f"weeksAhead must be a positive integer, got {weeks_ahead!r}")

    start = max(as_calendar_date(as_of), as_calendar_date(contract_start))
    end = start + timedelta(days=weeks_ahead * 7 - 1)

    if contract_end is not None:
        end = min(end, as_calendar_date(contract_end))

    if start > end:
        return None
    return GenerationWindow(start=start, end=end)
