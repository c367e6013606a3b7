"""Lookup of calendar dates that already have a generated job"""

from typing import Iterable, Optional

from .horizon import DateLike, GenerationWindow, as_calendar_date


class ExistingInstanceIndex:
    """
    Read-only snapshot of the dates a contract already has jobs on.

    Only the calendar date matters: a job at 08:00 and a slot at 17:00 on the
    same day count as the same date. Built once per run from whatever the
    caller loaded from storage; it must not be refreshed mid-expansion.
    """

    def __init__(
        self,
        scheduled: Iterable[Optional[DateLike]] = (),
        window: Optional[GenerationWindow] = None,
    ):
        dates = set()
        for value in scheduled:
            if value is None:
                continue
            day = as_calendar_date(value)
            if window is not None and not window.contains(day):
                continue
            dates.add(day)
        self._dates = frozenset(dates)

    @classmethod
    def empty(cls) -> "ExistingInstanceIndex":
        return cls()

    @classmethod
    def from_drafts(cls, drafts, window: Optional[GenerationWindow] = None) -> "ExistingInstanceIndex":
        """Index the output of a previous run, e.g. to chain runs without a database"""
        return cls((draft.scheduled_start for draft in drafts), window=window)

    def has_instance_on(self, day: DateLike) -> bool:
        return as_calendar_date(day) in self._dates

    def __len__(self) -> int:
        return len(self._dates)

    def __contains__(self, day) -> bool:
        return self.has_instance_on(day)
