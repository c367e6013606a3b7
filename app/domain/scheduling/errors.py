"""Errors and warnings raised while expanding recurring contracts into jobs"""

from dataclasses import dataclass
from typing import Optional


class JobGenerationError(Exception):
    """Base class for recurring job generation failures"""


class ScheduleValidationError(JobGenerationError):
    """Contract cannot be expanded at all (no usable schedule days, inverted dates, ...)"""


@dataclass(frozen=True)
class SkippedSlotWarning:
    """A single schedule-day slot that was skipped or adjusted during expansion.

    Warnings never abort a run; they are returned next to the generated drafts
    so the caller can surface them.
    """

    slot_index: int
    day: Optional[str]
    reason: str

    @property
    def message(self) -> str:
        label = self.day if self.day else "?"
        return f"Schedule day #{self.slot_index + 1} ({label}): {self.reason}"

    def __str__(self) -> str:
        return self.message
