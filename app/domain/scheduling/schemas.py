"""Scheduling domain schemas - Pydantic models for validation"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from ...config import (
    JOB_DEFAULT_DURATION_MINUTES,
    JOB_DEFAULT_START_TIME,
    JOB_GENERATION_DEFAULT_WEEKS_AHEAD,
    JOB_GENERATION_MAX_WEEKS_AHEAD,
)


class ScheduleDayPayload(BaseModel):
    """One weekly slot. Loosely typed on purpose - slots are validated by the engine
    so a single bad slot becomes a warning instead of rejecting the whole request"""

    day: Any = None
    weekday: Any = None
    startTime: Any = None
    durationMinutes: Any = None
    tasks: Any = None

    class Config:
        extra = "allow"


class GenerateJobsRequest(BaseModel):
    """Schema for generating recurring jobs from a contract"""

    weeksAhead: int = Field(
        JOB_GENERATION_DEFAULT_WEEKS_AHEAD, ge=1, le=JOB_GENERATION_MAX_WEEKS_AHEAD
    )
    assignedTo: Optional[int] = None
    # Overrides the contract's own scheduleDays when provided
    scheduleDays: Optional[list[Union[ScheduleDayPayload, str]]] = None
    defaultStartTime: str = JOB_DEFAULT_START_TIME
    defaultDurationMinutes: int = Field(JOB_DEFAULT_DURATION_MINUTES, gt=0)
    # Overrides the pay derived from the contract hourly rate
    employeePay: Optional[Decimal] = Field(None, ge=0)

    def schedule_days_payload(self) -> Optional[list[Any]]:
        if self.scheduleDays is None:
            return None
        return [
            day if isinstance(day, str) else day.model_dump(exclude_none=True)
            for day in self.scheduleDays
        ]


class GeneratedJobResponse(BaseModel):
    id: int
    title: str
    scheduledFor: Optional[datetime]
    scheduledEnd: Optional[datetime]
    assignedTo: Optional[int]
    employeePay: Optional[Decimal]
    status: str

    class Config:
        from_attributes = True


class GenerateJobsResponse(BaseModel):
    message: str
    created: int
    jobs: list[GeneratedJobResponse] = []
    warnings: list[str] = []
