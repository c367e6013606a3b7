"""
Scheduling Domain - Recurring job generation

Expands a recurring contract's weekly pattern (scheduleDays) into dated,
staffed jobs for a bounded number of weeks ahead.

Structure:
```
app/domain/scheduling/
├── weekdays.py         # Day names ↔ weekday numbers, next occurrence
├── horizon.py          # Generation window from today / contract dates
├── existing_index.py   # Dates that already have jobs (duplicate guard)
├── rotation.py         # Round-robin staff assignment
├── pay.py              # Staff pay from the contract hourly rate
├── tasks.py            # Task list copied onto each job
├── slots.py            # Validation of raw scheduleDays entries
├── expander.py         # Orchestrates the above into job drafts
├── schemas.py          # API request/response schemas
├── repository.py       # Database queries and job inserts
├── service.py          # Load → expand → persist
└── router.py           # POST /companies/{id}/contracts/{id}/generate-jobs
```

The expander is pure; it never touches the database. Concurrent runs for the
same contract must be serialised by the caller (the service locks the contract
row, and jobs carry a unique (contract_id, scheduled_on) constraint).
"""

from .errors import JobGenerationError, ScheduleValidationError, SkippedSlotWarning
from .existing_index import ExistingInstanceIndex
from .expander import (
    ExpansionResult,
    GeneratedInstanceDraft,
    GenerationRequest,
    RecurringContract,
    ScheduleExpander,
    expand_contract,
)
from .horizon import GenerationWindow, compute_window
from .rotation import AssignmentRotator
from .slots import ScheduleDay, parse_schedule_days
from .tasks import SeededTask, seed_tasks
from .weekdays import Weekday, next_occurrence_on_or_after, weekday_number

__all__ = [
    # Engine
    "ScheduleExpander",
    "expand_contract",
    "ExpansionResult",
    # Data model
    "RecurringContract",
    "ScheduleDay",
    "GenerationRequest",
    "GeneratedInstanceDraft",
    "SeededTask",
    # Components
    "AssignmentRotator",
    "ExistingInstanceIndex",
    "GenerationWindow",
    "Weekday",
    "compute_window",
    "next_occurrence_on_or_after",
    "parse_schedule_days",
    "seed_tasks",
    "weekday_number",
    # Errors
    "JobGenerationError",
    "ScheduleValidationError",
    "SkippedSlotWarning",
]
