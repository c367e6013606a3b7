"""
Recurring schedule expansion.

Turns a recurring contract's weekly pattern into dated job drafts for a bounded
horizon. The expansion is a pure computation over a contract snapshot, a
generation request and a snapshot of already generated dates; loading and
persisting are left to the caller (see ``service.py``).
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Hashable, Optional, Union

from ...config import (
    DEFAULT_CURRENCY,
    JOB_DEFAULT_DURATION_MINUTES,
    JOB_DEFAULT_START_TIME,
    JOB_GENERATION_DEFAULT_WEEKS_AHEAD,
)
from .errors import ScheduleValidationError, SkippedSlotWarning
from .existing_index import ExistingInstanceIndex
from .horizon import DateLike, GenerationWindow, as_calendar_date, compute_window
from .pay import resolve_pay, to_decimal
from .rotation import AssignmentRotator
from .slots import ScheduleDay, parse_schedule_days
from .tasks import SeededTask, seed_tasks
from .weekdays import next_occurrence_on_or_after

logger = logging.getLogger(__name__)

SCHEDULED = "scheduled"


@dataclass
class RecurringContract:
    """Read-only snapshot of a contract and the customer details copied onto its jobs"""

    id: int
    customer_id: int
    start_date: DateLike
    schedule_days: list[Any] = field(default_factory=list)
    company_id: Optional[int] = None
    title: str = ""
    description: Optional[str] = None
    contract_number: Optional[str] = None
    frequency: Optional[str] = None
    end_date: Optional[DateLike] = None
    hourly_rate: Optional[Decimal] = None
    staff_pool: list[Hashable] = field(default_factory=list)
    currency: Optional[str] = None
    location: str = ""
    city: Optional[str] = None
    postcode: Optional[str] = None


@dataclass
class GenerationRequest:
    weeks_ahead: int = JOB_GENERATION_DEFAULT_WEEKS_AHEAD
    assigned_to: Optional[Hashable] = None
    schedule_days: Optional[list[Any]] = None
    employee_pay: Optional[Union[Decimal, float, str]] = None
    default_start_time: Union[str, time] = JOB_DEFAULT_START_TIME
    default_duration_minutes: int = JOB_DEFAULT_DURATION_MINUTES
    as_of: Optional[DateLike] = None


@dataclass
class GeneratedInstanceDraft:
    contract_id: int
    customer_id: int
    company_id: Optional[int]
    title: str
    description: Optional[str]
    location: str
    city: Optional[str]
    postcode: Optional[str]
    scheduled_start: datetime
    scheduled_end: datetime
    duration_minutes: int
    assigned_to: Optional[Hashable]
    employee_pay: Optional[Decimal]
    tasks: list[SeededTask] = field(default_factory=list)
    status: str = SCHEDULED
    recurrence: str = "weekly"
    currency: str = DEFAULT_CURRENCY

    @property
    def scheduled_on(self) -> date:
        return self.scheduled_start.date()


@dataclass
class ExpansionResult:
    drafts: list[GeneratedInstanceDraft] = field(default_factory=list)
    warnings: list[SkippedSlotWarning] = field(default_factory=list)
    window: Optional[GenerationWindow] = None

    @property
    def nothing_to_generate(self) -> bool:
        return not self.drafts


class ScheduleExpander:
    """Expands one contract per call; no state is shared between calls"""

    def expand(
        self,
        contract: RecurringContract,
        request: Optional[GenerationRequest] = None,
        existing_index: Optional[ExistingInstanceIndex] = None,
    ) -> ExpansionResult:
        """
        Build job drafts for every scheduled weekday inside the horizon.

        At most one draft is produced per calendar date: dates already in
        ``existing_index`` are skipped, and when two schedule days land on the
        same date the first one in pattern order wins.
        When nothing is left to generate the result carries no warnings.

        Raises:
            ScheduleValidationError: If the contract has no usable schedule days,
                its end date precedes its start date, or weeks_ahead is invalid
        """
        request = request or GenerationRequest()
        existing_index = existing_index or ExistingInstanceIndex.empty()

        slots, warnings = self.validate_pattern(contract, request)

        window = compute_window(
            request.as_of or date.today(),
            request.weeks_ahead,
            contract.start_date,
            contract.end_date,
        )
        if window is None:
            logger.debug(f"Contract {contract.id}: horizon is empty, nothing to generate")
            return ExpansionResult()

        rotator = AssignmentRotator(contract.staff_pool)
        claimed: set[date] = set()
        drafts = []

        for anchor in window.week_anchors():
            candidates = sorted(
                ((next_occurrence_on_or_after(anchor, slot.weekday), slot) for slot in slots),
                key=lambda candidate: (candidate[0], candidate[1].position),
            )
            for occurrence, slot in candidates:
                if occurrence > window.end:
                    continue
                if existing_index.has_instance_on(occurrence):
                    continue
                if occurrence in claimed:
                    warnings.append(
                        SkippedSlotWarning(
                            slot.position,
                            slot.weekday.label,
                            f"{occurrence.isoformat()} already has a job from an earlier "
                            "schedule day on the same weekday",
                        )
                    )
                    continue

                drafts.append(self._build_draft(contract, request, slot, occurrence, rotator))
                claimed.add(occurrence)

        if not drafts:
            logger.debug(
                f"Contract {contract.id}: every date in {window.start} → {window.end} already has a job"
            )
            return ExpansionResult(window=window)

        logger.debug(
            f"Contract {contract.id}: {len(drafts)} drafts for {window.start} → {window.end}, "
            f"{len(warnings)} warnings"
        )
        return ExpansionResult(drafts=drafts, warnings=warnings, window=window)

    @staticmethod
    def validate_pattern(
        contract: RecurringContract, request: GenerationRequest
    ) -> tuple[list[ScheduleDay], list[SkippedSlotWarning]]:
        """Fatal checks that must pass before any expansion starts"""
        if contract.end_date is not None and as_calendar_date(contract.end_date) < as_calendar_date(
            contract.start_date
        ):
            raise ScheduleValidationError("Contract end date is before its start date")

        raw_days = (
            contract.schedule_days if request.schedule_days is None else request.schedule_days
        )
        if not raw_days:
            raise ScheduleValidationError(
                "No schedule days defined. Please specify which days to schedule jobs."
            )

        slots, warnings = parse_schedule_days(
            raw_days, request.default_start_time, request.default_duration_minutes
        )
        if not slots:
            details = "; ".join(warning.message for warning in warnings)
            raise ScheduleValidationError(f"No usable schedule days: {details}")
        return slots, warnings

    @staticmethod
    def _build_draft(
        contract: RecurringContract,
        request: GenerationRequest,
        slot: ScheduleDay,
        occurrence: date,
        rotator: AssignmentRotator,
    ) -> GeneratedInstanceDraft:
        scheduled_start = datetime.combine(occurrence, slot.start_time)
        scheduled_end = scheduled_start + timedelta(minutes=slot.duration_minutes)

        # Explicit assignment wins over rotation and leaves the rotation untouched
        if request.assigned_to is not None:
            assigned_to = request.assigned_to
        else:
            assigned_to = rotator.next()

        if contract.description:
            description = contract.description
        elif contract.contract_number:
            description = f"Contract: {contract.contract_number}"
        else:
            description = None

        return GeneratedInstanceDraft(
            contract_id=contract.id,
            customer_id=contract.customer_id,
            company_id=contract.company_id,
            title=contract.title,
            description=description,
            location=contract.location,
            city=contract.city,
            postcode=contract.postcode,
            scheduled_start=scheduled_start,
            scheduled_end=scheduled_end,
            duration_minutes=slot.duration_minutes,
            assigned_to=assigned_to,
            employee_pay=resolve_pay(
                request.employee_pay, to_decimal(contract.hourly_rate), slot.duration_minutes
            ),
            tasks=seed_tasks(slot.tasks),
            recurrence=contract.frequency or "weekly",
            currency=contract.currency or DEFAULT_CURRENCY,
        )


def expand_contract(
    contract: RecurringContract,
    request: Optional[GenerationRequest] = None,
    existing_index: Optional[ExistingInstanceIndex] = None,
) -> ExpansionResult:
    return ScheduleExpander().expand(contract, request, existing_index)
