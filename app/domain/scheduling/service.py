"""Scheduling service - Business logic for generating recurring jobs from contracts"""

import logging
from datetime import date
from typing import Any, Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import DEFAULT_CURRENCY
from ...models import Contract, Customer
from .errors import ScheduleValidationError
from .existing_index import ExistingInstanceIndex
from .expander import GenerationRequest, RecurringContract, ScheduleExpander
from .horizon import compute_window
from .repository import ContractJobRepository
from .schemas import GenerateJobsRequest

logger = logging.getLogger(__name__)

NO_NEW_JOBS_MESSAGE = "No new jobs to create. Jobs may already exist for this period."


def parse_employee_ids(raw: Any) -> list[int]:
    """Contract employee_ids is free-form JSON; keep entries that are valid integer ids"""
    if not isinstance(raw, list):
        return []

    ids = []
    for value in raw:
        if isinstance(value, bool):
            continue
        try:
            ids.append(int(str(value).strip()))
        except ValueError:
            logger.warning(f"Ignoring invalid employee id in contract staff pool: {value!r}")
    return ids


def build_location(customer: Optional[Customer]) -> str:
    if not customer:
        return ""
    return ", ".join(part for part in (customer.address, customer.city, customer.postcode) if part)


def build_contract_snapshot(
    contract: Contract, customer: Optional[Customer], staff_pool: list[int]
) -> RecurringContract:
    return RecurringContract(
        id=contract.id,
        company_id=contract.company_id,
        customer_id=contract.customer_id,
        title=contract.title,
        description=contract.description,
        contract_number=contract.contract_number,
        frequency=contract.frequency,
        start_date=contract.start_date,
        end_date=contract.end_date,
        hourly_rate=contract.hourly_rate,
        schedule_days=list(contract.schedule_days or []),
        staff_pool=staff_pool,
        currency=contract.currency or DEFAULT_CURRENCY,
        location=build_location(customer),
        city=customer.city if customer else None,
        postcode=customer.postcode if customer else None,
    )


class JobGenerationService:
    """Service layer for turning recurring contracts into scheduled jobs"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ContractJobRepository()
        self.expander = ScheduleExpander()

    def generate_jobs(
        self,
        company_id: int,
        contract_id: int,
        data: GenerateJobsRequest,
        today: Optional[date] = None,
    ) -> dict:
        """Generate and persist jobs for the next weeksAhead weeks of a contract"""
        today = today or date.today()

        # Row lock serialises concurrent runs for the same contract until commit
        contract = self.repo.get_contract(self.db, contract_id, company_id, for_update=True)
        if not contract:
            raise HTTPException(status_code=404, detail="Contract not found")

        if contract.status != "active":
            raise HTTPException(status_code=400, detail="Contract must be active to generate jobs")

        if data.assignedTo is not None and not self.repo.employee_exists(
            self.db, data.assignedTo, company_id
        ):
            raise HTTPException(status_code=404, detail="Assigned employee not found")

        customer = self.repo.get_customer(self.db, contract.customer_id)
        staff_pool = self.repo.get_company_employee_ids(
            self.db, company_id, parse_employee_ids(contract.employee_ids)
        )
        snapshot = build_contract_snapshot(contract, customer, staff_pool)

        request = GenerationRequest(
            weeks_ahead=data.weeksAhead,
            assigned_to=data.assignedTo,
            schedule_days=data.schedule_days_payload(),
            employee_pay=data.employeePay,
            default_start_time=data.defaultStartTime,
            default_duration_minutes=data.defaultDurationMinutes,
            as_of=today,
        )

        try:
            window = compute_window(today, data.weeksAhead, contract.start_date, contract.end_date)
            if window is not None:
                existing = ExistingInstanceIndex(
                    self.repo.get_existing_job_datetimes(
                        self.db, contract.id, contract.customer_id, window
                    ),
                    window=window,
                )
            else:
                existing = ExistingInstanceIndex.empty()
            result = self.expander.expand(snapshot, request, existing)
        except ScheduleValidationError as e:
            logger.warning(f"⚠️ Cannot generate jobs for contract {contract.id}: {e}")
            raise HTTPException(status_code=400, detail=str(e))

        warnings = [warning.message for warning in result.warnings]
        for message in warnings:
            logger.warning(f"⚠️ Contract {contract.id}: {message}")

        if result.nothing_to_generate:
            logger.info(f"ℹ️ No new jobs to create for contract {contract.id}")
            return {"message": NO_NEW_JOBS_MESSAGE, "created": 0, "jobs": [], "warnings": warnings}

        try:
            jobs = self.repo.create_jobs(self.db, result.drafts)
            self.repo.touch_contract(self.db, contract, today)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"❌ Duplicate job date while generating for contract {contract.id}: {e}")
            raise HTTPException(
                status_code=409,
                detail="Jobs were generated for this contract concurrently. Please retry.",
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to save generated jobs for contract {contract.id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to generate jobs")

        logger.info(f"✅ Created {len(jobs)} jobs for contract {contract.id}")

        return {
            "message": f"Successfully created {len(jobs)} jobs",
            "created": len(jobs),
            "jobs": [
                {
                    "id": job.id,
                    "title": job.title,
                    "scheduledFor": job.scheduled_for,
                    "scheduledEnd": job.scheduled_end,
                    "assignedTo": job.assigned_to,
                    "employeePay": job.employee_pay,
                    "status": job.status,
                }
                for job in jobs
            ],
            "warnings": warnings,
        }
