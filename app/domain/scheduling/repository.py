"""Scheduling repository - Database operations for recurring job generation"""

from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from ...models import Contract, Customer, Employee, Job, JobTask
from .expander import GeneratedInstanceDraft
from .horizon import GenerationWindow


class ContractJobRepository:
    """Repository for contract and job database operations"""

    @staticmethod
    def get_contract(
        db: Session, contract_id: int, company_id: int, for_update: bool = False
    ) -> Optional[Contract]:
        """Get a contract scoped to its company. for_update locks the row until commit"""
        query = db.query(Contract).filter(
            Contract.id == contract_id, Contract.company_id == company_id
        )
        if for_update:
            query = query.with_for_update()
        return query.first()

    @staticmethod
    def get_customer(db: Session, customer_id: int) -> Optional[Customer]:
        """Get a customer by ID"""
        return db.query(Customer).filter(Customer.id == customer_id).first()

    @staticmethod
    def employee_exists(db: Session, employee_id: int, company_id: int) -> bool:
        """Check an employee belongs to the company"""
        return (
            db.query(Employee.id)
            .filter(Employee.id == employee_id, Employee.company_id == company_id)
            .first()
            is not None
        )

    @staticmethod
    def get_company_employee_ids(
        db: Session, company_id: int, employee_ids: Iterable[int]
    ) -> list[int]:
        """
        Filter a contract's staff pool down to active employees of the company.
        Keeps the order of employee_ids, which is the rotation order.
        """
        requested = list(employee_ids)
        if not requested:
            return []

        rows = (
            db.query(Employee.id)
            .filter(
                Employee.company_id == company_id,
                Employee.id.in_(requested),
                Employee.is_active.is_(True),
            )
            .all()
        )
        known = {row[0] for row in rows}
        return [employee_id for employee_id in requested if employee_id in known]

    @staticmethod
    def get_existing_job_datetimes(
        db: Session, contract_id: int, customer_id: int, window: GenerationWindow
    ) -> list[datetime]:
        """Scheduled start of every job the contract already has inside the window"""
        window_start = datetime.combine(window.start, time.min)
        window_end = datetime.combine(window.end + timedelta(days=1), time.min)

        rows = (
            db.query(Job.scheduled_for)
            .filter(
                Job.contract_id == contract_id,
                Job.customer_id == customer_id,
                Job.scheduled_for >= window_start,
                Job.scheduled_for < window_end,
            )
            .all()
        )
        return [row[0] for row in rows]

    @staticmethod
    def create_jobs(db: Session, drafts: list[GeneratedInstanceDraft]) -> list[Job]:
        """
        Insert jobs and their task rows.
        Flushes but does not commit - the caller owns the transaction.
        """
        jobs = []
        for draft in drafts:
            job = Job(
                company_id=draft.company_id,
                customer_id=draft.customer_id,
                contract_id=draft.contract_id,
                title=draft.title,
                description=draft.description,
                location=draft.location,
                city=draft.city,
                postcode=draft.postcode,
                assigned_to=draft.assigned_to,
                scheduled_for=draft.scheduled_start,
                scheduled_end=draft.scheduled_end,
                scheduled_on=draft.scheduled_on,
                duration_minutes=draft.duration_minutes,
                recurrence=draft.recurrence,
                status=draft.status,
                estimated_price=None,  # Contract is billed separately
                employee_pay=draft.employee_pay,
                currency=draft.currency,
            )
            job.tasks = [JobTask(title=task.title, order=task.position) for task in draft.tasks]
            db.add(job)
            jobs.append(job)

        db.flush()
        return jobs

    @staticmethod
    def touch_contract(db: Session, contract: Contract, generated_on: date) -> Contract:
        """Record that jobs were generated for the contract"""
        contract.last_generated_date = generated_on
        contract.updated_at = datetime.utcnow()
        db.flush()
        return contract
