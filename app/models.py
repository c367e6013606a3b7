from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    customers = relationship("Customer", back_populates="company", cascade="all, delete-orphan")
    employees = relationship("Employee", back_populates="company", cascade="all, delete-orphan")
    contracts = relationship("Contract", back_populates="company", cascade="all, delete-orphan")


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    # Service address - joined into a single job location when jobs are generated
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    postcode = Column(String(50), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    company = relationship("Company", back_populates="customers")
    contracts = relationship("Contract", back_populates="customer")
    jobs = relationship("Job", back_populates="customer")


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    company = relationship("Company", back_populates="employees")


class Contract(Base):
    """Recurring service agreement - the source pattern for generated jobs"""

    __tablename__ = "contracts"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)

    contract_number = Column(String(100), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    service_type = Column(String(100), nullable=True)
    frequency = Column(String(50), nullable=True)  # weekly, biweekly, monthly - informational
    # Eligible staff for round-robin assignment, in rotation order
    employee_ids = Column(JSON, default=list)

    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=True)  # Inclusive; null = open-ended

    # Weekly pattern: [{"day": "monday", "startTime": "09:00", "durationMinutes": 120, "tasks": [...]}]
    schedule_days = Column(JSON, default=list)
    hours_per_week = Column(Numeric(6, 2), nullable=True)
    hourly_rate = Column(Numeric(10, 2), nullable=True)  # Staff pay rate used to derive job pay

    amount = Column(Numeric(12, 2), nullable=False, default=0)
    currency = Column(String(10), default="GBP")
    last_generated_date = Column(Date, nullable=True)

    # Status workflow: draft → active → completed/cancelled
    status = Column(String(50), default="draft", nullable=False, index=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    company = relationship("Company", back_populates="contracts")
    customer = relationship("Customer", back_populates="contracts")
    jobs = relationship("Job", back_populates="contract")

    __table_args__ = (
        UniqueConstraint("company_id", "contract_number", name="contracts_contract_number_uq"),
    )


class Job(Base):
    """A single dated service visit, optionally generated from a contract"""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=True, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    location = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    postcode = Column(String(50), nullable=True)

    assigned_to = Column(Integer, ForeignKey("employees.id"), nullable=True, index=True)

    scheduled_for = Column(DateTime, nullable=True, index=True)
    scheduled_end = Column(DateTime, nullable=True)
    # Calendar date of scheduled_for - backs the one-job-per-contract-per-day constraint
    scheduled_on = Column(Date, nullable=True)
    duration_minutes = Column(Integer, default=60)
    recurrence = Column(String(50), nullable=True)

    # scheduled → in_progress → completed / cancelled
    status = Column(String(50), default="scheduled", nullable=False, index=True)

    estimated_price = Column(Numeric(10, 2), nullable=True)
    employee_pay = Column(Numeric(10, 2), nullable=True)
    currency = Column(String(10), default="GBP")

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    customer = relationship("Customer", back_populates="jobs")
    contract = relationship("Contract", back_populates="jobs")
    tasks = relationship(
        "JobTask", back_populates="job", cascade="all, delete-orphan", order_by="JobTask.order"
    )

    __table_args__ = (
        UniqueConstraint("contract_id", "scheduled_on", name="jobs_contract_date_uq"),
    )


class JobTask(Base):
    __tablename__ = "job_tasks"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(50), default="pending", nullable=False)  # pending, completed
    order = Column(Integer, default=0)
    created_at = Column(DateTime, server_default=func.now())

    job = relationship("Job", back_populates="tasks")
