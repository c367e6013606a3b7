"""Shared fixtures: an in-memory database seeded with one company and its contract."""

import os

# Must be set before app.database creates its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

from datetime import date, datetime  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.database import Base  # noqa: E402
from app.models import Company, Contract, Customer, Employee  # noqa: E402

# 2024-01-15 is a Monday
MONDAY = date(2024, 1, 15)


@pytest.fixture
def monday():
    return MONDAY


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def company(db):
    company = Company(name="Sparkle Cleaning Ltd")
    db.add(company)
    db.commit()
    return company


@pytest.fixture
def other_company(db):
    company = Company(name="Rival Cleaners")
    db.add(company)
    db.commit()
    return company


@pytest.fixture
def customer(db, company):
    customer = Customer(
        company_id=company.id,
        name="Acme Offices",
        address="12 High Street",
        city="Leeds",
        postcode="LS1 1AA",
    )
    db.add(customer)
    db.commit()
    return customer


@pytest.fixture
def employees(db, company):
    staff = [
        Employee(company_id=company.id, full_name="Alice"),
        Employee(company_id=company.id, full_name="Bob"),
        Employee(company_id=company.id, full_name="Carol", is_active=False),
    ]
    db.add_all(staff)
    db.commit()
    return staff


@pytest.fixture
def make_contract(db, company, customer):
    """Factory for contracts; defaults to the weekly Monday clean at £15/hour."""

    def _make(**overrides):
        values = {
            "company_id": company.id,
            "customer_id": customer.id,
            "contract_number": f"C-{len(db.query(Contract).all()) + 1:03d}",
            "title": "Weekly office clean",
            "frequency": "weekly",
            "start_date": datetime.combine(MONDAY, datetime.min.time()),
            "end_date": None,
            "schedule_days": [
                {
                    "day": "monday",
                    "startTime": "09:00",
                    "durationMinutes": 120,
                    "tasks": ["Vacuum floors", "  Empty bins  ", ""],
                }
            ],
            "hourly_rate": Decimal("15.00"),
            "amount": Decimal("400.00"),
            "currency": "GBP",
            "status": "active",
            "employee_ids": [],
        }
        values.update(overrides)
        contract = Contract(**values)
        db.add(contract)
        db.commit()
        return contract

    return _make
