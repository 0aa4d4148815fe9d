"""Pytest fixtures for workforce engine tests."""

from __future__ import annotations

from datetime import date, datetime
from typing import AsyncGenerator
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from workforce_engine.config import Settings
from workforce_engine.models import (
    Base,
    Company,
    Employee,
    PayrollPeriod,
    ScheduledShift,
    ShiftAssignment,
    TimeEntry,
)

# In-memory SQLite shared across one engine's connections
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def test_settings() -> Settings:
    """Settings that never touch the environment."""
    return Settings(
        database_url=TEST_DATABASE_URL,
        host="127.0.0.1",
        port=8000,
        debug=False,
        log_level="INFO",
        use_company_timezone=False,
    )


@pytest.fixture
async def engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def test_company(session: AsyncSession) -> Company:
    """Create a test company."""
    company = Company(company_id=uuid4(), name="Test Company")
    session.add(company)
    await session.flush()
    return company


@pytest.fixture
async def other_company(session: AsyncSession) -> Company:
    """A second tenant whose data must never leak into the first."""
    company = Company(company_id=uuid4(), name="Other Company")
    session.add(company)
    await session.flush()
    return company


@pytest.fixture
async def test_employees(session: AsyncSession, test_company: Company) -> dict[str, Employee]:
    """Create Alice, Bob and Carol."""
    employees = {}
    for name in ("Alice Smith", "Bob Jones", "Carol White"):
        first_name, last_name = name.split()
        employee = Employee(
            employee_id=uuid4(),
            company_id=test_company.company_id,
            first_name=first_name,
            last_name=last_name,
            email=f"{first_name.lower()}@test.com",
        )
        session.add(employee)
        employees[first_name.lower()] = employee

    await session.flush()
    return employees


@pytest.fixture
async def test_shifts(
    session: AsyncSession,
    test_company: Company,
    test_employees: dict[str, Employee],
) -> dict[str, ScheduledShift]:
    """A week of shifts with a mix of coverage outcomes.

    - morning (Jan 6): Alice + Bob assigned, both clocked        -> fully covered
    - evening (Jan 6): Alice + Bob + Carol assigned, Alice only  -> partial 33%
    - night (Jan 7): Bob + Carol assigned, nobody clocked        -> uncovered
    - deleted (Jan 7): soft-deleted, never reported
    - late (Jan 20): outside the analyzed range
    """
    company_id = test_company.company_id
    alice = test_employees["alice"].employee_id
    bob = test_employees["bob"].employee_id
    carol = test_employees["carol"].employee_id

    shifts = {
        "morning": ScheduledShift(
            shift_id=uuid4(),
            company_id=company_id,
            title="Morning",
            shift_code="AM",
            shift_date=date(2025, 1, 6),
        ),
        "evening": ScheduledShift(
            shift_id=uuid4(),
            company_id=company_id,
            title="Evening",
            shift_date=date(2025, 1, 6),
        ),
        "night": ScheduledShift(
            shift_id=uuid4(),
            company_id=company_id,
            title="Night",
            shift_date=date(2025, 1, 7),
        ),
        "deleted": ScheduledShift(
            shift_id=uuid4(),
            company_id=company_id,
            title="Cancelled",
            shift_date=date(2025, 1, 7),
            deleted_at=datetime(2025, 1, 2, 12, 0),
        ),
        "late": ScheduledShift(
            shift_id=uuid4(),
            company_id=company_id,
            title="Later",
            shift_date=date(2025, 1, 20),
        ),
    }
    session.add_all(shifts.values())
    await session.flush()

    def assign(shift: str, employee_id, status: str = "accepted") -> ShiftAssignment:
        return ShiftAssignment(
            company_id=company_id,
            shift_id=shifts[shift].shift_id,
            employee_id=employee_id,
            status=status,
        )

    def clock(shift: str, employee_id, start: datetime, end: datetime | None,
              status: str = "approved", break_minutes: int = 0) -> TimeEntry:
        return TimeEntry(
            company_id=company_id,
            shift_id=shifts[shift].shift_id,
            employee_id=employee_id,
            clock_in=start,
            clock_out=end,
            break_minutes=break_minutes,
            status=status,
        )

    session.add_all([
        assign("morning", alice),
        assign("morning", bob, status="pending"),
        assign("evening", alice),
        assign("evening", bob),
        assign("evening", carol),
        assign("night", bob),
        assign("night", carol),
        assign("night", alice, status="rejected"),
        assign("deleted", alice),
        assign("late", alice),
    ])
    session.add_all([
        clock("morning", alice, datetime(2025, 1, 6, 9, 0), datetime(2025, 1, 6, 17, 30),
              break_minutes=30),
        clock("morning", bob, datetime(2025, 1, 6, 9, 5), None),
        clock("evening", alice, datetime(2025, 1, 6, 18, 0), datetime(2025, 1, 6, 22, 0)),
        clock("night", carol, datetime(2025, 1, 7, 22, 0), datetime(2025, 1, 8, 6, 0),
              status="rejected"),
        clock("late", alice, datetime(2025, 1, 20, 9, 0), datetime(2025, 1, 20, 17, 0)),
    ])
    await session.flush()
    return shifts


@pytest.fixture
async def test_periods(session: AsyncSession, test_company: Company) -> dict[str, PayrollPeriod]:
    """Payroll periods ending Jan 7, Jan 14 and Jan 21 2025."""
    periods = {
        "first": PayrollPeriod(
            company_id=test_company.company_id,
            start_date=date(2025, 1, 1),
            end_date=date(2025, 1, 7),
            status="open",
        ),
        "second": PayrollPeriod(
            company_id=test_company.company_id,
            start_date=date(2025, 1, 8),
            end_date=date(2025, 1, 14),
            status="closed",
        ),
        "third": PayrollPeriod(
            company_id=test_company.company_id,
            start_date=date(2025, 1, 15),
            end_date=date(2025, 1, 21),
            status="open",
        ),
    }
    session.add_all(periods.values())
    await session.flush()
    return periods
