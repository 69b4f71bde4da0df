"""Pytest fixtures for payslip engine tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from payslip_engine.database import create_tables, get_engine, make_session_factory
from payslip_engine.models import (
    AttendancePeriod,
    AttendanceRecord,
    Employee,
    OvertimeRecord,
    ReimbursementRequest,
    ReimbursementStatus,
)
from payslip_engine.services.audit_service import ActorContext

# March 2026: Mon 2nd .. Fri 27th is 20 working days
MARCH_START = date(2026, 3, 2)
MARCH_END = date(2026, 3, 27)
# April 2026: Mon 6th .. Thu 30th is 19 working days
APRIL_START = date(2026, 4, 6)
APRIL_END = date(2026, 4, 30)
# Sat 7th .. Sun 8th March has no working days
WEEKEND_START = date(2026, 3, 7)
WEEKEND_END = date(2026, 3, 8)

ADMIN_ID = UUID("00000000-0000-0000-0000-00000000a001")
PROCESSED_AT = datetime(2026, 3, 31, 17, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def engine(tmp_path):
    """File-backed SQLite so separate sessions see each other's commits."""
    engine = get_engine(f"sqlite+aiosqlite:///{tmp_path / 'payslip_test.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return make_session_factory(engine)


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def admin() -> ActorContext:
    return ActorContext(
        actor_id=ADMIN_ID,
        actor_type="admin",
        ip_address="127.0.0.1",
        correlation_id="test-request",
    )


def fixed_clock(year: int = 2026, month: int = 3, day: int = 4, hour: int = 9):
    """Clock pinned to a moment, for services that take a clock."""
    moment = datetime(year, month, day, hour, 0, tzinfo=timezone.utc)
    return lambda: moment


class PayrollTestData:
    """Seeds rows directly through the ORM and commits them."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def employee(self, username: str, salary: str = "80000") -> Employee:
        employee = Employee(username=username, salary=Decimal(salary))
        self.session.add(employee)
        await self.session.commit()
        return employee

    async def period(
        self,
        start: date = MARCH_START,
        end: date = MARCH_END,
        processed_at: datetime | None = None,
    ) -> AttendancePeriod:
        period = AttendancePeriod(start_date=start, end_date=end, processed_at=processed_at)
        self.session.add(period)
        await self.session.commit()
        return period

    async def attendance(
        self, employee: Employee, period: AttendancePeriod, days: list[date]
    ) -> None:
        for day in days:
            self.session.add(
                AttendanceRecord(
                    employee_id=employee.id,
                    attendance_period_id=period.id,
                    date=day,
                    check_in_time=datetime(day.year, day.month, day.day, 9, tzinfo=timezone.utc),
                )
            )
        await self.session.commit()

    async def overtime(
        self,
        employee: Employee,
        day: date,
        hours: int,
        rate_multiplier: str = "2.0",
    ) -> OvertimeRecord:
        record = OvertimeRecord(
            employee_id=employee.id,
            date=day,
            hours=hours,
            rate_multiplier=Decimal(rate_multiplier),
            submitted_at=datetime(day.year, day.month, day.day, 18, tzinfo=timezone.utc),
        )
        self.session.add(record)
        await self.session.commit()
        return record

    async def reimbursement(
        self,
        employee: Employee,
        amount: str,
        status: ReimbursementStatus = ReimbursementStatus.APPROVED,
        period: AttendancePeriod | None = None,
        description: str = "Taxi to client site",
    ) -> ReimbursementRequest:
        request = ReimbursementRequest(
            employee_id=employee.id,
            attendance_period_id=period.id if period is not None else None,
            amount=Decimal(amount),
            description=description,
            status=status.value,
        )
        self.session.add(request)
        await self.session.commit()
        return request


@pytest.fixture
def data(session) -> PayrollTestData:
    return PayrollTestData(session)


def weekdays_between(start: date, end: date) -> list[date]:
    """Every Monday-Friday date in [start, end]."""
    days = []
    current = start
    while current <= end:
        if current.weekday() < 5:
            days.append(current)
        current = date.fromordinal(current.toordinal() + 1)
    return days
