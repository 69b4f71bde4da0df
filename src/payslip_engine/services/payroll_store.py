"""Store operations consumed by the payroll run."""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from payslip_engine.calculators.types import PayslipDraft
from payslip_engine.models import (
    AttendancePeriod,
    AttendanceRecord,
    Employee,
    OvertimeRecord,
    Payslip,
    ReimbursementRequest,
    ReimbursementStatus,
)
from payslip_engine.services.audit_service import ActorContext


class PayrollStore:
    """SQLAlchemy-backed reads and writes for one payroll run.

    Every method works inside the caller's session and never commits; the
    payroll service owns the transaction boundary.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_period_for_update(self, period_id: UUID) -> AttendancePeriod | None:
        """Load a period holding a row lock until the transaction ends."""
        result = await self.session.execute(
            select(AttendancePeriod)
            .where(AttendancePeriod.id == period_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def mark_period_processed(
        self,
        period_id: UUID,
        processed_at: datetime,
        actor: ActorContext,
    ) -> bool:
        """Set processed_at only if it is still null.

        Returns False if another run got there first.
        """
        result = await self.session.execute(
            update(AttendancePeriod)
            .where(
                AttendancePeriod.id == period_id,
                AttendancePeriod.processed_at.is_(None),
            )
            .values(
                processed_at=processed_at,
                updated_by=actor.actor_id,
                ip_address=actor.ip_address,
            )
            .execution_options(synchronize_session=False)
        )
        return (result.rowcount or 0) == 1

    async def list_employees(self) -> list[Employee]:
        result = await self.session.execute(select(Employee).order_by(Employee.id))
        return list(result.scalars().all())

    async def attendance_dates(
        self, employee_id: UUID, start: date, end: date
    ) -> list[date]:
        result = await self.session.execute(
            select(AttendanceRecord.date).where(
                AttendanceRecord.employee_id == employee_id,
                AttendanceRecord.date >= start,
                AttendanceRecord.date <= end,
            )
        )
        return list(result.scalars().all())

    async def overtime_records(
        self, employee_id: UUID, start: date, end: date
    ) -> list[OvertimeRecord]:
        result = await self.session.execute(
            select(OvertimeRecord).where(
                OvertimeRecord.employee_id == employee_id,
                OvertimeRecord.date >= start,
                OvertimeRecord.date <= end,
            )
        )
        return list(result.scalars().all())

    async def eligible_reimbursements(
        self, employee_id: UUID, period_id: UUID
    ) -> list[ReimbursementRequest]:
        """Approved requests that are unbound or bound to this period, locked."""
        result = await self.session.execute(
            select(ReimbursementRequest)
            .where(
                ReimbursementRequest.employee_id == employee_id,
                ReimbursementRequest.status == ReimbursementStatus.APPROVED.value,
                or_(
                    ReimbursementRequest.attendance_period_id.is_(None),
                    ReimbursementRequest.attendance_period_id == period_id,
                ),
            )
            .with_for_update()
        )
        return list(result.scalars().all())

    def stamp_reimbursements(
        self, requests: Iterable[ReimbursementRequest], actor: ActorContext
    ) -> None:
        """Record who claimed the requests; the ORM flushes the changes."""
        for request in requests:
            request.updated_by = actor.actor_id
            request.ip_address = actor.ip_address

    def add_payslips(
        self, drafts: Iterable[PayslipDraft], actor: ActorContext
    ) -> list[Payslip]:
        payslips = [
            Payslip(
                **draft.to_row(),
                created_by=actor.actor_id,
                updated_by=actor.actor_id,
                ip_address=actor.ip_address,
            )
            for draft in drafts
        ]
        self.session.add_all(payslips)
        return payslips

    async def flush(self) -> None:
        await self.session.flush()
