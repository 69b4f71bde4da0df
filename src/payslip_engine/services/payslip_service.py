"""Read side: individual payslips and per-period summaries."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from payslip_engine.exceptions import PayslipNotFoundError
from payslip_engine.models import (
    AttendancePeriod,
    Employee,
    Payslip,
    ReimbursementRequest,
    ReimbursementStatus,
)


@dataclass(frozen=True)
class PayslipSummaryLine:
    employee_id: UUID
    username: str
    take_home_pay: Decimal


@dataclass
class PayslipSummary:
    """Take-home pay per employee for a period, with the grand total."""

    period_id: UUID
    lines: list[PayslipSummaryLine] = field(default_factory=list)
    total_take_home_pay: Decimal = Decimal("0")


@dataclass(frozen=True)
class PayslipDetail:
    """A payslip with its period and the reimbursements it paid out."""

    payslip: Payslip
    period: AttendancePeriod
    reimbursements: list[ReimbursementRequest]


class PayslipQueryService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_payslip(self, employee_id: UUID, period_id: UUID) -> Payslip:
        result = await self.session.execute(
            select(Payslip).where(
                Payslip.employee_id == employee_id,
                Payslip.attendance_period_id == period_id,
            )
        )
        payslip = result.scalar_one_or_none()
        if payslip is None:
            raise PayslipNotFoundError(employee_id, period_id)
        return payslip

    async def get_payslip_detail(self, employee_id: UUID, period_id: UUID) -> PayslipDetail:
        payslip = await self.get_payslip(employee_id, period_id)
        period = await self.session.get(AttendancePeriod, period_id)
        result = await self.session.execute(
            select(ReimbursementRequest)
            .where(
                ReimbursementRequest.employee_id == employee_id,
                ReimbursementRequest.attendance_period_id == period_id,
                ReimbursementRequest.status == ReimbursementStatus.PAID.value,
            )
            .order_by(ReimbursementRequest.created_at, ReimbursementRequest.id)
        )
        return PayslipDetail(
            payslip=payslip,
            period=period,
            reimbursements=list(result.scalars().all()),
        )

    async def summarize_period(self, period_id: UUID) -> PayslipSummary:
        """Summarize all payslips of a period. Empty if payroll has not run."""
        result = await self.session.execute(
            select(Payslip.employee_id, Employee.username, Payslip.take_home_pay)
            .join(Employee, Payslip.employee_id == Employee.id)
            .where(Payslip.attendance_period_id == period_id)
            .order_by(Employee.username)
        )

        summary = PayslipSummary(period_id=period_id)
        for employee_id, username, take_home_pay in result.all():
            summary.lines.append(
                PayslipSummaryLine(
                    employee_id=employee_id,
                    username=username,
                    take_home_pay=take_home_pay,
                )
            )
            summary.total_take_home_pay += take_home_pay
        return summary
