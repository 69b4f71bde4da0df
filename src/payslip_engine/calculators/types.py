"""Type definitions for the payslip calculation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Any
from uuid import UUID

if TYPE_CHECKING:
    from payslip_engine.models import ReimbursementRequest


@dataclass(frozen=True)
class PeriodWindow:
    """The period being paid and its count of working days (W)."""

    period_id: UUID
    start_date: date
    end_date: date
    total_working_days: int

    def contains(self, on: date) -> bool:
        return self.start_date <= on <= self.end_date


@dataclass(frozen=True)
class PayslipDraft:
    """Payslip figures before persistence. Money values are already rounded."""

    employee_id: UUID
    attendance_period_id: UUID
    base_salary: Decimal
    prorated_salary: Decimal
    attendance_count: int
    total_working_days: int
    overtime_hours: Decimal
    overtime_pay: Decimal
    reimbursements_total: Decimal
    take_home_pay: Decimal

    def to_row(self) -> dict[str, Any]:
        """Column values for the payslips table."""
        return {
            "employee_id": self.employee_id,
            "attendance_period_id": self.attendance_period_id,
            "base_salary": self.base_salary,
            "prorated_salary": self.prorated_salary,
            "attendance_count": self.attendance_count,
            "total_working_days": self.total_working_days,
            "overtime_hours": self.overtime_hours,
            "overtime_pay": self.overtime_pay,
            "reimbursements_total": self.reimbursements_total,
            "take_home_pay": self.take_home_pay,
        }


@dataclass
class EmployeePayResult:
    """Result of aggregating one employee's period."""

    payslip: PayslipDraft
    claimed_reimbursements: list[ReimbursementRequest] = field(default_factory=list)
