"""Per-employee payslip aggregation.

Pure transform over records already fetched by the payroll service:

1) attendance_count = distinct attended dates inside the period
2) prorated_salary = salary / W * attendance_count
3) overtime_pay = sum(salary / W / hours_per_day * hours * rate_multiplier)
4) reimbursements_total = sum of eligible requests, which are claimed as paid
5) take_home_pay = prorated_salary + overtime_pay + reimbursements_total

All arithmetic is Decimal. Money is rounded to the currency quantum only when
the payslip draft is built, and take-home pay is the sum of the rounded parts.
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Protocol
from uuid import UUID

from payslip_engine.calculators.types import EmployeePayResult, PayslipDraft, PeriodWindow
from payslip_engine.models import ReimbursementRequest, ReimbursementStatus

ZERO = Decimal("0")


class SalariedEmployee(Protocol):
    id: UUID
    salary: Decimal


class OvertimeEntry(Protocol):
    date: date
    hours: int
    rate_multiplier: Decimal


def _to_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() first so floats like 2.1 do not carry binary noise
    return Decimal(str(value))


class EmployeeAggregator:
    """Computes one employee's payslip for a period."""

    def __init__(
        self,
        hours_per_day: int = 8,
        quantum: Decimal = Decimal("0.01"),
        default_overtime_multiplier: Decimal = Decimal("2.0"),
    ):
        self.hours_per_day = Decimal(hours_per_day)
        self.quantum = quantum
        self.default_overtime_multiplier = default_overtime_multiplier

    def aggregate(
        self,
        employee: SalariedEmployee,
        period: PeriodWindow,
        attendance_dates: Iterable[date],
        overtime_records: Iterable[OvertimeEntry],
        reimbursements: Iterable[ReimbursementRequest],
    ) -> EmployeePayResult:
        salary = _to_decimal(employee.salary)
        working_days = period.total_working_days

        attendance_count = self.count_attendance(attendance_dates, period)
        prorated_salary = self.prorate_salary(salary, working_days, attendance_count)
        overtime_hours, overtime_pay = self.overtime(
            salary, period, overtime_records
        )
        claimed, reimbursements_total = self.claim_reimbursements(
            reimbursements, period.period_id
        )

        prorated_salary = self.round_money(prorated_salary)
        overtime_pay = self.round_money(overtime_pay)
        reimbursements_total = self.round_money(reimbursements_total)

        payslip = PayslipDraft(
            employee_id=employee.id,
            attendance_period_id=period.period_id,
            base_salary=self.round_money(salary),
            prorated_salary=prorated_salary,
            attendance_count=attendance_count,
            total_working_days=working_days,
            overtime_hours=overtime_hours,
            overtime_pay=overtime_pay,
            reimbursements_total=reimbursements_total,
            take_home_pay=prorated_salary + overtime_pay + reimbursements_total,
        )
        return EmployeePayResult(payslip=payslip, claimed_reimbursements=claimed)

    @staticmethod
    def count_attendance(attendance_dates: Iterable[date], period: PeriodWindow) -> int:
        """Count distinct attended dates inside the period."""
        return len({d for d in attendance_dates if period.contains(d)})

    @staticmethod
    def prorate_salary(salary: Decimal, working_days: int, attendance_count: int) -> Decimal:
        if working_days == 0:
            return ZERO
        return salary / Decimal(working_days) * Decimal(attendance_count)

    def overtime(
        self,
        salary: Decimal,
        period: PeriodWindow,
        overtime_records: Iterable[OvertimeEntry],
    ) -> tuple[Decimal, Decimal]:
        """Return (overtime_hours, unrounded overtime_pay)."""
        if period.total_working_days == 0:
            return ZERO, ZERO

        daily_rate = salary / Decimal(period.total_working_days)
        hourly_rate = daily_rate / self.hours_per_day

        hours_total = ZERO
        pay_total = ZERO
        for record in overtime_records:
            if not period.contains(record.date):
                continue
            hours = Decimal(record.hours)
            multiplier = (
                self.default_overtime_multiplier
                if record.rate_multiplier is None
                else _to_decimal(record.rate_multiplier)
            )
            pay_total += hourly_rate * hours * multiplier
            hours_total += hours

        return hours_total, pay_total

    @staticmethod
    def claim_reimbursements(
        reimbursements: Iterable[ReimbursementRequest],
        period_id: UUID,
    ) -> tuple[list[ReimbursementRequest], Decimal]:
        """Mark eligible requests paid for this period and total them.

        Ineligible requests are left untouched.
        """
        claimed: list[ReimbursementRequest] = []
        total = ZERO
        for request in reimbursements:
            if not request.is_eligible_for(period_id):
                continue
            total += _to_decimal(request.amount)
            request.attendance_period_id = period_id
            request.status = ReimbursementStatus.PAID.value
            claimed.append(request)
        return claimed, total

    def round_money(self, amount: Decimal) -> Decimal:
        return amount.quantize(self.quantum, rounding=ROUND_HALF_UP)
