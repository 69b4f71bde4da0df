"""Payslip model."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, Integer, Numeric, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payslip_engine.models.base import ActorStampMixin, Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from payslip_engine.models.attendance import AttendancePeriod
    from payslip_engine.models.employee import Employee


class Payslip(Base, IdMixin, TimestampMixin, ActorStampMixin):
    """Pay figures for one employee in one processed period. Immutable."""

    __tablename__ = "payslips"

    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employees.id", ondelete="RESTRICT"), nullable=False
    )
    attendance_period_id: Mapped[UUID] = mapped_column(
        ForeignKey("attendance_periods.id", ondelete="RESTRICT"), nullable=False
    )
    base_salary: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    prorated_salary: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    attendance_count: Mapped[int] = mapped_column(Integer, nullable=False)
    total_working_days: Mapped[int] = mapped_column(Integer, nullable=False)
    overtime_hours: Mapped[Decimal] = mapped_column(
        Numeric(6, 2), nullable=False, default=Decimal("0")
    )
    overtime_pay: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0")
    )
    reimbursements_total: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0")
    )
    take_home_pay: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    __table_args__ = (
        UniqueConstraint("employee_id", "attendance_period_id", name="uix_employee_period"),
    )

    employee: Mapped[Employee] = relationship()
    attendance_period: Mapped[AttendancePeriod] = relationship()
