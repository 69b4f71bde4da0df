"""Attendance period, attendance and overtime models."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payslip_engine.models.base import ActorStampMixin, Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from payslip_engine.models.employee import Employee


class AttendancePeriod(Base, IdMixin, TimestampMixin, ActorStampMixin):
    """Date range payroll is computed over.

    ``processed_at`` is null until payroll has run for the period and is set
    exactly once.
    """

    __tablename__ = "attendance_periods"

    start_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    end_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    processed_at: Mapped[dt.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="attendance_period_dates_check"),
    )


class AttendanceRecord(Base, IdMixin, TimestampMixin, ActorStampMixin):
    """One check-in per employee per calendar day."""

    __tablename__ = "attendance_records"

    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employees.id", ondelete="CASCADE"), nullable=False
    )
    attendance_period_id: Mapped[UUID] = mapped_column(
        ForeignKey("attendance_periods.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    check_in_time: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("employee_id", "date", name="uix_employee_date"),
    )

    employee: Mapped[Employee] = relationship()
    attendance_period: Mapped[AttendancePeriod] = relationship()


class OvertimeRecord(Base, IdMixin, TimestampMixin, ActorStampMixin):
    """Overtime hours claimed for one day."""

    __tablename__ = "overtime_records"

    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employees.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    hours: Mapped[int] = mapped_column(Integer, nullable=False)
    rate_multiplier: Mapped[Decimal] = mapped_column(
        Numeric(4, 2), nullable=False, default=Decimal("2.0")
    )
    submitted_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint("hours BETWEEN 1 AND 3", name="overtime_hours_range"),
        CheckConstraint("rate_multiplier > 0", name="overtime_multiplier_positive"),
    )

    employee: Mapped[Employee] = relationship()
