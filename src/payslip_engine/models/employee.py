"""Employee model."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import CheckConstraint, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from payslip_engine.models.base import ActorStampMixin, Base, IdMixin, TimestampMixin


class Employee(Base, IdMixin, TimestampMixin, ActorStampMixin):
    """Employee record with monthly base salary."""

    __tablename__ = "employees"

    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    salary: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    __table_args__ = (CheckConstraint("salary >= 0", name="employee_salary_non_negative"),)
