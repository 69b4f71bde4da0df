"""Reimbursement request model."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payslip_engine.models.base import ActorStampMixin, Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from payslip_engine.models.attendance import AttendancePeriod
    from payslip_engine.models.employee import Employee


class ReimbursementStatus(str, Enum):
    """Reimbursement request status values."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    PAID = "paid"


class ReimbursementRequest(Base, IdMixin, TimestampMixin, ActorStampMixin):
    """Expense an employee asks to have paid with their payslip."""

    __tablename__ = "reimbursement_requests"

    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employees.id", ondelete="CASCADE"), nullable=False
    )
    # Null until a payroll run claims the request
    attendance_period_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("attendance_periods.id"), nullable=True
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=ReimbursementStatus.PENDING.value
    )

    __table_args__ = (
        CheckConstraint("amount > 0", name="reimbursement_amount_positive"),
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'paid')",
            name="reimbursement_status_check",
        ),
    )

    employee: Mapped[Employee] = relationship()
    attendance_period: Mapped[AttendancePeriod | None] = relationship()

    def is_eligible_for(self, period_id: UUID) -> bool:
        """Approved and not yet bound to a different period."""
        if self.status != ReimbursementStatus.APPROVED.value:
            return False
        return self.attendance_period_id is None or self.attendance_period_id == period_id
