"""Constructors for payroll inputs.

Each operation validates its input before any store call, adds the new row
and an audit entry to the session, and flushes. Callers commit.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Callable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from payslip_engine.calculators.working_days import is_working_day
from payslip_engine.config import get_settings
from payslip_engine.exceptions import DuplicateAttendanceError, IntakeValidationError
from payslip_engine.models import (
    AttendancePeriod,
    AttendanceRecord,
    OvertimeRecord,
    ReimbursementRequest,
    ReimbursementStatus,
)
from payslip_engine.services.audit_service import ActorContext, AuditRecorder

logger = logging.getLogger(__name__)

MIN_OVERTIME_HOURS = 1
MAX_OVERTIME_HOURS = 3


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IntakeService:
    """Creates attendance periods, attendance, overtime and reimbursements."""

    def __init__(
        self,
        session: AsyncSession,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.session = session
        self.audit = AuditRecorder(session)
        self.clock = clock

    async def create_attendance_period(
        self, start_date: date, end_date: date, actor: ActorContext
    ) -> AttendancePeriod:
        if end_date <= start_date:
            raise IntakeValidationError("End date must be after start date.")

        period = AttendancePeriod(
            start_date=start_date,
            end_date=end_date,
            processed_at=None,
            created_by=actor.actor_id,
            updated_by=actor.actor_id,
            ip_address=actor.ip_address,
        )
        self.session.add(period)
        await self.session.flush()

        self.audit.record(
            actor,
            "create_attendance_period",
            target_type="attendance_period",
            target_id=period.id,
            payload={"start_date": start_date, "end_date": end_date},
        )
        await self.session.flush()
        logger.info("Created attendance period %s (%s..%s)", period.id, start_date, end_date)
        return period

    async def submit_attendance(
        self, employee_id: UUID, actor: ActorContext, on: date | None = None
    ) -> AttendanceRecord:
        """Record a check-in for a weekday inside an open period."""
        now = self.clock()
        on = on or now.date()

        if not is_working_day(on):
            raise IntakeValidationError("Attendance submission not allowed on weekends.")

        period = await self._open_period_covering(on)
        if period is None:
            raise IntakeValidationError(
                "No active attendance period for this date, or payroll has been run."
            )

        existing = await self.session.execute(
            select(AttendanceRecord.id).where(
                AttendanceRecord.employee_id == employee_id,
                AttendanceRecord.date == on,
            )
        )
        if existing.first() is not None:
            raise DuplicateAttendanceError(employee_id, on)

        record = AttendanceRecord(
            employee_id=employee_id,
            attendance_period_id=period.id,
            date=on,
            check_in_time=now,
            created_by=employee_id,
            updated_by=employee_id,
            ip_address=actor.ip_address,
        )
        self.session.add(record)
        await self.session.flush()

        self.audit.record(
            actor,
            "submit_attendance",
            target_type="attendance_record",
            target_id=record.id,
            payload={"date": on, "attendance_period_id": period.id},
        )
        await self.session.flush()
        return record

    async def submit_overtime(
        self,
        employee_id: UUID,
        on: date,
        hours: int,
        actor: ActorContext,
        rate_multiplier: Decimal | None = None,
    ) -> OvertimeRecord:
        """Record overtime hours for a day the employee attended."""
        if not MIN_OVERTIME_HOURS <= hours <= MAX_OVERTIME_HOURS:
            raise IntakeValidationError(
                f"Overtime hours must be between {MIN_OVERTIME_HOURS} and {MAX_OVERTIME_HOURS}."
            )
        if on > self.clock().date():
            raise IntakeValidationError("Overtime date cannot be in the future.")

        multiplier = (
            get_settings().payroll.default_overtime_multiplier
            if rate_multiplier is None
            else rate_multiplier
        )
        if multiplier <= 0:
            raise IntakeValidationError("Overtime rate multiplier must be positive.")

        attended = await self.session.execute(
            select(AttendanceRecord.id).where(
                AttendanceRecord.employee_id == employee_id,
                AttendanceRecord.date == on,
            )
        )
        if attended.first() is None:
            raise IntakeValidationError("Cannot submit overtime for a day you did not attend.")

        if await self._open_period_covering(on) is None:
            raise IntakeValidationError(
                "No active attendance period for the overtime date, or payroll has been run."
            )

        record = OvertimeRecord(
            employee_id=employee_id,
            date=on,
            hours=hours,
            rate_multiplier=multiplier,
            submitted_at=self.clock(),
            created_by=employee_id,
            updated_by=employee_id,
            ip_address=actor.ip_address,
        )
        self.session.add(record)
        await self.session.flush()

        self.audit.record(
            actor,
            "submit_overtime",
            target_type="overtime_record",
            target_id=record.id,
            payload={"date": on, "hours": hours, "rate_multiplier": multiplier},
        )
        await self.session.flush()
        return record

    async def submit_reimbursement(
        self,
        employee_id: UUID,
        amount: Decimal | str,
        description: str,
        actor: ActorContext,
    ) -> ReimbursementRequest:
        try:
            amount = Decimal(str(amount))
        except InvalidOperation as exc:
            raise IntakeValidationError("Amount must be a number.") from exc
        if amount <= 0:
            raise IntakeValidationError("Amount must be greater than zero.")
        if not description or not description.strip():
            raise IntakeValidationError("Description is required.")

        request = ReimbursementRequest(
            employee_id=employee_id,
            amount=amount,
            attendance_period_id=None,
            description=description.strip(),
            status=ReimbursementStatus.PENDING.value,
            created_by=employee_id,
            updated_by=employee_id,
            ip_address=actor.ip_address,
        )
        self.session.add(request)
        await self.session.flush()

        self.audit.record(
            actor,
            "submit_reimbursement",
            target_type="reimbursement_request",
            target_id=request.id,
            payload={"amount": amount, "description": request.description},
        )
        await self.session.flush()
        return request

    async def review_reimbursement(
        self, request_id: UUID, approve: bool, actor: ActorContext
    ) -> ReimbursementRequest:
        """Approve or reject a pending request."""
        request = await self.session.get(ReimbursementRequest, request_id)
        if request is None:
            raise IntakeValidationError("Reimbursement request not found.")
        if request.status != ReimbursementStatus.PENDING.value:
            raise IntakeValidationError(
                f"Only pending requests can be reviewed (current: {request.status})."
            )

        old_status = request.status
        request.status = (
            ReimbursementStatus.APPROVED.value if approve else ReimbursementStatus.REJECTED.value
        )
        request.updated_by = actor.actor_id
        request.ip_address = actor.ip_address

        self.audit.record(
            actor,
            "review_reimbursement",
            target_type="reimbursement_request",
            target_id=request.id,
            payload={"from": old_status, "to": request.status},
        )
        await self.session.flush()
        return request

    async def _open_period_covering(self, on: date) -> AttendancePeriod | None:
        result = await self.session.execute(
            select(AttendancePeriod)
            .where(
                AttendancePeriod.start_date <= on,
                AttendancePeriod.end_date >= on,
                AttendancePeriod.processed_at.is_(None),
            )
            .order_by(AttendancePeriod.start_date)
            .limit(1)
        )
        return result.scalar_one_or_none()
