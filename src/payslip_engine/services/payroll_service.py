"""Payroll run service - processes one attendance period exactly once."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from payslip_engine.calculators.aggregator import EmployeeAggregator
from payslip_engine.calculators.types import EmployeePayResult, PeriodWindow
from payslip_engine.calculators.working_days import count_working_days
from payslip_engine.config import get_settings
from payslip_engine.exceptions import (
    PayrollAlreadyRunError,
    PayrollError,
    PayrollInternalError,
    PeriodNotFoundError,
    ZeroWorkingDaysError,
)
from payslip_engine.models import AttendancePeriod
from payslip_engine.services.audit_service import ActorContext, AuditRecorder
from payslip_engine.services.payroll_store import PayrollStore
from payslip_engine.services.state_machine import PayrollRunState, PayrollRunStateMachine

logger = logging.getLogger(__name__)

ACTION_RUN_PAYROLL = "run_payroll"
ACTION_ZERO_WORKING_DAYS = "run_payroll_zero_working_days"
TARGET_PERIOD = "attendance_period"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PayrollRunResult:
    """Outcome of a committed payroll run."""

    period_id: UUID
    payslips_generated: int


class PayrollService:
    """Runs payroll for an attendance period inside one transaction.

    The run:
    1. Locks the period row and rejects unknown or already processed periods
    2. Counts working days (W) once
    3. W = 0: marks the period processed, audits, commits, then raises
       ZeroWorkingDaysError (the period cannot be retried)
    4. W > 0: aggregates every employee, then marks the period processed,
       inserts payslips, claims reimbursements and audits in one commit

    Any storage failure or unexpected error rolls back the whole run and
    surfaces as PayrollInternalError.
    """

    def __init__(
        self,
        session: AsyncSession,
        aggregator: EmployeeAggregator | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.session = session
        self.store = PayrollStore(session)
        self.audit = AuditRecorder(session)
        self.clock = clock
        if aggregator is None:
            rules = get_settings().payroll
            aggregator = EmployeeAggregator(
                hours_per_day=rules.hours_per_day,
                quantum=rules.currency_quantum,
                default_overtime_multiplier=rules.default_overtime_multiplier,
            )
        self.aggregator = aggregator

    async def run_payroll(self, period_id: UUID, actor: ActorContext) -> PayrollRunResult:
        """Process payroll for a period.

        Raises:
            PeriodNotFoundError: period id is unknown
            PayrollAlreadyRunError: period already processed (or lost a race)
            ZeroWorkingDaysError: no working days; period is nonetheless processed
            PayrollInternalError: any storage failure or unexpected error

        On any error the caller's session is rolled back, which expires every
        object loaded through it. Read ids you still need before calling.
        """
        machine = PayrollRunStateMachine()
        machine.transition_to(PayrollRunState.VALIDATING)
        logger.info("Payroll run requested for period %s by %s", period_id, actor.actor_id)

        try:
            period = await self.store.get_period_for_update(period_id)
            if period is None:
                machine.transition_to(PayrollRunState.REJECTED)
                raise PeriodNotFoundError(period_id)
            if period.processed_at is not None:
                machine.transition_to(PayrollRunState.REJECTED)
                raise PayrollAlreadyRunError(period_id)

            window = PeriodWindow(
                period_id=period.id,
                start_date=period.start_date,
                end_date=period.end_date,
                total_working_days=count_working_days(period.start_date, period.end_date),
            )

            if window.total_working_days == 0:
                machine.transition_to(PayrollRunState.ZERO_WORKING_DAYS)
                await self._finalize_zero_working_days(period, actor)
                machine.transition_to(PayrollRunState.DONE)
                raise ZeroWorkingDaysError(period_id)

            machine.transition_to(PayrollRunState.COMPUTING)
            results = await self._compute(window)

            machine.transition_to(PayrollRunState.COMMITTING)
            if not await self._commit(period, results, actor):
                machine.transition_to(PayrollRunState.REJECTED)
                raise PayrollAlreadyRunError(period_id)
            machine.transition_to(PayrollRunState.DONE)

        except PayrollError as exc:
            # Releases the period lock; a no-op after the zero-working-days commit
            await self.session.rollback()
            logger.warning(
                "Payroll run for period %s ended with %s: %s", period_id, exc.code, exc
            )
            raise
        except SQLAlchemyError as exc:
            machine.transition_to(PayrollRunState.FAILED)
            logger.exception("Payroll transaction failed for period %s", period_id)
            await self.session.rollback()
            raise PayrollInternalError() from exc
        except Exception as exc:
            machine.transition_to(PayrollRunState.FAILED)
            logger.exception("Payroll run failed unexpectedly for period %s", period_id)
            await self.session.rollback()
            raise PayrollInternalError() from exc

        logger.info(
            "Payroll run completed for period %s: %d payslips", period_id, len(results)
        )
        return PayrollRunResult(period_id=period_id, payslips_generated=len(results))

    async def _finalize_zero_working_days(
        self, period: AttendancePeriod, actor: ActorContext
    ) -> None:
        # TODO: confirm with payroll owners whether this period should stay retryable
        if not await self.store.mark_period_processed(period.id, self.clock(), actor):
            raise PayrollAlreadyRunError(period.id)
        self.audit.record(
            actor,
            ACTION_ZERO_WORKING_DAYS,
            target_type=TARGET_PERIOD,
            target_id=period.id,
            payload={
                "message": "Attempted payroll run for period with zero working days."
            },
        )
        await self.session.commit()

    async def _compute(self, window: PeriodWindow) -> list[EmployeePayResult]:
        """Aggregate every employee; no writes are issued here."""
        results: list[EmployeePayResult] = []
        for employee in await self.store.list_employees():
            attendance = await self.store.attendance_dates(
                employee.id, window.start_date, window.end_date
            )
            overtime = await self.store.overtime_records(
                employee.id, window.start_date, window.end_date
            )
            reimbursements = await self.store.eligible_reimbursements(
                employee.id, window.period_id
            )
            result = self.aggregator.aggregate(
                employee, window, attendance, overtime, reimbursements
            )
            logger.debug(
                "Employee %s: attended %d/%d days, take-home %s",
                employee.id,
                result.payslip.attendance_count,
                window.total_working_days,
                result.payslip.take_home_pay,
            )
            results.append(result)
        return results

    async def _commit(
        self,
        period: AttendancePeriod,
        results: list[EmployeePayResult],
        actor: ActorContext,
    ) -> bool:
        """Persist the run atomically. Returns False if the period was taken."""
        # Claim the period before writing payslips so a losing run writes nothing
        if not await self.store.mark_period_processed(period.id, self.clock(), actor):
            return False

        self.store.add_payslips((r.payslip for r in results), actor)
        for result in results:
            self.store.stamp_reimbursements(result.claimed_reimbursements, actor)
        await self.store.flush()

        self.audit.record(
            actor,
            ACTION_RUN_PAYROLL,
            target_type=TARGET_PERIOD,
            target_id=period.id,
            payload={"payslips_generated": len(results), "period_id": period.id},
        )
        await self.session.commit()
        return True
