"""Payslip engine services."""

from payslip_engine.services.audit_service import ActorContext, AuditRecorder
from payslip_engine.services.intake_service import IntakeService
from payslip_engine.services.payroll_service import PayrollRunResult, PayrollService
from payslip_engine.services.payroll_store import PayrollStore
from payslip_engine.services.payslip_service import PayslipQueryService, PayslipSummary
from payslip_engine.services.state_machine import (
    InvalidTransitionError,
    PayrollRunState,
    PayrollRunStateMachine,
)

__all__ = [
    "ActorContext",
    "AuditRecorder",
    "IntakeService",
    "PayrollRunResult",
    "PayrollService",
    "PayrollStore",
    "PayslipQueryService",
    "PayslipSummary",
    "InvalidTransitionError",
    "PayrollRunState",
    "PayrollRunStateMachine",
]
