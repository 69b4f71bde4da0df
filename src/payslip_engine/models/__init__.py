"""ORM models for the payslip engine."""

from payslip_engine.models.base import Base
from payslip_engine.models.employee import Employee
from payslip_engine.models.attendance import AttendancePeriod, AttendanceRecord, OvertimeRecord
from payslip_engine.models.reimbursement import ReimbursementRequest, ReimbursementStatus
from payslip_engine.models.payslip import Payslip
from payslip_engine.models.audit import AuditEntry
from payslip_engine.models.immutability import register_immutability_listeners

register_immutability_listeners()

__all__ = [
    "Base",
    "Employee",
    "AttendancePeriod",
    "AttendanceRecord",
    "OvertimeRecord",
    "ReimbursementRequest",
    "ReimbursementStatus",
    "Payslip",
    "AuditEntry",
]
