"""Exceptions raised by the payslip engine."""

from __future__ import annotations

from uuid import UUID


class PayrollError(Exception):
    """Base class for payroll run errors."""

    code: str = "PAYROLL_ERROR"


class PeriodNotFoundError(PayrollError):
    """Raised when the attendance period does not exist."""

    code = "PERIOD_NOT_FOUND"

    def __init__(self, period_id: UUID):
        self.period_id = period_id
        super().__init__("Attendance period not found.")


class PayrollAlreadyRunError(PayrollError):
    """Raised when payroll has already been processed for the period."""

    code = "PAYROLL_ALREADY_RUN"

    def __init__(self, period_id: UUID):
        self.period_id = period_id
        super().__init__("Payroll already run for this period.")


class ZeroWorkingDaysError(PayrollError):
    """Raised when the period has no Monday-Friday dates.

    The period is marked processed before this is raised.
    """

    code = "ZERO_WORKING_DAYS"

    def __init__(self, period_id: UUID):
        self.period_id = period_id
        super().__init__(
            "Payroll cannot be run for a period with zero total working days."
        )


class PayrollInternalError(PayrollError):
    """Raised for storage failures; the message never carries storage detail."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str = "An internal error occurred during payroll processing."):
        super().__init__(message)


class PayslipNotFoundError(Exception):
    """Raised when no payslip exists for an employee and period."""

    code = "PAYSLIP_NOT_FOUND"

    def __init__(self, employee_id: UUID, period_id: UUID):
        self.employee_id = employee_id
        self.period_id = period_id
        super().__init__("Payslip not found for this period.")


class IntakeValidationError(Exception):
    """Raised when a submitted attendance, overtime or reimbursement is invalid."""

    code = "VALIDATION_ERROR"


class DuplicateAttendanceError(IntakeValidationError):
    """Raised when attendance was already submitted for the day."""

    code = "DUPLICATE_ATTENDANCE"

    def __init__(self, employee_id: UUID, on: object):
        self.employee_id = employee_id
        self.on = on
        super().__init__("Attendance already submitted for this day.")


class ImmutableRecordError(Exception):
    """Raised when code tries to update or delete an immutable row."""

    code = "IMMUTABLE_RECORD"

    def __init__(self, entity: str, operation: str):
        self.entity = entity
        self.operation = operation
        super().__init__(f"{entity} rows are immutable: {operation} is not allowed")
