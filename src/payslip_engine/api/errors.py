"""Translation of engine exceptions into HTTP errors."""

from fastapi import HTTPException, status

from payslip_engine.exceptions import (
    DuplicateAttendanceError,
    IntakeValidationError,
    PayrollAlreadyRunError,
    PayrollInternalError,
    PayslipNotFoundError,
    PeriodNotFoundError,
    ZeroWorkingDaysError,
)

STATUS_BY_ERROR: dict[type[Exception], int] = {
    PeriodNotFoundError: status.HTTP_404_NOT_FOUND,
    PayslipNotFoundError: status.HTTP_404_NOT_FOUND,
    PayrollAlreadyRunError: status.HTTP_409_CONFLICT,
    DuplicateAttendanceError: status.HTTP_409_CONFLICT,
    ZeroWorkingDaysError: status.HTTP_400_BAD_REQUEST,
    IntakeValidationError: status.HTTP_400_BAD_REQUEST,
    PayrollInternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def to_http_error(exc: Exception) -> HTTPException:
    """Map a domain exception to an HTTPException carrying its code."""
    for error_type in type(exc).__mro__:
        if error_type in STATUS_BY_ERROR:
            return HTTPException(
                status_code=STATUS_BY_ERROR[error_type],
                detail=str(exc),
                headers={"X-Error-Code": getattr(exc, "code", "ERROR")},
            )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred",
    )
