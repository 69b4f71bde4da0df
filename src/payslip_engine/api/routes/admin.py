"""Admin endpoints: attendance periods, payroll runs, summaries."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query, status

from payslip_engine.api.dependencies import Admin, DbSession
from payslip_engine.api.errors import to_http_error
from payslip_engine.api.schemas import (
    AttendancePeriodCreate,
    AttendancePeriodResponse,
    ErrorResponse,
    PayrollRunRequest,
    PayrollRunResponse,
    PayslipSummaryLineResponse,
    PayslipSummaryResponse,
    ReimbursementResponse,
    ReimbursementReview,
)
from payslip_engine.exceptions import IntakeValidationError, PayrollError
from payslip_engine.services.intake_service import IntakeService
from payslip_engine.services.payroll_service import PayrollService
from payslip_engine.services.payslip_service import PayslipQueryService


router = APIRouter(prefix="/admin", tags=["admin"])


@router.post(
    "/attendance-periods",
    response_model=AttendancePeriodResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_attendance_period(
    db: DbSession,
    admin: Admin,
    payload: AttendancePeriodCreate,
) -> AttendancePeriodResponse:
    """Create a new attendance period."""
    service = IntakeService(db)
    try:
        period = await service.create_attendance_period(
            payload.start_date, payload.end_date, admin
        )
    except IntakeValidationError as e:
        await db.rollback()
        raise to_http_error(e)
    await db.commit()
    return AttendancePeriodResponse.model_validate(period)


@router.post(
    "/payroll",
    response_model=PayrollRunResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def run_payroll(
    db: DbSession,
    admin: Admin,
    payload: PayrollRunRequest,
) -> PayrollRunResponse:
    """Run payroll for an attendance period. Each period runs at most once."""
    service = PayrollService(db)
    try:
        result = await service.run_payroll(payload.attendance_period_id, admin)
    except PayrollError as e:
        raise to_http_error(e)

    return PayrollRunResponse(
        period_id=result.period_id,
        payslips_generated=result.payslips_generated,
        message=f"Payroll run successfully for period {result.period_id}",
    )


@router.get(
    "/payslips-summary",
    response_model=PayslipSummaryResponse,
    responses={400: {"model": ErrorResponse}},
)
async def get_payslips_summary(
    db: DbSession,
    admin: Admin,
    period_id: Annotated[UUID, Query()],
) -> PayslipSummaryResponse:
    """Take-home pay of every employee for a period, with the total."""
    summary = await PayslipQueryService(db).summarize_period(period_id)
    return PayslipSummaryResponse(
        period_id=summary.period_id,
        summary=[PayslipSummaryLineResponse.model_validate(line) for line in summary.lines],
        total_take_home_pay_all_employees=summary.total_take_home_pay,
    )


@router.post(
    "/reimbursements/{request_id}/review",
    response_model=ReimbursementResponse,
    responses={400: {"model": ErrorResponse}},
)
async def review_reimbursement(
    db: DbSession,
    admin: Admin,
    request_id: Annotated[UUID, Path()],
    payload: ReimbursementReview,
) -> ReimbursementResponse:
    """Approve or reject a pending reimbursement request."""
    service = IntakeService(db)
    try:
        request = await service.review_reimbursement(request_id, payload.approve, admin)
    except IntakeValidationError as e:
        await db.rollback()
        raise to_http_error(e)
    await db.commit()
    return ReimbursementResponse.model_validate(request)
