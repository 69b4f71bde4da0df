"""Employee endpoints: attendance, overtime, reimbursements, payslips."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from payslip_engine.api.dependencies import Actor, DbSession
from payslip_engine.api.errors import to_http_error
from payslip_engine.api.schemas import (
    AttendanceResponse,
    AttendanceSubmit,
    ErrorResponse,
    OvertimeResponse,
    OvertimeSubmit,
    PayslipDetailResponse,
    PayslipResponse,
    ReimbursementResponse,
    ReimbursementSubmit,
)
from payslip_engine.exceptions import IntakeValidationError, PayslipNotFoundError
from payslip_engine.services.intake_service import IntakeService
from payslip_engine.services.payslip_service import PayslipQueryService

router = APIRouter(tags=["employee"])


@router.post(
    "/attendance",
    response_model=AttendanceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def submit_attendance(
    db: DbSession,
    actor: Actor,
    payload: AttendanceSubmit,
) -> AttendanceResponse:
    """Check in for a working day."""
    try:
        record = await IntakeService(db).submit_attendance(
            actor.actor_id, actor, on=payload.date
        )
    except IntakeValidationError as e:
        await db.rollback()
        raise to_http_error(e)
    await db.commit()
    return AttendanceResponse.model_validate(record)


@router.post(
    "/overtime",
    response_model=OvertimeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def submit_overtime(
    db: DbSession,
    actor: Actor,
    payload: OvertimeSubmit,
) -> OvertimeResponse:
    """Claim overtime hours for an attended day."""
    try:
        record = await IntakeService(db).submit_overtime(
            actor.actor_id,
            payload.date,
            payload.hours,
            actor,
            rate_multiplier=payload.rate_multiplier,
        )
    except IntakeValidationError as e:
        await db.rollback()
        raise to_http_error(e)
    await db.commit()
    return OvertimeResponse.model_validate(record)


@router.post(
    "/reimbursements",
    response_model=ReimbursementResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def submit_reimbursement(
    db: DbSession,
    actor: Actor,
    payload: ReimbursementSubmit,
) -> ReimbursementResponse:
    """Request reimbursement of an expense."""
    try:
        request = await IntakeService(db).submit_reimbursement(
            actor.actor_id, payload.amount, payload.description, actor
        )
    except IntakeValidationError as e:
        await db.rollback()
        raise to_http_error(e)
    await db.commit()
    return ReimbursementResponse.model_validate(request)


@router.get(
    "/payslips",
    response_model=PayslipDetailResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_my_payslip(
    db: DbSession,
    actor: Actor,
    period_id: Annotated[UUID, Query()],
) -> PayslipDetailResponse:
    """The calling employee's payslip for a period, with the claims it paid."""
    try:
        detail = await PayslipQueryService(db).get_payslip_detail(actor.actor_id, period_id)
    except PayslipNotFoundError as e:
        raise to_http_error(e)
    return PayslipDetailResponse(
        **PayslipResponse.model_validate(detail.payslip).model_dump(),
        period_start_date=detail.period.start_date,
        period_end_date=detail.period.end_date,
        reimbursements=[
            ReimbursementResponse.model_validate(r) for r in detail.reimbursements
        ],
    )
