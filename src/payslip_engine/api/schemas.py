"""Pydantic schemas for API request/response models."""

import datetime as dt
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Attendance period schemas
# ============================================================================


class AttendancePeriodCreate(BaseModel):
    """Schema for creating an attendance period."""

    start_date: dt.date
    end_date: dt.date


class AttendancePeriodResponse(BaseModel):
    """Schema for attendance period response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    start_date: dt.date
    end_date: dt.date
    processed_at: dt.datetime | None = None


# ============================================================================
# Payroll run schemas
# ============================================================================


class PayrollRunRequest(BaseModel):
    """Schema for running payroll."""

    attendance_period_id: UUID


class PayrollRunResponse(BaseModel):
    """Schema for a completed payroll run."""

    status: str = "success"
    period_id: UUID
    payslips_generated: int
    message: str


class PayslipSummaryLineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    employee_id: UUID
    username: str
    take_home_pay: Decimal


class PayslipSummaryResponse(BaseModel):
    """Schema for the per-period payslip summary."""

    period_id: UUID
    summary: list[PayslipSummaryLineResponse]
    total_take_home_pay_all_employees: Decimal


class PayslipResponse(BaseModel):
    """Schema for a single payslip."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    employee_id: UUID
    attendance_period_id: UUID
    base_salary: Decimal
    prorated_salary: Decimal
    attendance_count: int
    total_working_days: int
    overtime_hours: Decimal
    overtime_pay: Decimal
    reimbursements_total: Decimal
    take_home_pay: Decimal


# ============================================================================
# Intake schemas
# ============================================================================


class AttendanceSubmit(BaseModel):
    """Defaults to today when no date is given."""

    date: dt.date | None = None


class AttendanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    employee_id: UUID
    attendance_period_id: UUID
    date: dt.date
    check_in_time: dt.datetime


class OvertimeSubmit(BaseModel):
    date: dt.date
    hours: int
    rate_multiplier: Decimal | None = None


class OvertimeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    employee_id: UUID
    date: dt.date
    hours: int
    rate_multiplier: Decimal


class ReimbursementSubmit(BaseModel):
    amount: Decimal
    description: str = Field(default="")


class ReimbursementReview(BaseModel):
    approve: bool


class ReimbursementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    employee_id: UUID
    attendance_period_id: UUID | None = None
    description: str
    amount: Decimal
    status: str


class PayslipDetailResponse(PayslipResponse):
    """A payslip with its period dates and the reimbursements paid on it."""

    period_start_date: dt.date
    period_end_date: dt.date
    reimbursements: list[ReimbursementResponse] = Field(default_factory=list)


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: str
    code: str | None = None
