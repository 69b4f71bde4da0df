"""Payslip calculation: working days and per-employee aggregation."""

from payslip_engine.calculators.aggregator import EmployeeAggregator
from payslip_engine.calculators.types import EmployeePayResult, PayslipDraft, PeriodWindow
from payslip_engine.calculators.working_days import count_working_days, is_working_day

__all__ = [
    "EmployeeAggregator",
    "EmployeePayResult",
    "PayslipDraft",
    "PeriodWindow",
    "count_working_days",
    "is_working_day",
]
