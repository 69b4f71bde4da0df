"""Payslip engine: attendance-based payroll runs, computed once per period."""

__version__ = "0.1.0"
