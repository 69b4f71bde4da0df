"""Tests for per-employee payslip aggregation."""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest

from payslip_engine.calculators.aggregator import EmployeeAggregator
from payslip_engine.calculators.types import PeriodWindow
from payslip_engine.models import ReimbursementRequest, ReimbursementStatus

from tests.conftest import MARCH_END, MARCH_START, weekdays_between


def make_employee(salary: str = "80000"):
    return SimpleNamespace(id=uuid4(), salary=Decimal(salary))


def make_overtime(on: date, hours: int, multiplier: str | None = "2.0"):
    return SimpleNamespace(
        date=on,
        hours=hours,
        rate_multiplier=Decimal(multiplier) if multiplier is not None else None,
    )


def make_request(
    amount: str,
    status: ReimbursementStatus = ReimbursementStatus.APPROVED,
    period_id=None,
) -> ReimbursementRequest:
    return ReimbursementRequest(
        id=uuid4(),
        employee_id=uuid4(),
        attendance_period_id=period_id,
        amount=Decimal(amount),
        description="Hotel",
        status=status.value,
    )


@pytest.fixture
def march() -> PeriodWindow:
    return PeriodWindow(
        period_id=uuid4(),
        start_date=MARCH_START,
        end_date=MARCH_END,
        total_working_days=20,
    )


@pytest.fixture
def aggregator() -> EmployeeAggregator:
    return EmployeeAggregator()


class TestProratedSalary:
    def test_full_attendance_earns_full_salary(self, aggregator, march):
        result = aggregator.aggregate(
            make_employee(), march, weekdays_between(MARCH_START, MARCH_END), [], []
        )

        assert result.payslip.attendance_count == 20
        assert result.payslip.total_working_days == 20
        assert result.payslip.prorated_salary == Decimal("80000.00")
        assert result.payslip.take_home_pay == Decimal("80000.00")

    def test_half_attendance(self, aggregator, march):
        days = weekdays_between(MARCH_START, MARCH_END)[:10]
        result = aggregator.aggregate(make_employee(), march, days, [], [])

        assert result.payslip.prorated_salary == Decimal("40000.00")

    def test_no_attendance_earns_nothing(self, aggregator, march):
        result = aggregator.aggregate(make_employee(), march, [], [], [])

        assert result.payslip.attendance_count == 0
        assert result.payslip.prorated_salary == Decimal("0.00")
        assert result.payslip.take_home_pay == Decimal("0.00")
        assert result.payslip.base_salary == Decimal("80000.00")

    def test_duplicate_dates_count_once(self, aggregator, march):
        days = [date(2026, 3, 2), date(2026, 3, 2), date(2026, 3, 3)]
        result = aggregator.aggregate(make_employee(), march, days, [], [])

        assert result.payslip.attendance_count == 2
        assert result.payslip.prorated_salary == Decimal("8000.00")

    def test_dates_outside_period_are_ignored(self, aggregator, march):
        days = [date(2026, 2, 27), date(2026, 3, 2), date(2026, 3, 30)]
        result = aggregator.aggregate(make_employee(), march, days, [], [])

        assert result.payslip.attendance_count == 1

    def test_zero_working_days_prorates_to_zero(self):
        assert EmployeeAggregator.prorate_salary(Decimal("80000"), 0, 3) == Decimal("0")


class TestOvertime:
    def test_two_hours_at_double_rate(self, aggregator, march):
        days = weekdays_between(MARCH_START, MARCH_END)
        overtime = [make_overtime(date(2026, 3, 4), 2)]
        result = aggregator.aggregate(make_employee(), march, days, overtime, [])

        # 80000 / 20 / 8 = 500 per hour, x2 hours, x2.0 multiplier
        assert result.payslip.overtime_hours == Decimal("2")
        assert result.payslip.overtime_pay == Decimal("2000.00")
        assert result.payslip.take_home_pay == Decimal("82000.00")

    def test_per_record_multiplier(self, aggregator, march):
        overtime = [
            make_overtime(date(2026, 3, 4), 1, "1.5"),
            make_overtime(date(2026, 3, 5), 3, "2.0"),
        ]
        result = aggregator.aggregate(make_employee(), march, [], overtime, [])

        # 500 * 1 * 1.5 + 500 * 3 * 2.0
        assert result.payslip.overtime_hours == Decimal("4")
        assert result.payslip.overtime_pay == Decimal("3750.00")

    def test_missing_multiplier_uses_default(self, march):
        aggregator = EmployeeAggregator(default_overtime_multiplier=Decimal("1.5"))
        overtime = [make_overtime(date(2026, 3, 4), 2, None)]
        result = aggregator.aggregate(make_employee(), march, [], overtime, [])

        assert result.payslip.overtime_pay == Decimal("1500.00")

    def test_overtime_outside_period_is_ignored(self, aggregator, march):
        overtime = [make_overtime(date(2026, 3, 28), 2)]
        result = aggregator.aggregate(make_employee(), march, [], overtime, [])

        assert result.payslip.overtime_hours == Decimal("0")
        assert result.payslip.overtime_pay == Decimal("0.00")

    def test_zero_working_days_ignores_overtime(self, aggregator):
        weekend = PeriodWindow(
            period_id=uuid4(),
            start_date=date(2026, 3, 7),
            end_date=date(2026, 3, 8),
            total_working_days=0,
        )
        overtime = [make_overtime(date(2026, 3, 7), 3)]
        result = aggregator.aggregate(make_employee(), weekend, [], overtime, [])

        assert result.payslip.overtime_hours == Decimal("0")
        assert result.payslip.overtime_pay == Decimal("0.00")

    def test_hours_per_day_is_configurable(self, march):
        aggregator = EmployeeAggregator(hours_per_day=10)
        overtime = [make_overtime(date(2026, 3, 4), 1)]
        result = aggregator.aggregate(make_employee(), march, [], overtime, [])

        # 80000 / 20 / 10 = 400 per hour, x2.0
        assert result.payslip.overtime_pay == Decimal("800.00")


class TestReimbursements:
    def test_approved_unbound_requests_are_claimed(self, aggregator, march):
        requests = [make_request("150.00"), make_request("49.99")]
        result = aggregator.aggregate(make_employee(), march, [], [], requests)

        assert result.payslip.reimbursements_total == Decimal("199.99")
        assert result.claimed_reimbursements == requests
        for request in requests:
            assert request.status == ReimbursementStatus.PAID.value
            assert request.attendance_period_id == march.period_id

    def test_request_bound_to_this_period_is_claimed(self, aggregator, march):
        request = make_request("75.00", period_id=march.period_id)
        result = aggregator.aggregate(make_employee(), march, [], [], [request])

        assert result.payslip.reimbursements_total == Decimal("75.00")

    def test_ineligible_requests_are_untouched(self, aggregator, march):
        other_period = uuid4()
        pending = make_request("10.00", status=ReimbursementStatus.PENDING)
        rejected = make_request("20.00", status=ReimbursementStatus.REJECTED)
        paid = make_request("30.00", status=ReimbursementStatus.PAID)
        elsewhere = make_request("40.00", period_id=other_period)

        result = aggregator.aggregate(
            make_employee(), march, [], [], [pending, rejected, paid, elsewhere]
        )

        assert result.payslip.reimbursements_total == Decimal("0.00")
        assert result.claimed_reimbursements == []
        assert pending.status == ReimbursementStatus.PENDING.value
        assert elsewhere.attendance_period_id == other_period
        assert elsewhere.status == ReimbursementStatus.APPROVED.value


class TestRounding:
    def test_components_round_half_up_and_sum_to_take_home(self, aggregator):
        window = PeriodWindow(
            period_id=uuid4(),
            start_date=date(2026, 3, 2),
            end_date=date(2026, 3, 4),
            total_working_days=3,
        )
        overtime = [make_overtime(date(2026, 3, 3), 1, "1.5")]
        requests = [make_request("0.005")]

        result = aggregator.aggregate(
            make_employee("10000"), window, [date(2026, 3, 3)], overtime, requests
        )
        payslip = result.payslip

        assert payslip.prorated_salary == Decimal("3333.33")
        assert payslip.overtime_pay == Decimal("625.00")
        assert payslip.reimbursements_total == Decimal("0.01")
        assert payslip.take_home_pay == Decimal("3958.34")
        assert payslip.take_home_pay == (
            payslip.prorated_salary + payslip.overtime_pay + payslip.reimbursements_total
        )

    def test_round_money_half_up(self, aggregator):
        assert aggregator.round_money(Decimal("2.345")) == Decimal("2.35")
        assert aggregator.round_money(Decimal("2.344")) == Decimal("2.34")

    def test_float_salary_does_not_carry_binary_noise(self, aggregator, march):
        employee = SimpleNamespace(id=uuid4(), salary=80000.1)
        result = aggregator.aggregate(employee, march, [], [], [])

        assert result.payslip.base_salary == Decimal("80000.10")
