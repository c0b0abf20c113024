"""Unit tests for ReportService."""
import pytest
from datetime import date

from shift_planner.models.shift import ShiftStatus
from shift_planner.services.report_service import ReportService, round_hours, round_money
from tests.conftest import BUSINESS_TZ, local, make_employee, make_shift


@pytest.fixture
def service(test_db):
    return ReportService(test_db, tz=BUSINESS_TZ, overtime_multiplier=1.5)


def row_for(report, employee):
    return next(row for row in report["employees"] if row["id"] == employee.id)


class TestRounding:
    """Test half-up rounding of reported figures."""

    @pytest.mark.parametrize("value,expected", [
        (2.25, 2.3),
        (2.35, 2.4),
        (7.3333333, 7.3),
        (0.0, 0.0),
    ])
    def test_round_hours(self, value, expected):
        assert round_hours(value) == expected

    @pytest.mark.parametrize("value,expected", [
        (10.005, 10.01),
        (22.5, 22.5),
        (99.994, 99.99),
    ])
    def test_round_money(self, value, expected):
        assert round_money(value) == expected


class TestWeeklyHoursReport:
    """Test regular and overtime pay per employee."""

    def test_overtime_is_paid_at_multiplier(self, test_db, service):
        employee = make_employee(test_db, name="Ayse", max_weekly_hours=45, hourly_rate=20)
        for day in range(16, 22):
            make_shift(test_db, employee, local(2026, 2, day, 9), local(2026, 2, day, 17))

        report = service.get_weekly_hours_report(date(2026, 2, 16))
        row = row_for(report, employee)

        assert row["total_hours"] == 48.0
        assert row["regular_hours"] == 45.0
        assert row["overtime_hours"] == 3.0
        assert row["regular_pay"] == 900.0
        assert row["overtime_pay"] == 90.0
        assert row["total_pay"] == 990.0
        assert row["shift_count"] == 6
        assert report["total_cost"] == 990.0
        assert report["total_shifts"] == 6

    def test_no_overtime_under_cap(self, test_db, service):
        employee = make_employee(test_db, hourly_rate=15)
        make_shift(test_db, employee, local(2026, 2, 16, 9), local(2026, 2, 16, 17))

        row = row_for(service.get_weekly_hours_report(date(2026, 2, 16)), employee)

        assert row["overtime_hours"] == 0.0
        assert row["overtime_pay"] == 0.0
        assert row["total_pay"] == 120.0

    def test_missing_rate_costs_nothing(self, test_db, service):
        employee = make_employee(test_db, hourly_rate=None)
        make_shift(test_db, employee, local(2026, 2, 16, 9), local(2026, 2, 16, 17))

        report = service.get_weekly_hours_report(date(2026, 2, 16))
        row = row_for(report, employee)

        assert row["hourly_rate"] == 0.0
        assert row["total_pay"] == 0.0
        assert report["total_cost"] == 0.0

    def test_rounding_applies_to_output_only(self, test_db, service):
        employee = make_employee(test_db, hourly_rate=10)
        make_shift(test_db, employee, local(2026, 2, 16, 9), local(2026, 2, 16, 11, 15))

        row = row_for(service.get_weekly_hours_report(date(2026, 2, 16)), employee)

        assert row["total_hours"] == 2.3
        assert row["total_pay"] == 22.5

    def test_total_cost_sums_employees(self, test_db, service):
        first = make_employee(test_db, name="A", hourly_rate=10)
        second = make_employee(test_db, name="B", hourly_rate=12.5)
        make_shift(test_db, first, local(2026, 2, 16, 9), local(2026, 2, 16, 17))
        make_shift(test_db, second, local(2026, 2, 17, 9), local(2026, 2, 17, 13))

        report = service.get_weekly_hours_report(date(2026, 2, 16))

        assert report["total_cost"] == 130.0
        assert [row["name"] for row in report["employees"]] == ["A", "B"]

    def test_cancelled_shifts_are_not_paid(self, test_db, service):
        employee = make_employee(test_db, hourly_rate=10)
        make_shift(
            test_db, employee, local(2026, 2, 16, 9), local(2026, 2, 16, 17), status=ShiftStatus.CANCELLED
        )

        report = service.get_weekly_hours_report(date(2026, 2, 16))

        assert row_for(report, employee)["total_pay"] == 0.0
        assert report["total_shifts"] == 0

    def test_custom_multiplier(self, test_db):
        employee = make_employee(test_db, max_weekly_hours=8, hourly_rate=10)
        make_shift(test_db, employee, local(2026, 2, 16, 8), local(2026, 2, 16, 18))

        report = ReportService(test_db, tz=BUSINESS_TZ, overtime_multiplier=2.0).get_weekly_hours_report(
            date(2026, 2, 16)
        )

        assert row_for(report, employee)["overtime_pay"] == 40.0
