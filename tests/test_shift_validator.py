"""Unit tests for ShiftValidator."""
import pytest
from datetime import time

from shift_planner.models.availability import AvailabilityType
from shift_planner.models.shift import Shift, ShiftStatus
from shift_planner.services.shift_validator import (
    AVAILABILITY_CONFLICT,
    INVALID_TIME_RANGE,
    OVERRIDE_WARNING,
    SHIFT_OVERLAP,
    ShiftValidator,
)
from tests.conftest import BUSINESS_TZ, local, make_block, make_employee, make_shift


THURSDAY = 4


@pytest.fixture
def validator(test_db):
    return ShiftValidator(test_db, tz=BUSINESS_TZ, min_shift_hours=2.0)


@pytest.fixture
def employee(test_db):
    return make_employee(test_db, name="Ayse", max_weekly_hours=45)


class TestTimeRange:
    """Test the time range check."""

    def test_end_before_start_is_rejected(self, validator, employee):
        result = validator.validate(employee.id, local(2026, 2, 16, 17), local(2026, 2, 16, 9))

        assert not result.valid
        assert [e.code for e in result.errors] == [INVALID_TIME_RANGE]

    def test_zero_length_is_rejected(self, validator, employee):
        result = validator.validate(employee.id, local(2026, 2, 16, 9), local(2026, 2, 16, 9))

        assert result.errors[0].code == INVALID_TIME_RANGE


class TestMinimumDuration:
    """Test the short shift warning."""

    def test_short_shift_is_valid_with_warning(self, validator, employee):
        result = validator.validate(employee.id, local(2026, 2, 16, 9), local(2026, 2, 16, 10))

        assert result.valid
        assert result.warnings == ["Shift is very short: 1.0 hours (at least 2 hours recommended)"]

    def test_normal_shift_has_no_warnings(self, validator, employee):
        result = validator.validate(employee.id, local(2026, 2, 16, 9), local(2026, 2, 16, 17))

        assert result.valid
        assert result.warnings == []


class TestOverlap:
    """Test the overlap check against stored shifts."""

    def test_overlapping_shift_is_rejected(self, test_db, validator, employee):
        existing = make_shift(test_db, employee, local(2026, 2, 16, 9), local(2026, 2, 16, 17))

        result = validator.validate(employee.id, local(2026, 2, 16, 16), local(2026, 2, 16, 20))

        assert not result.valid
        assert result.errors[0].code == SHIFT_OVERLAP
        assert result.errors[0].details["conflicting_shift_ids"] == [existing.id]

    def test_touching_shifts_do_not_overlap(self, test_db, validator, employee):
        make_shift(test_db, employee, local(2026, 2, 16, 9), local(2026, 2, 16, 17))

        result = validator.validate(employee.id, local(2026, 2, 16, 17), local(2026, 2, 16, 20))

        assert result.valid

    def test_cancelled_shift_is_ignored(self, test_db, validator, employee):
        make_shift(
            test_db, employee, local(2026, 2, 16, 9), local(2026, 2, 16, 17),
            status=ShiftStatus.CANCELLED
        )

        result = validator.validate(employee.id, local(2026, 2, 16, 10), local(2026, 2, 16, 14))

        assert result.valid

    def test_other_employee_shift_is_ignored(self, test_db, validator, employee):
        other = make_employee(test_db, name="Mehmet")
        make_shift(test_db, other, local(2026, 2, 16, 9), local(2026, 2, 16, 17))

        result = validator.validate(employee.id, local(2026, 2, 16, 9), local(2026, 2, 16, 17))

        assert result.valid

    def test_shift_being_updated_is_excluded(self, test_db, validator, employee):
        existing = make_shift(test_db, employee, local(2026, 2, 16, 9), local(2026, 2, 16, 17))

        result = validator.validate(
            employee.id, local(2026, 2, 16, 10), local(2026, 2, 16, 18),
            exclude_shift_id=existing.id
        )

        assert result.valid

    def test_overlap_stops_before_availability(self, test_db, validator, employee):
        make_shift(test_db, employee, local(2026, 2, 19, 9), local(2026, 2, 19, 17))
        make_block(test_db, employee, THURSDAY)

        result = validator.validate(employee.id, local(2026, 2, 19, 10), local(2026, 2, 19, 12))

        assert [e.code for e in result.errors] == [SHIFT_OVERLAP]


class TestAvailability:
    """Test the availability check and manager override."""

    def test_full_day_block_rejects_shift(self, test_db, validator, employee):
        make_block(test_db, employee, THURSDAY)

        result = validator.validate(employee.id, local(2026, 2, 19, 9), local(2026, 2, 19, 17))

        assert not result.valid
        assert result.errors[0].code == AVAILABILITY_CONFLICT
        assert not result.overridden

    def test_override_turns_conflict_into_warning(self, test_db, validator, employee):
        make_block(test_db, employee, THURSDAY)

        result = validator.validate(
            employee.id, local(2026, 2, 19, 9), local(2026, 2, 19, 17), force_override=True
        )

        assert result.valid
        assert result.overridden
        assert result.warnings == [OVERRIDE_WARNING]

    def test_override_without_conflict_changes_nothing(self, validator, employee):
        result = validator.validate(
            employee.id, local(2026, 2, 19, 9), local(2026, 2, 19, 17), force_override=True
        )

        assert result.valid
        assert not result.overridden
        assert result.warnings == []

    def test_preference_blocks_do_not_reject(self, test_db, validator, employee):
        make_block(test_db, employee, THURSDAY, type=AvailabilityType.PREFER_NOT)

        result = validator.validate(employee.id, local(2026, 2, 19, 9), local(2026, 2, 19, 17))

        assert result.valid

    def test_partial_block_outside_shift_is_clear(self, test_db, validator, employee):
        make_block(test_db, employee, THURSDAY, time(18, 0), time(22, 0))

        result = validator.validate(employee.id, local(2026, 2, 19, 9), local(2026, 2, 19, 17))

        assert result.valid

    def test_overnight_shift_meets_next_morning_block(self, test_db, validator, employee):
        # Friday 05:00-05:30 block, Thursday 22:00 to Friday 06:00 shift
        make_block(test_db, employee, 5, time(5, 0), time(5, 30))

        result = validator.validate(employee.id, local(2026, 2, 19, 22), local(2026, 2, 20, 6))

        assert result.errors[0].code == AVAILABILITY_CONFLICT


class TestWeeklyHours:
    """Test the advisory weekly hour cap."""

    def test_exceeding_cap_is_a_warning(self, test_db, validator, employee):
        for day in range(16, 21):
            make_shift(test_db, employee, local(2026, 2, day, 9), local(2026, 2, day, 17))

        result = validator.validate(employee.id, local(2026, 2, 21, 9), local(2026, 2, 21, 17))

        assert result.valid
        assert len(result.warnings) == 1
        assert "48.0/45" in result.warnings[0]

    def test_reaching_cap_exactly_has_no_warning(self, test_db, validator):
        employee = make_employee(test_db, max_weekly_hours=16)
        make_shift(test_db, employee, local(2026, 2, 16, 9), local(2026, 2, 16, 17))

        result = validator.validate(employee.id, local(2026, 2, 17, 9), local(2026, 2, 17, 17))

        assert result.warnings == []

    def test_previous_week_does_not_count(self, test_db, validator):
        employee = make_employee(test_db, max_weekly_hours=10)
        # Sunday of the previous week
        make_shift(test_db, employee, local(2026, 2, 15, 9), local(2026, 2, 15, 17))

        result = validator.validate(employee.id, local(2026, 2, 16, 9), local(2026, 2, 16, 17))

        assert result.warnings == []

    def test_cancelled_shifts_do_not_count(self, test_db, validator):
        employee = make_employee(test_db, max_weekly_hours=10)
        make_shift(
            test_db, employee, local(2026, 2, 16, 9), local(2026, 2, 16, 17),
            status=ShiftStatus.CANCELLED
        )

        result = validator.validate(employee.id, local(2026, 2, 17, 9), local(2026, 2, 17, 17))

        assert result.warnings == []

    def test_warnings_accumulate_in_order(self, test_db, validator):
        employee = make_employee(test_db, max_weekly_hours=1)
        make_block(test_db, employee, 1)

        result = validator.validate(
            employee.id, local(2026, 2, 16, 9), local(2026, 2, 16, 10, 30), force_override=True
        )

        assert result.valid
        assert result.warnings[0].startswith("Shift is very short")
        assert result.warnings[1] == OVERRIDE_WARNING
        assert result.warnings[2].startswith("Weekly hour limit exceeded: 1.5/1")


def test_validation_does_not_write(test_db, validator, employee):
    make_block(test_db, employee, THURSDAY)

    validator.validate(employee.id, local(2026, 2, 19, 9), local(2026, 2, 19, 17), force_override=True)

    assert test_db.query(Shift).count() == 0


def test_result_to_dict(test_db, validator, employee):
    make_block(test_db, employee, THURSDAY)

    result = validator.validate(employee.id, local(2026, 2, 19, 9), local(2026, 2, 19, 17))
    data = result.to_dict()

    assert data["valid"] is False
    assert data["errors"][0]["code"] == AVAILABILITY_CONFLICT
    assert data["errors"][0]["details"]["blocks"][0]["day_of_week"] == THURSDAY
