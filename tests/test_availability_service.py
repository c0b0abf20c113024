"""Unit tests for AvailabilityService."""
import pytest
from datetime import date, time

from shift_planner.exceptions import (
    InvalidTimeRangeError,
    MissingFieldError,
    PermissionDeniedError,
    ResourceNotFoundError,
)
from shift_planner.models.availability import AvailabilityBlock, AvailabilityType
from shift_planner.models.user import UserRole
from shift_planner.services.availability_service import AvailabilityService
from tests.conftest import make_employee, make_user


@pytest.fixture
def service(test_db):
    return AvailabilityService(test_db)


class TestCreateBlock:
    """Test creating availability blocks."""

    def test_full_day_block(self, service, test_db):
        employee = make_employee(test_db)

        block = service.create_block(employee.id, day_of_week=4)

        assert block.is_full_day
        assert block.type == AvailabilityType.UNAVAILABLE
        assert block.to_dict()["start_time"] is None

    def test_partial_block(self, service, test_db):
        employee = make_employee(test_db)

        block = service.create_block(
            employee.id, day_of_week=1, type=AvailabilityType.PREFER_NOT,
            start_time=time(8, 0), end_time=time(12, 30), note="School run"
        )

        data = block.to_dict()
        assert data["start_time"] == "08:00"
        assert data["end_time"] == "12:30"
        assert data["type"] == "PREFER_NOT"

    def test_inverted_times_are_rejected(self, service, test_db):
        employee = make_employee(test_db)

        with pytest.raises(InvalidTimeRangeError):
            service.create_block(employee.id, day_of_week=1, start_time=time(12, 0), end_time=time(8, 0))

    def test_missing_employee_id(self, service):
        with pytest.raises(MissingFieldError):
            service.create_block("", day_of_week=1)

    def test_unknown_employee(self, service):
        with pytest.raises(ResourceNotFoundError):
            service.create_block("missing", day_of_week=1)

    def test_only_start_time_is_missing_end(self, service, test_db):
        employee = make_employee(test_db)

        with pytest.raises(MissingFieldError) as exc_info:
            service.create_block(employee.id, day_of_week=1, start_time=time(8, 0))

        assert exc_info.value.details["field_name"] == "end_time"
        assert test_db.query(AvailabilityBlock).count() == 0

    def test_only_end_time_is_missing_start(self, service, test_db):
        employee = make_employee(test_db)

        with pytest.raises(MissingFieldError) as exc_info:
            service.create_block(employee.id, day_of_week=1, end_time=time(17, 0))

        assert exc_info.value.details["field_name"] == "start_time"

    def test_end_date_before_start_date_is_rejected(self, service, test_db):
        employee = make_employee(test_db)

        with pytest.raises(InvalidTimeRangeError):
            service.create_block(
                employee.id, day_of_week=1, start_date=date(2026, 3, 1), end_date=date(2026, 2, 1)
            )


class TestListBlocks:
    """Test listing blocks."""

    def test_list_by_employee_and_day(self, service, test_db):
        first = make_employee(test_db)
        second = make_employee(test_db)
        service.create_block(first.id, day_of_week=1)
        service.create_block(first.id, day_of_week=2)
        service.create_block(second.id, day_of_week=1)

        assert len(service.list_blocks(first.id)) == 2
        assert len(service.list_blocks(first.id, day_of_week=2)) == 1
        assert len(service.list_blocks(day_of_week=1)) == 2


class TestDeleteBlock:
    """Test deleting blocks with ownership rules."""

    def test_owner_can_delete(self, service, test_db):
        employee = make_employee(test_db)
        block = service.create_block(employee.id, day_of_week=1)

        service.delete_block(block.id, employee.user)

        assert test_db.query(AvailabilityBlock).count() == 0

    def test_manager_can_delete(self, service, test_db):
        employee = make_employee(test_db)
        manager = make_user(test_db, role=UserRole.MANAGER)
        block = service.create_block(employee.id, day_of_week=1)

        service.delete_block(block.id, manager)

        assert test_db.query(AvailabilityBlock).count() == 0

    def test_other_employee_cannot_delete(self, service, test_db):
        employee = make_employee(test_db)
        other = make_employee(test_db)
        block = service.create_block(employee.id, day_of_week=1)

        with pytest.raises(PermissionDeniedError):
            service.delete_block(block.id, other.user)

        assert test_db.query(AvailabilityBlock).count() == 1

    def test_missing_block(self, service, test_db):
        manager = make_user(test_db)

        with pytest.raises(ResourceNotFoundError) as exc_info:
            service.delete_block("missing", manager)

        assert exc_info.value.error_code == "AVAILABILITY_NOT_FOUND"
