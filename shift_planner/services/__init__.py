"""Business logic services package."""
from shift_planner.services.audit_service import AuditService
from shift_planner.services.availability_index import AvailabilityIndex
from shift_planner.services.availability_service import AvailabilityService
from shift_planner.services.employee_service import EmployeeService
from shift_planner.services.report_service import ReportService
from shift_planner.services.schedule_service import ScheduleService
from shift_planner.services.shift_service import ShiftService, ShiftWriteResult
from shift_planner.services.shift_validator import ShiftValidationResult, ShiftValidator

__all__ = [
    "AuditService",
    "AvailabilityIndex",
    "AvailabilityService",
    "EmployeeService",
    "ReportService",
    "ScheduleService",
    "ShiftService",
    "ShiftWriteResult",
    "ShiftValidationResult",
    "ShiftValidator",
]
