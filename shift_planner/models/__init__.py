"""Database models package."""
from shift_planner.models.user import User, UserRole
from shift_planner.models.employee import Employee, DEFAULT_MAX_WEEKLY_HOURS
from shift_planner.models.shift import Shift, ShiftStatus
from shift_planner.models.availability import AvailabilityBlock, AvailabilityType
from shift_planner.models.audit_log import AuditLog

__all__ = [
    "User",
    "UserRole",
    "Employee",
    "DEFAULT_MAX_WEEKLY_HOURS",
    "Shift",
    "ShiftStatus",
    "AvailabilityBlock",
    "AvailabilityType",
    "AuditLog",
]
