"""Validation of proposed shifts against stored shifts and availability."""
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any, Dict, List, Optional
import logging

from sqlalchemy.orm import Session

from shift_planner.config import settings
from shift_planner.models.availability import AvailabilityType
from shift_planner.repository import SchedulingRepository
from shift_planner.services.availability_index import AvailabilityIndex
from shift_planner.time_math import as_utc, duration_hours, week_bounds


logger = logging.getLogger(__name__)


INVALID_TIME_RANGE = "INVALID_TIME_RANGE"
SHIFT_OVERLAP = "SHIFT_OVERLAP"
AVAILABILITY_CONFLICT = "AVAILABILITY_CONFLICT"

OVERRIDE_WARNING = "Availability conflict overridden by manager (force override)"


@dataclass
class ValidationIssue:
    """A blocking validation error."""
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"code": self.code, "message": self.message}
        if self.details is not None:
            data["details"] = self.details
        return data


@dataclass
class ShiftValidationResult:
    """Outcome of validating one proposed shift."""
    warnings: List[str] = field(default_factory=list)
    errors: List[ValidationIssue] = field(default_factory=list)
    overridden: bool = False

    @property
    def valid(self) -> bool:
        return not self.errors

    def reject(self, code: str, message: str, details: Optional[Dict[str, Any]] = None) -> "ShiftValidationResult":
        self.errors.append(ValidationIssue(code, message, details))
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "warnings": list(self.warnings),
            "errors": [error.to_dict() for error in self.errors],
        }


class ShiftValidator:
    """Runs the ordered shift checks, stopping at the first blocking error.

    Checks: time range, minimum duration (warning), overlap with the
    employee's other live shifts, enforced availability (overridable),
    weekly hour cap (warning).
    """

    def __init__(
        self,
        db: Session,
        tz: Optional[tzinfo] = None,
        min_shift_hours: Optional[float] = None
    ):
        """
        Initialize shift validator.

        Args:
            db: Database session
            tz: Business timezone, defaults to the configured one
            min_shift_hours: Shorter shifts get a warning
        """
        self.repository = SchedulingRepository(db)
        self.tz = tz or settings.tz
        self.min_shift_hours = settings.min_shift_hours if min_shift_hours is None else min_shift_hours

    def validate(
        self,
        employee_id: str,
        start_time: datetime,
        end_time: datetime,
        force_override: bool = False,
        exclude_shift_id: Optional[str] = None
    ) -> ShiftValidationResult:
        """
        Validate a proposed shift for an employee.

        Args:
            employee_id: Owner of the proposed shift
            start_time: Shift start instant
            end_time: Shift end instant, already rolled over past midnight
            force_override: Turn an availability conflict into a warning
            exclude_shift_id: Shift being updated, left out of overlap and
                weekly totals

        Returns:
            ShiftValidationResult; ``valid`` is False iff an error was added
        """
        result = ShiftValidationResult()
        start_time = as_utc(start_time)
        end_time = as_utc(end_time)

        # 1. Time range
        if end_time <= start_time:
            return result.reject(
                INVALID_TIME_RANGE,
                "Shift end time must be after its start time",
                {"start_time": start_time.isoformat(), "end_time": end_time.isoformat()}
            )

        # 2. Minimum duration
        hours = duration_hours(start_time, end_time)
        if hours < self.min_shift_hours:
            result.warnings.append(
                f"Shift is very short: {hours:.1f} hours "
                f"(at least {self.min_shift_hours:g} hours recommended)"
            )

        # 3. Overlap with the employee's other shifts
        overlapping = self.repository.find_overlapping_shifts(
            employee_id, start_time, end_time, exclude_shift_id=exclude_shift_id
        )
        if overlapping:
            logger.warning(
                f"Shift overlap for employee {employee_id}: "
                f"{[shift.id for shift in overlapping]}"
            )
            return result.reject(
                SHIFT_OVERLAP,
                "This employee already has a shift during these hours",
                {
                    "conflicting_shift_ids": [shift.id for shift in overlapping],
                    "conflicts": [
                        {
                            "id": shift.id,
                            "start_time": as_utc(shift.start_time).isoformat(),
                            "end_time": as_utc(shift.end_time).isoformat(),
                        }
                        for shift in overlapping
                    ],
                }
            )

        # 4. Availability
        blocks = self.repository.find_availability_by_employee(
            employee_id, types=AvailabilityType.enforced()
        )
        conflicting_blocks = AvailabilityIndex(blocks, self.tz).conflicts(start_time, end_time)
        if conflicting_blocks:
            if not force_override:
                logger.warning(
                    f"Availability conflict for employee {employee_id}: "
                    f"{[block.id for block in conflicting_blocks]}"
                )
                return result.reject(
                    AVAILABILITY_CONFLICT,
                    "The employee is not available during these hours",
                    {"blocks": [block.to_dict() for block in conflicting_blocks]}
                )
            result.overridden = True
            result.warnings.append(OVERRIDE_WARNING)

        # 5. Weekly hour cap
        employee = self.repository.get_employee(employee_id)
        if employee:
            _, week_start, week_end = week_bounds(start_time, self.tz)
            week_shifts = self.repository.find_shifts_by_employee(
                employee_id, week_start, week_end, exclude_shift_id=exclude_shift_id
            )
            existing_hours = sum(
                duration_hours(shift.start_time, shift.end_time) for shift in week_shifts
            )
            total_hours = existing_hours + hours
            if total_hours > employee.max_weekly_hours:
                result.warnings.append(
                    f"Weekly hour limit exceeded: {total_hours:.1f}/{employee.max_weekly_hours} hours"
                )

        return result
