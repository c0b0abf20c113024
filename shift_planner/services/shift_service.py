"""Shift management service: the write paths for shifts."""
from dataclasses import dataclass, field
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional, Tuple
from datetime import date, datetime, tzinfo
import logging

from shift_planner.config import settings
from shift_planner.exceptions import (
    InvalidStatusTransitionError,
    NoShiftsToCopyError,
    NotYourShiftError,
    ResourceNotFoundError,
    ShiftRejectedError,
    ValidationError,
)
from shift_planner.models.shift import Shift, ShiftStatus
from shift_planner.repository import SchedulingRepository
from shift_planner.services.audit_service import AuditService
from shift_planner.services.shift_validator import ShiftValidator
from shift_planner.time_math import day_bounds, roll_over_midnight, shift_by_days, to_storage, week_bounds


logger = logging.getLogger(__name__)


ASSIGNABLE_STATUSES = (ShiftStatus.DRAFT, ShiftStatus.PUBLISHED)
FROZEN_STATUSES = (ShiftStatus.CANCELLED, ShiftStatus.ACKNOWLEDGED)


@dataclass
class ShiftWriteResult:
    """A persisted shift together with the non-fatal warnings of its validation."""
    shift: Shift
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "data": self.shift.to_dict(),
            "warnings": list(self.warnings),
        }


class ShiftService:
    """Service for proposing, changing and cancelling shifts."""

    def __init__(self, db: Session, tz: Optional[tzinfo] = None):
        """
        Initialize shift service.

        Args:
            db: Database session
            tz: Business timezone, defaults to the configured one
        """
        self.db = db
        self.tz = tz or settings.tz
        self.repository = SchedulingRepository(db)
        self.validator = ShiftValidator(db, tz=self.tz)
        self.audit = AuditService(db)

    @staticmethod
    def normalize_window(start_time: datetime, end_time: datetime) -> Tuple[datetime, datetime]:
        """
        Prepare a proposed window for validation and storage.

        Every write path goes through here: instants become aware UTC and
        a window whose end is not after its start is taken to end on the
        following day.
        """
        return roll_over_midnight(start_time, end_time)

    def get_shift(self, shift_id: str) -> Shift:
        shift = self.repository.get_shift(shift_id)
        if not shift:
            raise ResourceNotFoundError("shift", shift_id)
        return shift

    def list_shifts(
        self,
        employee_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[ShiftStatus] = None
    ) -> List[Shift]:
        """
        List shifts, optionally filtered.

        Args:
            employee_id: Only this employee's shifts
            start_date: Shifts starting on or after this local day
            end_date: Shifts ending on or before the end of this local day
            status: Only shifts with this status

        Returns:
            Shifts ordered by start time
        """
        if start_date and end_date and start_date > end_date:
            raise ValueError(
                f"Start date ({start_date}) must be before or equal to end date ({end_date})"
            )

        query = self.db.query(Shift)
        if employee_id:
            query = query.filter(Shift.employee_id == employee_id)
        if status:
            query = query.filter(Shift.status == status)
        if start_date:
            query = query.filter(Shift.start_time >= to_storage(day_bounds(start_date, self.tz)[0]))
        if end_date:
            query = query.filter(Shift.end_time <= to_storage(day_bounds(end_date, self.tz)[1]))

        return query.order_by(Shift.start_time.asc()).all()

    def create_shift(
        self,
        employee_id: str,
        start_time: datetime,
        end_time: datetime,
        actor_id: Optional[str] = None,
        note: Optional[str] = None,
        status: Optional[ShiftStatus] = None,
        force_override: bool = False
    ) -> ShiftWriteResult:
        """
        Validate and create a shift.

        Args:
            employee_id: Employee the shift is assigned to
            start_time: Proposed start instant
            end_time: Proposed end instant; an end at or before the start
                means the shift ends the next day
            actor_id: User performing the action, for the audit trail
            note: Optional free-text note
            status: DRAFT (default) or PUBLISHED
            force_override: Accept an availability conflict with a warning

        Returns:
            ShiftWriteResult with the stored shift and validation warnings

        Raises:
            ResourceNotFoundError: If the employee does not exist
            InvalidStatusTransitionError: If status is not assignable
            ShiftRejectedError: If validation fails
        """
        if not self.repository.get_employee(employee_id):
            raise ResourceNotFoundError("employee", employee_id)

        status = status or ShiftStatus.DRAFT
        if status not in ASSIGNABLE_STATUSES:
            raise InvalidStatusTransitionError("NEW", f"create as {status.value}")

        start_time, end_time = self.normalize_window(start_time, end_time)

        validation = self.validator.validate(employee_id, start_time, end_time, force_override)
        if not validation.valid:
            raise ShiftRejectedError(validation)

        shift = self.repository.create_shift(employee_id, start_time, end_time, status=status, note=note)

        if validation.overridden:
            self.audit.record(
                actor_id,
                "OVERRIDE_AVAILABILITY",
                "Shift",
                shift.id,
                {"employee_id": employee_id, "start_time": start_time, "end_time": end_time}
            )

        self.audit.record(
            actor_id,
            "SHIFT_CREATED",
            "Shift",
            shift.id,
            {"employee_id": employee_id, "start_time": start_time, "end_time": end_time}
        )

        logger.info(f"Shift created: {shift.id} for employee {employee_id}")
        return ShiftWriteResult(shift, validation.warnings)

    def update_shift(
        self,
        shift_id: str,
        actor_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        note: Optional[str] = None,
        status: Optional[ShiftStatus] = None,
        force_override: bool = False
    ) -> ShiftWriteResult:
        """
        Re-validate and update a shift; omitted fields keep their values.

        The shift itself is excluded from the overlap check and from the
        weekly hour total.

        Raises:
            ResourceNotFoundError: If the shift or new employee does not exist
            InvalidStatusTransitionError: If the shift is cancelled or
                acknowledged, or the new status is not assignable
            ShiftRejectedError: If validation fails
        """
        existing = self.get_shift(shift_id)
        if existing.status in FROZEN_STATUSES:
            raise InvalidStatusTransitionError(existing.status.value, "update")
        if status is not None and status not in ASSIGNABLE_STATUSES:
            raise InvalidStatusTransitionError(existing.status.value, f"change to {status.value}")

        employee_id = employee_id or existing.employee_id
        if employee_id != existing.employee_id and not self.repository.get_employee(employee_id):
            raise ResourceNotFoundError("employee", employee_id)

        before = existing.to_dict()
        start_time, end_time = self.normalize_window(
            start_time or existing.start_time,
            end_time or existing.end_time
        )

        validation = self.validator.validate(
            employee_id, start_time, end_time, force_override, exclude_shift_id=shift_id
        )
        if not validation.valid:
            raise ShiftRejectedError(validation)

        changes = {
            "employee_id": employee_id,
            "start_time": start_time,
            "end_time": end_time,
        }
        if note is not None:
            changes["note"] = note
        if status is not None:
            changes["status"] = status

        shift = self.repository.update_shift(existing, **changes)

        if validation.overridden:
            self.audit.record(
                actor_id,
                "OVERRIDE_AVAILABILITY",
                "Shift",
                shift.id,
                {"employee_id": employee_id, "start_time": start_time, "end_time": end_time}
            )

        self.audit.record(
            actor_id,
            "SHIFT_UPDATED",
            "Shift",
            shift.id,
            {"before": before, "after": shift.to_dict()}
        )

        logger.info(f"Shift updated: {shift.id}")
        return ShiftWriteResult(shift, validation.warnings)

    def cancel_shift(self, shift_id: str, actor_id: Optional[str] = None) -> Shift:
        """
        Cancel a shift. Shifts are never physically removed.

        Cancelling an already cancelled shift is a no-op.
        """
        shift = self.get_shift(shift_id)
        if shift.status == ShiftStatus.CANCELLED:
            return shift

        shift = self.repository.cancel_shift(shift)
        self.audit.record(actor_id, "SHIFT_CANCELLED", "Shift", shift_id, {})

        logger.info(f"Shift cancelled: {shift_id}")
        return shift

    def acknowledge_shift(self, shift_id: str, employee_id: str, actor_id: Optional[str] = None) -> Shift:
        """
        Mark a published shift as seen by the employee who owns it.

        Raises:
            ResourceNotFoundError: If the shift does not exist
            NotYourShiftError: If the shift belongs to someone else
            InvalidStatusTransitionError: If the shift is not PUBLISHED
        """
        shift = self.get_shift(shift_id)

        if shift.employee_id != employee_id:
            raise NotYourShiftError(shift_id, employee_id)
        if shift.status != ShiftStatus.PUBLISHED:
            raise InvalidStatusTransitionError(shift.status.value, "acknowledge")

        shift = self.repository.update_shift(shift, status=ShiftStatus.ACKNOWLEDGED)
        self.audit.record(actor_id, "SHIFT_ACKNOWLEDGED", "Shift", shift_id, {"employee_id": employee_id})

        logger.info(f"Shift acknowledged: {shift_id} by employee {employee_id}")
        return shift

    def copy_week(
        self,
        source_week_start: date,
        target_week_start: date,
        actor_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Copy every live shift of one week into another week.

        Copies keep their local wall-clock times and are validated without
        override; shifts that fail validation are reported as skipped.

        Raises:
            NoShiftsToCopyError: If the source week has no live shifts

        Returns:
            Dictionary with created/skipped counts, created shifts and
            skip reasons
        """
        source_monday, source_start, source_end = week_bounds(source_week_start, self.tz)
        target_monday, _, _ = week_bounds(target_week_start, self.tz)
        day_diff = (target_monday - source_monday).days

        source_shifts = self.repository.find_shifts_starting_between(source_start, source_end)
        if not source_shifts:
            raise NoShiftsToCopyError(source_monday)

        created = []
        skipped = []
        for source in source_shifts:
            start_time, end_time = self.normalize_window(
                shift_by_days(source.start_time, day_diff, self.tz),
                shift_by_days(source.end_time, day_diff, self.tz)
            )
            validation = self.validator.validate(source.employee_id, start_time, end_time)
            if not validation.valid:
                error = validation.errors[0]
                skipped.append({
                    "source_shift_id": source.id,
                    "code": error.code,
                    "error": error.message,
                })
                continue

            created.append(self.repository.create_shift(
                source.employee_id, start_time, end_time, note=source.note
            ))

        self.audit.record(
            actor_id,
            "WEEK_COPIED",
            "Schedule",
            target_monday.isoformat(),
            {
                "source": source_monday,
                "target": target_monday,
                "created": len(created),
                "errors": len(skipped),
            }
        )

        logger.info(
            f"Week copied: {source_monday} -> {target_monday} "
            f"({len(created)} created, {len(skipped)} skipped)"
        )

        return {
            "created": len(created),
            "errors": len(skipped),
            "shifts": [shift.to_dict() for shift in created],
            "skipped": skipped,
        }

    def bulk_create(self, items: List[Dict[str, Any]], actor_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Create several shifts independently.

        Args:
            items: Keyword arguments for create_shift, one dict per shift
            actor_id: User performing the action

        Returns:
            Dictionary with created/failed counts, created shifts with their
            warnings, and the failures with their error codes
        """
        results = []
        failed = []
        for item in items:
            try:
                results.append(self.create_shift(actor_id=actor_id, **item))
            except ValidationError as e:
                failed.append({
                    "shift": {key: str(value) for key, value in item.items()},
                    "code": e.error_code,
                    "error": e.message,
                })

        return {
            "created": len(results),
            "errors": len(failed),
            "shifts": [
                {**result.shift.to_dict(), "warnings": result.warnings}
                for result in results
            ],
            "failed": failed,
        }
