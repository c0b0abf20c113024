"""Weekly schedule aggregation."""
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
from datetime import date, datetime, timedelta, tzinfo
import logging

from shift_planner.config import settings
from shift_planner.models.availability import AvailabilityBlock
from shift_planner.models.employee import Employee
from shift_planner.models.shift import Shift
from shift_planner.repository import SchedulingRepository
from shift_planner.services.availability_index import AvailabilityIndex
from shift_planner.time_math import (
    as_utc,
    day_bounds,
    day_of_week,
    duration_hours,
    week_bounds,
)


logger = logging.getLogger(__name__)


class ScheduleService:
    """Builds the per-employee, per-day view of one week."""

    def __init__(self, db: Session, tz: Optional[tzinfo] = None):
        """
        Initialize schedule service.

        Args:
            db: Database session
            tz: Business timezone, defaults to the configured one
        """
        self.repository = SchedulingRepository(db)
        self.tz = tz or settings.tz

    def get_weekly_schedule(self, week_start: date) -> Dict[str, Any]:
        """
        Get the weekly schedule for the week containing ``week_start``.

        Each active employee gets seven day buckets, Monday first. A shift
        is placed in the bucket of the local day it starts on, even if it
        ends the next day.

        Args:
            week_start: Any date in the wanted week; anchored to its Monday

        Returns:
            Dictionary with week_start, week_end (the Sunday) and one row per
            employee ordered by name
        """
        monday, start_utc, end_utc = week_bounds(week_start, self.tz)

        employees = self.repository.find_active_employees()
        shifts = self.repository.find_shifts_starting_between(start_utc, end_utc)
        blocks = self.repository.find_availability_for_employees(
            employee.id for employee in employees
        )

        shifts_by_employee: Dict[str, List[Shift]] = {}
        for shift in shifts:
            shifts_by_employee.setdefault(shift.employee_id, []).append(shift)

        blocks_by_employee: Dict[str, List[AvailabilityBlock]] = {}
        for block in blocks:
            blocks_by_employee.setdefault(block.employee_id, []).append(block)

        rows = [
            self._build_row(
                employee,
                monday,
                shifts_by_employee.get(employee.id, []),
                blocks_by_employee.get(employee.id, [])
            )
            for employee in employees
        ]

        logger.info(f"Weekly schedule built for {monday}: {len(rows)} employees, {len(shifts)} shifts")

        return {
            "week_start": monday.isoformat(),
            "week_end": (monday + timedelta(days=6)).isoformat(),
            "employees": rows,
        }

    def get_print_view(self, week_start: date) -> Dict[str, Any]:
        """Weekly schedule with the business name and generation time."""
        schedule = self.get_weekly_schedule(week_start)
        return {
            **schedule,
            "business_name": settings.business_name,
            "generated_at": as_utc(datetime.utcnow()).isoformat(),
        }

    def _build_row(
        self,
        employee: Employee,
        monday: date,
        shifts: List[Shift],
        blocks: List[AvailabilityBlock]
    ) -> Dict[str, Any]:
        total_hours = sum(duration_hours(shift.start_time, shift.end_time) for shift in shifts)

        days = []
        for offset in range(7):
            day = monday + timedelta(days=offset)
            day_start, day_end = day_bounds(day, self.tz)
            weekday = day_of_week(day)

            day_shifts = [
                shift for shift in shifts
                if day_start <= as_utc(shift.start_time) < day_end
            ]
            unavailable = [
                block for block in blocks
                if block.day_of_week == weekday and block.type.is_enforced
            ]
            preferences = [
                block for block in blocks
                if block.day_of_week == weekday and block.type.is_informational
            ]

            days.append({
                "date": day.isoformat(),
                "shifts": [shift.to_dict() for shift in day_shifts],
                "unavailable": [block.to_dict() for block in unavailable],
                "preferences": [block.to_dict() for block in preferences],
                "has_conflict": self._has_conflict(day_shifts, unavailable),
            })

        return {
            "employee": {
                "id": employee.id,
                "name": employee.name,
                "position": employee.position,
                "department": employee.department,
                "max_weekly_hours": employee.max_weekly_hours,
            },
            "total_hours": round(total_hours, 1),
            "is_over_limit": total_hours > employee.max_weekly_hours,
            "days": days,
        }

    def _has_conflict(self, shifts: List[Shift], unavailable: List[AvailabilityBlock]) -> bool:
        """Check the day's own shifts against the day's enforced blocks.

        Only blocks of the bucket's weekday are passed in, so the part of an
        overnight shift after midnight never meets them.
        """
        index = AvailabilityIndex(unavailable, self.tz)
        return any(index.conflicts(shift.start_time, shift.end_time) for shift in shifts)
