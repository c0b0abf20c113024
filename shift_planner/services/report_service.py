"""Weekly hours and labour cost reporting."""
from sqlalchemy.orm import Session
from typing import Any, Dict, Optional
from datetime import date, timedelta, tzinfo
from decimal import Decimal, ROUND_HALF_UP
import logging

from shift_planner.config import settings
from shift_planner.repository import SchedulingRepository
from shift_planner.time_math import duration_hours, week_bounds


logger = logging.getLogger(__name__)


def _round(value: float, places: int) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_hours(value: float) -> float:
    return _round(value, 1)


def round_money(value: float) -> float:
    return _round(value, 2)


class ReportService:
    """Service computing regular and overtime hours and pay per employee."""

    def __init__(
        self,
        db: Session,
        tz: Optional[tzinfo] = None,
        overtime_multiplier: Optional[float] = None
    ):
        """
        Initialize report service.

        Args:
            db: Database session
            tz: Business timezone, defaults to the configured one
            overtime_multiplier: Pay factor for hours above the weekly cap
        """
        self.repository = SchedulingRepository(db)
        self.tz = tz or settings.tz
        self.overtime_multiplier = (
            settings.overtime_multiplier if overtime_multiplier is None else overtime_multiplier
        )

    def get_weekly_hours_report(self, week_start: date) -> Dict[str, Any]:
        """
        Get hours and pay for every active employee in a week.

        Hours above an employee's max_weekly_hours are overtime. Figures
        are accumulated unrounded; hours are rounded to one decimal and
        money to two only in the returned report.

        Args:
            week_start: Any date in the wanted week; anchored to its Monday

        Returns:
            Dictionary with per-employee rows, total_cost and total_shifts
        """
        monday, start_utc, end_utc = week_bounds(week_start, self.tz)

        employees = self.repository.find_active_employees()
        shifts = self.repository.find_shifts_starting_between(start_utc, end_utc)

        total_cost = 0.0
        rows = []
        for employee in employees:
            employee_shifts = [shift for shift in shifts if shift.employee_id == employee.id]
            total_hours = sum(
                duration_hours(shift.start_time, shift.end_time) for shift in employee_shifts
            )

            regular_hours = min(total_hours, employee.max_weekly_hours)
            overtime_hours = max(0.0, total_hours - employee.max_weekly_hours)
            hourly_rate = float(employee.hourly_rate or 0)

            regular_pay = regular_hours * hourly_rate
            overtime_pay = overtime_hours * hourly_rate * self.overtime_multiplier
            total_pay = regular_pay + overtime_pay
            total_cost += total_pay

            rows.append({
                "id": employee.id,
                "name": employee.name,
                "position": employee.position,
                "total_hours": round_hours(total_hours),
                "regular_hours": round_hours(regular_hours),
                "overtime_hours": round_hours(overtime_hours),
                "hourly_rate": hourly_rate,
                "regular_pay": round_money(regular_pay),
                "overtime_pay": round_money(overtime_pay),
                "total_pay": round_money(total_pay),
                "shift_count": len(employee_shifts),
            })

        logger.info(f"Weekly hours report built for {monday}: total cost {total_cost:.2f}")

        return {
            "week_start": monday.isoformat(),
            "week_end": (monday + timedelta(days=6)).isoformat(),
            "employees": rows,
            "total_cost": round_money(total_cost),
            "total_shifts": len(shifts),
        }
