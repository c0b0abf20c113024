"""Data access for shifts, availability blocks and employees.

All instants passed in may be aware or naive UTC; they are converted to
the naive UTC form stored in the database before querying.
"""
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import and_
from typing import Iterable, List, Optional, Sequence
from datetime import datetime
import uuid

from shift_planner.models.availability import AvailabilityBlock, AvailabilityType
from shift_planner.models.employee import Employee
from shift_planner.models.shift import Shift, ShiftStatus
from shift_planner.models.user import User
from shift_planner.time_math import to_storage


EXCLUDED_FROM_PLANNING = (ShiftStatus.CANCELLED,)


class SchedulingRepository:
    """Read and write access to the records the scheduling engine works on."""

    def __init__(self, db: Session):
        self.db = db

    # Shifts

    def get_shift(self, shift_id: str) -> Optional[Shift]:
        return self.db.query(Shift).filter(Shift.id == shift_id).first()

    def find_overlapping_shifts(
        self,
        employee_id: str,
        start: datetime,
        end: datetime,
        excluded_statuses: Sequence[ShiftStatus] = EXCLUDED_FROM_PLANNING,
        exclude_shift_id: Optional[str] = None
    ) -> List[Shift]:
        """
        Find the employee's shifts intersecting ``[start, end)``.

        Two intervals intersect when ``start < other.end and end > other.start``.
        """
        query = self.db.query(Shift).filter(
            and_(
                Shift.employee_id == employee_id,
                Shift.start_time < to_storage(end),
                Shift.end_time > to_storage(start)
            )
        )
        if excluded_statuses:
            query = query.filter(Shift.status.notin_(list(excluded_statuses)))
        if exclude_shift_id:
            query = query.filter(Shift.id != exclude_shift_id)

        return query.order_by(Shift.start_time.asc()).all()

    def find_shifts_by_employee(
        self,
        employee_id: str,
        start: datetime,
        end: datetime,
        excluded_statuses: Sequence[ShiftStatus] = EXCLUDED_FROM_PLANNING,
        exclude_shift_id: Optional[str] = None
    ) -> List[Shift]:
        """
        Find the employee's shifts that start within ``[start, end)``.
        """
        query = self.db.query(Shift).filter(
            and_(
                Shift.employee_id == employee_id,
                Shift.start_time >= to_storage(start),
                Shift.start_time < to_storage(end)
            )
        )
        if excluded_statuses:
            query = query.filter(Shift.status.notin_(list(excluded_statuses)))
        if exclude_shift_id:
            query = query.filter(Shift.id != exclude_shift_id)

        return query.order_by(Shift.start_time.asc()).all()

    def find_shifts_starting_between(
        self,
        start: datetime,
        end: datetime,
        excluded_statuses: Sequence[ShiftStatus] = EXCLUDED_FROM_PLANNING,
        employee_id: Optional[str] = None,
        status: Optional[ShiftStatus] = None
    ) -> List[Shift]:
        """Find shifts of every employee that start within ``[start, end)``."""
        query = self.db.query(Shift).filter(
            and_(
                Shift.start_time >= to_storage(start),
                Shift.start_time < to_storage(end)
            )
        )
        if excluded_statuses:
            query = query.filter(Shift.status.notin_(list(excluded_statuses)))
        if employee_id:
            query = query.filter(Shift.employee_id == employee_id)
        if status:
            query = query.filter(Shift.status == status)

        return query.order_by(Shift.start_time.asc()).all()

    def create_shift(
        self,
        employee_id: str,
        start: datetime,
        end: datetime,
        status: ShiftStatus = ShiftStatus.DRAFT,
        note: Optional[str] = None
    ) -> Shift:
        shift = Shift(
            id=str(uuid.uuid4()),
            employee_id=employee_id,
            start_time=to_storage(start),
            end_time=to_storage(end),
            status=status,
            note=note,
            created_at=datetime.utcnow(),
            updated_at=datetime.utcnow()
        )
        shift.validate()
        self.db.add(shift)
        self._commit()
        self.db.refresh(shift)
        return shift

    def update_shift(self, shift: Shift, **changes) -> Shift:
        for field in ("start_time", "end_time"):
            if changes.get(field) is not None:
                changes[field] = to_storage(changes[field])

        for field, value in changes.items():
            setattr(shift, field, value)
        shift.updated_at = datetime.utcnow()
        shift.validate()

        self._commit()
        self.db.refresh(shift)
        return shift

    def cancel_shift(self, shift: Shift) -> Shift:
        shift.status = ShiftStatus.CANCELLED
        shift.updated_at = datetime.utcnow()
        self._commit()
        self.db.refresh(shift)
        return shift

    # Availability

    def find_availability_by_employee(
        self,
        employee_id: str,
        day_of_week: Optional[int] = None,
        types: Optional[Iterable[AvailabilityType]] = None
    ) -> List[AvailabilityBlock]:
        query = self.db.query(AvailabilityBlock).filter(
            AvailabilityBlock.employee_id == employee_id
        )
        if day_of_week is not None:
            query = query.filter(AvailabilityBlock.day_of_week == day_of_week)
        if types is not None:
            query = query.filter(AvailabilityBlock.type.in_(list(types)))

        return query.order_by(
            AvailabilityBlock.day_of_week.asc(),
            AvailabilityBlock.start_time.asc()
        ).all()

    def find_availability_for_employees(self, employee_ids: Iterable[str]) -> List[AvailabilityBlock]:
        ids = list(employee_ids)
        if not ids:
            return []
        return self.db.query(AvailabilityBlock).filter(
            AvailabilityBlock.employee_id.in_(ids)
        ).all()

    # Employees

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        return self.db.query(Employee).filter(
            Employee.id == employee_id,
            Employee.deleted_at.is_(None)
        ).first()

    def find_active_employees(self) -> List[Employee]:
        """Active, non-deleted employees ordered by name."""
        return self.db.query(Employee).join(User, Employee.user_id == User.id).options(
            joinedload(Employee.user)
        ).filter(
            Employee.is_active.is_(True),
            Employee.deleted_at.is_(None)
        ).order_by(User.name.asc(), Employee.id.asc()).all()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
