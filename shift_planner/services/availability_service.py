"""Availability block management service."""
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date, datetime, time
import logging
import uuid

from shift_planner.exceptions import (
    InvalidTimeRangeError,
    MissingFieldError,
    PermissionDeniedError,
    ResourceNotFoundError,
)
from shift_planner.models.availability import AvailabilityBlock, AvailabilityType
from shift_planner.models.user import User
from shift_planner.repository import SchedulingRepository


logger = logging.getLogger(__name__)


class AvailabilityService:
    """Service for creating, listing and deleting availability blocks.

    Blocks are immutable: to change one, delete it and create a new one.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = SchedulingRepository(db)

    def list_blocks(
        self,
        employee_id: Optional[str] = None,
        day_of_week: Optional[int] = None
    ) -> List[AvailabilityBlock]:
        if employee_id:
            return self.repository.find_availability_by_employee(employee_id, day_of_week)

        query = self.db.query(AvailabilityBlock)
        if day_of_week is not None:
            query = query.filter(AvailabilityBlock.day_of_week == day_of_week)
        return query.order_by(
            AvailabilityBlock.day_of_week.asc(),
            AvailabilityBlock.start_time.asc()
        ).all()

    def create_block(
        self,
        employee_id: str,
        day_of_week: int,
        type: AvailabilityType = AvailabilityType.UNAVAILABLE,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        note: Optional[str] = None
    ) -> AvailabilityBlock:
        """
        Create an availability block for an employee.

        Omitting both start_time and end_time makes a full-day block.

        Raises:
            MissingFieldError: If employee_id is empty, or only one of
                start_time and end_time is given
            ResourceNotFoundError: If the employee does not exist
            InvalidTimeRangeError: If end_time is not after start_time, or
                end_date is before start_date
        """
        if not employee_id:
            raise MissingFieldError("employee_id")
        if not self.repository.get_employee(employee_id):
            raise ResourceNotFoundError("employee", employee_id)
        if start_time is None and end_time is not None:
            raise MissingFieldError("start_time")
        if end_time is None and start_time is not None:
            raise MissingFieldError("end_time")
        if start_time is not None and end_time is not None and start_time >= end_time:
            raise InvalidTimeRangeError(start_time, end_time)
        if start_date and end_date and end_date < start_date:
            raise InvalidTimeRangeError(start_date, end_date)

        block = AvailabilityBlock(
            id=str(uuid.uuid4()),
            employee_id=employee_id,
            type=type,
            day_of_week=day_of_week,
            start_time=start_time,
            end_time=end_time,
            start_date=start_date,
            end_date=end_date,
            note=note,
            created_at=datetime.utcnow()
        )
        block.validate()

        self.db.add(block)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(block)

        logger.info(f"Availability block created: {block.id} for employee {employee_id}")
        return block

    def delete_block(self, block_id: str, actor: User) -> None:
        """
        Delete a block. Allowed for its owner and for managers and admins.

        Raises:
            ResourceNotFoundError: If the block does not exist
            PermissionDeniedError: If the actor may not delete it
        """
        block = self.db.query(AvailabilityBlock).filter(AvailabilityBlock.id == block_id).first()
        if not block:
            raise ResourceNotFoundError("availability", block_id)

        owns_block = actor.employee is not None and actor.employee.id == block.employee_id
        if not owns_block and not actor.role.can_manage_shifts:
            raise PermissionDeniedError("delete this availability block")

        self.db.delete(block)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Availability block deleted: {block_id}")
