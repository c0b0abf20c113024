"""Availability block model for recurring employee availability rules."""
from sqlalchemy import Column, String, Enum, Date, DateTime, SmallInteger, Time, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from typing import Any, Dict
import enum
from shift_planner.database import Base


class AvailabilityType(str, enum.Enum):
    """Availability type enumeration.

    Only enforced types take part in shift validation; the others are
    carried for display in the schedule view.
    """
    UNAVAILABLE = "UNAVAILABLE"
    PREFER_NOT = "PREFER_NOT"
    AVAILABLE_ONLY = "AVAILABLE_ONLY"

    @property
    def is_enforced(self) -> bool:
        return self is AvailabilityType.UNAVAILABLE

    @property
    def is_informational(self) -> bool:
        return not self.is_enforced

    @classmethod
    def enforced(cls) -> tuple:
        return tuple(t for t in cls if t.is_enforced)


class AvailabilityBlock(Base):
    """Recurring weekly availability rule (day_of_week: 0 = Sunday)."""

    __tablename__ = "availability_blocks"

    id = Column(String(36), primary_key=True)
    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=False, index=True)
    type = Column(Enum(AvailabilityType), nullable=False, default=AvailabilityType.UNAVAILABLE)
    day_of_week = Column(SmallInteger, nullable=False, index=True)
    # Both absent means the whole day
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    note = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    employee = relationship("Employee", back_populates="availability_blocks")

    @property
    def is_full_day(self) -> bool:
        return self.start_time is None or self.end_time is None

    def __repr__(self) -> str:
        return (
            f"<AvailabilityBlock(id={self.id}, employee_id={self.employee_id}, "
            f"type={self.type}, day={self.day_of_week})>"
        )

    def validate(self) -> None:
        """Validate availability block data."""
        if not self.id:
            raise ValueError("Availability block ID is required")
        if not self.employee_id:
            raise ValueError("Employee ID is required")
        if self.day_of_week is None or not 0 <= self.day_of_week <= 6:
            raise ValueError("Day of week must be between 0 and 6")
        if (self.start_time is None) != (self.end_time is None):
            raise ValueError("Start and end time must both be set or both be empty")
        if self.start_time is not None and self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date must not be before start date")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "employee_id": self.employee_id,
            "type": self.type.value,
            "day_of_week": self.day_of_week,
            "start_time": self.start_time.strftime("%H:%M") if self.start_time else None,
            "end_time": self.end_time.strftime("%H:%M") if self.end_time else None,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "note": self.note,
        }
