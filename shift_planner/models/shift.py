"""Shift model for timed work assignments."""
from sqlalchemy import Column, String, Enum, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from typing import Any, Dict
import enum
from shift_planner.database import Base
from shift_planner.time_math import as_utc


class ShiftStatus(str, enum.Enum):
    """Shift status enumeration."""
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ACKNOWLEDGED = "ACKNOWLEDGED"
    CANCELLED = "CANCELLED"


class Shift(Base):
    """Shift model; start and end are stored as naive UTC instants."""

    __tablename__ = "shifts"

    id = Column(String(36), primary_key=True)
    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=False, index=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    status = Column(Enum(ShiftStatus), nullable=False, default=ShiftStatus.DRAFT, index=True)
    note = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index('ix_shifts_employee_start_end', 'employee_id', 'start_time', 'end_time'),
        CheckConstraint('end_time > start_time', name='ck_shifts_time_range'),
    )

    # Relationships
    employee = relationship("Employee", back_populates="shifts")

    def __repr__(self) -> str:
        return f"<Shift(id={self.id}, employee_id={self.employee_id}, start={self.start_time}, end={self.end_time})>"

    def validate(self) -> None:
        """Validate shift data."""
        if not self.id:
            raise ValueError("Shift ID is required")
        if not self.employee_id:
            raise ValueError("Employee ID is required")
        if not self.start_time or not self.end_time:
            raise ValueError("Start and end time are required")
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "employee_id": self.employee_id,
            "start_time": as_utc(self.start_time).isoformat(),
            "end_time": as_utc(self.end_time).isoformat(),
            "status": self.status.value,
            "note": self.note,
        }
