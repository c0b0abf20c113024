"""Employee model holding scheduling and payroll attributes."""
from sqlalchemy import Column, String, Integer, Numeric, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from typing import Any, Dict
from shift_planner.database import Base


DEFAULT_MAX_WEEKLY_HOURS = 45


class Employee(Base):
    """Employee model; one-to-one with a User identity."""

    __tablename__ = "employees"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    position = Column(String(100), nullable=True)
    department = Column(String(100), nullable=True)
    phone = Column(String(50), nullable=True)
    hourly_rate = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    max_weekly_hours = Column(Integer, nullable=False, default=DEFAULT_MAX_WEEKLY_HOURS)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    deleted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="employee")
    shifts = relationship("Shift", back_populates="employee")
    availability_blocks = relationship("AvailabilityBlock", back_populates="employee")

    @property
    def name(self) -> str:
        return self.user.name if self.user else ""

    def __repr__(self) -> str:
        return f"<Employee(id={self.id}, user_id={self.user_id}, position={self.position})>"

    def validate(self) -> None:
        """Validate employee data."""
        if not self.id:
            raise ValueError("Employee ID is required")
        if not self.user_id:
            raise ValueError("User ID is required")
        if self.max_weekly_hours is not None and not 1 <= self.max_weekly_hours <= 168:
            raise ValueError("Max weekly hours must be between 1 and 168")
        if self.hourly_rate is not None and self.hourly_rate < 0:
            raise ValueError("Hourly rate cannot be negative")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "email": self.user.email if self.user else None,
            "role": self.user.role.value if self.user else None,
            "position": self.position,
            "department": self.department,
            "phone": self.phone,
            "hourly_rate": self.hourly_rate,
            "max_weekly_hours": self.max_weekly_hours,
            "is_active": self.is_active,
        }
