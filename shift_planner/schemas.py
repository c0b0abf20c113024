"""Request payload schemas for the HTTP API."""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import date, datetime, time

from shift_planner.config import settings
from shift_planner.models.availability import AvailabilityType
from shift_planner.models.shift import ShiftStatus
from shift_planner.models.user import UserRole


def localize_naive(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=settings.tz)


class ShiftCreate(BaseModel):
    employee_id: str = Field(..., min_length=1)
    start_time: datetime
    end_time: datetime
    note: Optional[str] = Field(None, max_length=500)
    force_override: bool = False
    status: Optional[ShiftStatus] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def assume_business_timezone(cls, value: datetime) -> datetime:
        """Times without an offset are wall-clock times in the business timezone."""
        return localize_naive(value)


class ShiftUpdate(BaseModel):
    employee_id: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    note: Optional[str] = Field(None, max_length=500)
    force_override: bool = False
    status: Optional[ShiftStatus] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def assume_business_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return localize_naive(value)


class CopyWeekRequest(BaseModel):
    source_week_start: date
    target_week_start: date


class BulkShiftCreate(BaseModel):
    shifts: List[ShiftCreate]


class AvailabilityCreate(BaseModel):
    employee_id: Optional[str] = None
    type: AvailabilityType = AvailabilityType.UNAVAILABLE
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday ... 6 = Saturday")
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    note: Optional[str] = Field(None, max_length=500)

    @field_validator("start_time", "end_time")
    @classmethod
    def strip_seconds(cls, value: Optional[time]) -> Optional[time]:
        if value is None:
            return value
        return value.replace(second=0, microsecond=0, tzinfo=None)


class EmployeeCreate(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    role: UserRole = UserRole.EMPLOYEE
    position: Optional[str] = None
    department: Optional[str] = None
    phone: Optional[str] = None
    hourly_rate: Optional[float] = Field(None, ge=0)
    max_weekly_hours: Optional[int] = Field(None, ge=1, le=168)


class EmployeeUpdate(BaseModel):
    name: Optional[str] = None
    role: Optional[UserRole] = None
    position: Optional[str] = None
    department: Optional[str] = None
    phone: Optional[str] = None
    hourly_rate: Optional[float] = Field(None, ge=0)
    max_weekly_hours: Optional[int] = Field(None, ge=1, le=168)
    is_active: Optional[bool] = None
