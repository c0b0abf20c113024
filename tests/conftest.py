"""Pytest configuration, fixtures and record factories for tests."""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator, Optional
from contextlib import contextmanager
from datetime import datetime, time
from dateutil import tz as dateutil_tz
import uuid

from shift_planner.database import Base
from shift_planner.models import (
    AvailabilityBlock,
    AvailabilityType,
    Employee,
    Shift,
    ShiftStatus,
    User,
    UserRole,
)
from shift_planner.time_math import to_storage


# Fixed UTC+3 zone without DST, used by every test
BUSINESS_TZ = dateutil_tz.gettz("Europe/Istanbul")


def local(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    """Aware datetime in the business timezone."""
    return datetime(year, month, day, hour, minute, tzinfo=BUSINESS_TZ)


def make_employee(
    db: Session,
    name: str = "Worker",
    max_weekly_hours: int = 45,
    hourly_rate: Optional[float] = None,
    role: UserRole = UserRole.EMPLOYEE,
    position: Optional[str] = None,
    is_active: bool = True
) -> Employee:
    """Create and commit a user with its employee record."""
    user = User(
        id=str(uuid.uuid4()),
        email=f"{uuid.uuid4().hex[:12]}@example.com",
        name=name,
        role=role
    )
    employee = Employee(
        id=str(uuid.uuid4()),
        user_id=user.id,
        position=position,
        hourly_rate=hourly_rate,
        max_weekly_hours=max_weekly_hours,
        is_active=is_active
    )
    db.add_all([user, employee])
    db.commit()
    db.refresh(employee)
    return employee


def make_user(db: Session, name: str = "Manager", role: UserRole = UserRole.MANAGER) -> User:
    """Create and commit a user without an employee record."""
    user = User(
        id=str(uuid.uuid4()),
        email=f"{uuid.uuid4().hex[:12]}@example.com",
        name=name,
        role=role
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_shift(
    db: Session,
    employee: Employee,
    start: datetime,
    end: datetime,
    status: ShiftStatus = ShiftStatus.DRAFT
) -> Shift:
    """Store a shift directly, bypassing validation."""
    shift = Shift(
        id=str(uuid.uuid4()),
        employee_id=employee.id,
        start_time=to_storage(start),
        end_time=to_storage(end),
        status=status
    )
    db.add(shift)
    db.commit()
    db.refresh(shift)
    return shift


def make_block(
    db: Session,
    employee: Employee,
    day_of_week: int,
    start: Optional[time] = None,
    end: Optional[time] = None,
    type: AvailabilityType = AvailabilityType.UNAVAILABLE
) -> AvailabilityBlock:
    """Store an availability block directly."""
    block = AvailabilityBlock(
        id=str(uuid.uuid4()),
        employee_id=employee.id,
        type=type,
        day_of_week=day_of_week,
        start_time=start,
        end_time=end
    )
    db.add(block)
    db.commit()
    db.refresh(block)
    return block


@pytest.fixture(scope="function")
def test_db() -> Generator[Session, None, None]:
    """
    Create a test database session for each test.
    Uses an in-memory SQLite database for fast testing.
    """
    # Create in-memory SQLite database for testing
    engine = create_engine("sqlite:///:memory:", echo=False)

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@contextmanager
def get_test_db_session():
    """
    Context manager for creating test database sessions.
    Used for property-based tests where fixtures don't work well.
    """
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(bind=engine)

    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
