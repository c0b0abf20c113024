"""Employee management service."""
from sqlalchemy.orm import Session, joinedload
from typing import List, Optional
from datetime import datetime
import logging
import uuid

from shift_planner.exceptions import DuplicateEmailError, MissingFieldError, ResourceNotFoundError
from shift_planner.models.employee import Employee, DEFAULT_MAX_WEEKLY_HOURS
from shift_planner.models.user import User, UserRole


logger = logging.getLogger(__name__)


class EmployeeService:
    """Service for handling employee records and their identities."""

    def __init__(self, db: Session):
        """
        Initialize employee service.

        Args:
            db: Database session
        """
        self.db = db

    def list_employees(self, active: Optional[bool] = None) -> List[Employee]:
        """List non-deleted employees ordered by name."""
        query = self.db.query(Employee).join(User, Employee.user_id == User.id).options(
            joinedload(Employee.user)
        ).filter(Employee.deleted_at.is_(None))
        if active is not None:
            query = query.filter(Employee.is_active.is_(active))
        return query.order_by(User.name.asc()).all()

    def get_employee(self, employee_id: str) -> Employee:
        employee = self.db.query(Employee).filter(
            Employee.id == employee_id,
            Employee.deleted_at.is_(None)
        ).first()
        if not employee:
            raise ResourceNotFoundError("employee", employee_id)
        return employee

    def create_employee(
        self,
        email: str,
        name: str,
        role: UserRole = UserRole.EMPLOYEE,
        position: Optional[str] = None,
        department: Optional[str] = None,
        phone: Optional[str] = None,
        hourly_rate: Optional[float] = None,
        max_weekly_hours: Optional[int] = None
    ) -> Employee:
        """
        Create an employee together with its user identity.

        Raises:
            MissingFieldError: If email or name is empty
            DuplicateEmailError: If the email is already registered
        """
        if not email:
            raise MissingFieldError("email")
        if not name or not name.strip():
            raise MissingFieldError("name")

        if self.db.query(User).filter(User.email == email).first():
            raise DuplicateEmailError(email)

        user = User(
            id=str(uuid.uuid4()),
            email=email,
            name=name.strip(),
            role=role,
            created_at=datetime.utcnow(),
            updated_at=datetime.utcnow()
        )
        user.validate()

        employee = Employee(
            id=str(uuid.uuid4()),
            user_id=user.id,
            position=position,
            department=department,
            phone=phone,
            hourly_rate=hourly_rate,
            max_weekly_hours=max_weekly_hours or DEFAULT_MAX_WEEKLY_HOURS,
            is_active=True,
            created_at=datetime.utcnow(),
            updated_at=datetime.utcnow()
        )
        employee.validate()

        self.db.add_all([user, employee])
        self._commit()
        self.db.refresh(employee)

        logger.info(f"Employee created: {user.name} ({employee.id})")
        return employee

    def update_employee(self, employee_id: str, **changes) -> Employee:
        """
        Update an employee; ``name`` and ``role`` are applied to its user.

        Fields whose value is None are left unchanged.
        """
        employee = self.get_employee(employee_id)

        name = changes.pop("name", None)
        role = changes.pop("role", None)
        if name and name.strip():
            employee.user.name = name.strip()
        if role is not None:
            employee.user.role = role

        for field in ("position", "department", "phone", "hourly_rate", "max_weekly_hours", "is_active"):
            if changes.get(field) is not None:
                setattr(employee, field, changes[field])
        employee.updated_at = datetime.utcnow()
        employee.validate()

        self._commit()
        self.db.refresh(employee)

        logger.info(f"Employee updated: {employee_id}")
        return employee

    def soft_delete_employee(self, employee_id: str) -> None:
        employee = self.get_employee(employee_id)
        employee.deleted_at = datetime.utcnow()
        employee.is_active = False
        self._commit()

        logger.info(f"Employee soft deleted: {employee_id}")

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
