"""Script to create an admin user with an employee record."""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from shift_planner.database import SessionLocal, init_db
from shift_planner.exceptions import ValidationError
from shift_planner.models.user import UserRole
from shift_planner.services.employee_service import EmployeeService


def create_admin(email: str, name: str):
    """
    Create an admin user.

    Args:
        email: Admin email address
        name: Admin display name
    """
    init_db()
    db = SessionLocal()
    try:
        employee = EmployeeService(db).create_employee(email=email, name=name, role=UserRole.ADMIN)
        print("Admin user created successfully!")
        print(f"Name: {employee.name}")
        print(f"User ID: {employee.user_id}")
    except ValidationError as e:
        print(f"Error creating admin: {e.message}")
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print("Usage: python scripts/create_admin.py <email> <name>")
        sys.exit(1)

    create_admin(sys.argv[1], sys.argv[2])
