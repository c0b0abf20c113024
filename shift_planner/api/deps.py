"""Request dependencies: database session and acting user."""
from fastapi import Depends, Header
from sqlalchemy.orm import Session
from typing import Optional

from shift_planner.database import get_db
from shift_planner.exceptions import PermissionDeniedError, UnauthorizedError
from shift_planner.models.user import User


def get_current_user(
    x_user_id: Optional[str] = Header(None),
    db: Session = Depends(get_db)
) -> User:
    """
    Resolve the acting user from the ``X-User-Id`` header.

    The header is set by the authentication gateway in front of this
    service after it has verified the caller.

    Raises:
        UnauthorizedError: If the header is missing or names no user
    """
    if not x_user_id:
        raise UnauthorizedError()

    user = db.query(User).filter(User.id == x_user_id).first()
    if not user:
        raise UnauthorizedError()

    return user


def get_current_manager(user: User = Depends(get_current_user)) -> User:
    """Require an admin or manager."""
    if not user.role.can_manage_shifts:
        raise PermissionDeniedError("manage shifts")
    return user
