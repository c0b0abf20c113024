"""Availability block routes."""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import Optional

from shift_planner.api.deps import get_current_user
from shift_planner.database import get_db
from shift_planner.exceptions import MissingFieldError, PermissionDeniedError
from shift_planner.models.user import User
from shift_planner.schemas import AvailabilityCreate
from shift_planner.services.availability_service import AvailabilityService


router = APIRouter(prefix="/availability", tags=["availability"])


@router.get("")
async def list_availability(
    employee_id: Optional[str] = Query(None),
    day_of_week: Optional[int] = Query(None, ge=0, le=6),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    blocks = AvailabilityService(db).list_blocks(employee_id, day_of_week)
    return JSONResponse(content=[block.to_dict() for block in blocks])


@router.post("", status_code=201)
async def create_availability(
    payload: AvailabilityCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a block for yourself, or for any employee as a manager or admin.
    """
    own_employee_id = user.employee.id if user.employee else None
    employee_id = payload.employee_id or own_employee_id
    if not employee_id:
        raise MissingFieldError("employee_id")
    if employee_id != own_employee_id and not user.role.can_manage_shifts:
        raise PermissionDeniedError("manage another employee's availability")

    block = AvailabilityService(db).create_block(
        employee_id=employee_id,
        **payload.model_dump(exclude={"employee_id"})
    )
    return JSONResponse(status_code=201, content=block.to_dict())


@router.delete("/{block_id}")
async def delete_availability(
    block_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    AvailabilityService(db).delete_block(block_id, user)
    return JSONResponse(content={"success": True})
