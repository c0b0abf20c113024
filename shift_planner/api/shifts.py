"""Shift routes."""
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date

from shift_planner.api.deps import get_current_manager, get_current_user
from shift_planner.database import get_db
from shift_planner.exceptions import PermissionDeniedError
from shift_planner.models.shift import ShiftStatus
from shift_planner.models.user import User
from shift_planner.schemas import BulkShiftCreate, CopyWeekRequest, ShiftCreate, ShiftUpdate
from shift_planner.services.shift_service import ShiftService


router = APIRouter(prefix="/shifts", tags=["shifts"])


@router.get("")
async def list_shifts(
    employee_id: Optional[str] = Query(None),
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    status: Optional[ShiftStatus] = Query(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List shifts filtered by employee, local date range and status.
    """
    service = ShiftService(db)
    try:
        shifts = service.list_shifts(employee_id, start, end, status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return JSONResponse(content=[shift.to_dict() for shift in shifts])


@router.get("/{shift_id}")
async def get_shift(
    shift_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    shift = ShiftService(db).get_shift(shift_id)
    return JSONResponse(content=shift.to_dict())


@router.post("", status_code=201)
async def create_shift(
    payload: ShiftCreate,
    manager: User = Depends(get_current_manager),
    db: Session = Depends(get_db)
):
    """
    Create a shift.

    Returns:
        Envelope with the created shift and any non-fatal warnings

    Errors:
        400 INVALID_TIME_RANGE, 404 EMPLOYEE_NOT_FOUND, 409 SHIFT_OVERLAP,
        422 AVAILABILITY_CONFLICT
    """
    result = ShiftService(db).create_shift(actor_id=manager.id, **payload.model_dump())
    return JSONResponse(status_code=201, content=result.to_dict())


@router.patch("/{shift_id}")
async def update_shift(
    shift_id: str,
    payload: ShiftUpdate,
    manager: User = Depends(get_current_manager),
    db: Session = Depends(get_db)
):
    """
    Update a shift; it is re-validated excluding itself.
    """
    result = ShiftService(db).update_shift(shift_id, actor_id=manager.id, **payload.model_dump())
    return JSONResponse(content=result.to_dict())


@router.delete("/{shift_id}")
async def cancel_shift(
    shift_id: str,
    manager: User = Depends(get_current_manager),
    db: Session = Depends(get_db)
):
    """Cancel a shift (soft delete)."""
    shift = ShiftService(db).cancel_shift(shift_id, actor_id=manager.id)
    return JSONResponse(content={"success": True, "data": shift.to_dict()})


@router.post("/{shift_id}/acknowledge")
async def acknowledge_shift(
    shift_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Mark a published shift as seen by its owner."""
    if user.employee is None:
        raise PermissionDeniedError("acknowledge shifts")

    shift = ShiftService(db).acknowledge_shift(shift_id, user.employee.id, actor_id=user.id)
    return JSONResponse(content={"success": True, "data": shift.to_dict()})


@router.post("/copy-week")
async def copy_week(
    payload: CopyWeekRequest,
    manager: User = Depends(get_current_manager),
    db: Session = Depends(get_db)
):
    result = ShiftService(db).copy_week(
        payload.source_week_start,
        payload.target_week_start,
        actor_id=manager.id
    )
    return JSONResponse(content=result)


@router.post("/bulk")
async def bulk_create(
    payload: BulkShiftCreate,
    manager: User = Depends(get_current_manager),
    db: Session = Depends(get_db)
):
    items = [item.model_dump() for item in payload.shifts]
    result = ShiftService(db).bulk_create(items, actor_id=manager.id)
    return JSONResponse(content=result)
