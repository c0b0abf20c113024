"""Employee routes."""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import Optional

from shift_planner.api.deps import get_current_manager, get_current_user
from shift_planner.database import get_db
from shift_planner.models.user import User
from shift_planner.schemas import EmployeeCreate, EmployeeUpdate
from shift_planner.services.employee_service import EmployeeService


router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("")
async def list_employees(
    active: Optional[bool] = Query(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    employees = EmployeeService(db).list_employees(active)
    return JSONResponse(content=[employee.to_dict() for employee in employees])


@router.get("/{employee_id}")
async def get_employee(
    employee_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    employee = EmployeeService(db).get_employee(employee_id)
    return JSONResponse(content=employee.to_dict())


@router.post("", status_code=201)
async def create_employee(
    payload: EmployeeCreate,
    manager: User = Depends(get_current_manager),
    db: Session = Depends(get_db)
):
    employee = EmployeeService(db).create_employee(**payload.model_dump())
    return JSONResponse(status_code=201, content=employee.to_dict())


@router.patch("/{employee_id}")
async def update_employee(
    employee_id: str,
    payload: EmployeeUpdate,
    manager: User = Depends(get_current_manager),
    db: Session = Depends(get_db)
):
    employee = EmployeeService(db).update_employee(employee_id, **payload.model_dump())
    return JSONResponse(content=employee.to_dict())


@router.delete("/{employee_id}")
async def delete_employee(
    employee_id: str,
    manager: User = Depends(get_current_manager),
    db: Session = Depends(get_db)
):
    EmployeeService(db).soft_delete_employee(employee_id)
    return JSONResponse(content={"success": True})
