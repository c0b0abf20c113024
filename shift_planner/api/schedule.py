"""Weekly schedule and report routes."""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from datetime import date

from shift_planner.api.deps import get_current_manager, get_current_user
from shift_planner.database import get_db
from shift_planner.models.user import User
from shift_planner.services.report_service import ReportService
from shift_planner.services.schedule_service import ScheduleService


router = APIRouter(tags=["schedule"])


@router.get("/schedule/weekly")
async def weekly_schedule(
    week_start: date = Query(..., description="Any date in the week; anchored to Monday"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return JSONResponse(content=ScheduleService(db).get_weekly_schedule(week_start))


@router.get("/schedule/print")
async def print_schedule(
    week_start: date = Query(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return JSONResponse(content=ScheduleService(db).get_print_view(week_start))


@router.get("/reports/weekly-hours")
async def weekly_hours_report(
    week_start: date = Query(...),
    manager: User = Depends(get_current_manager),
    db: Session = Depends(get_db)
):
    return JSONResponse(content=ReportService(db).get_weekly_hours_report(week_start))
