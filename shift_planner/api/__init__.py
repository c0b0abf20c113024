"""HTTP API routers."""
from shift_planner.api.shifts import router as shifts_router
from shift_planner.api.availability import router as availability_router
from shift_planner.api.employees import router as employees_router
from shift_planner.api.schedule import router as schedule_router

__all__ = [
    "shifts_router",
    "availability_router",
    "employees_router",
    "schedule_router",
]
