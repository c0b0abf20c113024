"""Main application entry point."""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import logging

from shift_planner.api import availability_router, employees_router, schedule_router, shifts_router
from shift_planner.api.errors import validation_error_response
from shift_planner.config import settings
from shift_planner.database import init_db
from shift_planner.exceptions import ValidationError


logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title="Shift Planner",
    description="Shift validation, weekly schedules and labour cost reports",
    version="1.0.0",
    debug=settings.debug
)

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

for router in (shifts_router, availability_router, employees_router, schedule_router):
    app.include_router(router, prefix=settings.api_prefix)


@app.exception_handler(ValidationError)
async def handle_validation_error(request: Request, exc: ValidationError):
    """Map domain errors to their HTTP status with the error envelope."""
    logger.info(f"{request.method} {request.url.path} rejected: {exc.error_code}")
    return validation_error_response(exc)


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    logger.info("Application starting up...")
    init_db()
    logger.info(f"Business timezone: {settings.business_timezone}")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "message": "Shift Planner"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    import os
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=port,
        reload=settings.debug
    )
