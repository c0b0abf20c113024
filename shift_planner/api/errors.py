"""Mapping of domain error codes to HTTP responses."""
from fastapi.responses import JSONResponse

from shift_planner.exceptions import ValidationError, format_error_for_api


ERROR_STATUS_CODES = {
    "INVALID_TIME_RANGE": 400,
    "MISSING_FIELD": 400,
    "NO_SHIFTS_TO_COPY": 400,
    "NOT_YOUR_SHIFT": 400,
    "UNAUTHORIZED": 401,
    "FORBIDDEN": 403,
    "SHIFT_OVERLAP": 409,
    "EMAIL_EXISTS": 409,
    "INVALID_STATUS_TRANSITION": 409,
    "AVAILABILITY_CONFLICT": 422,
}


def status_for_error(error: ValidationError) -> int:
    """HTTP status for a domain error; unknown codes are client errors."""
    if error.error_code.endswith("_NOT_FOUND"):
        return 404
    return ERROR_STATUS_CODES.get(error.error_code, 400)


def validation_error_response(error: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status_for_error(error),
        content=format_error_for_api(error)
    )
