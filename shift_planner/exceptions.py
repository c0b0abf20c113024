"""Custom exceptions and error handling for the shift planner.

Every domain error carries a machine-readable code which the HTTP layer
maps to a transport status without merging distinct codes together.
"""
from typing import Optional, Dict, Any
from datetime import date


class ValidationError(Exception):
    """Base class for domain errors with user-friendly messages."""

    def __init__(self, message: str, error_code: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize validation error.

        Args:
            message: User-friendly error message
            error_code: Machine-readable error code
            details: Optional additional error details
        """
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary format for API responses.

        Returns:
            Dictionary with error information
        """
        return {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details
            }
        }


class UnauthorizedError(ValidationError):
    """Error raised when the caller cannot be identified."""

    def __init__(self):
        super().__init__(
            message="Authentication required.",
            error_code="UNAUTHORIZED"
        )


class ShiftRejectedError(ValidationError):
    """Error raised when a proposed shift fails validation.

    The error code is the code of the first blocking validation error
    (INVALID_TIME_RANGE, SHIFT_OVERLAP or AVAILABILITY_CONFLICT).
    """

    def __init__(self, validation):
        """
        Initialize shift rejected error.

        Args:
            validation: The failed ShiftValidationResult
        """
        issue = validation.errors[0]
        self.validation = validation
        super().__init__(
            message=issue.message,
            error_code=issue.code,
            details=issue.details
        )


class InvalidTimeRangeError(ValidationError):
    """Error raised when an end time is not after its start time."""

    def __init__(self, start: Any, end: Any):
        """
        Initialize invalid time range error.

        Args:
            start: Start of the range
            end: End of the range
        """
        super().__init__(
            message="End time must be after start time.",
            error_code="INVALID_TIME_RANGE",
            details={
                "start_time": str(start),
                "end_time": str(end)
            }
        )


class MissingFieldError(ValidationError):
    """Error raised when a required field is missing."""

    def __init__(self, field_name: str):
        """
        Initialize missing field error.

        Args:
            field_name: Name of the missing field
        """
        super().__init__(
            message=f"{field_name} is required.",
            error_code="MISSING_FIELD",
            details={"field_name": field_name}
        )


class ResourceNotFoundError(ValidationError):
    """Error raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str):
        """
        Initialize resource not found error.

        Args:
            resource_type: Type of resource (e.g., "shift", "employee", "availability")
            resource_id: ID of the resource
        """
        super().__init__(
            message=f"{resource_type.capitalize()} not found (ID: {resource_id}).",
            error_code=f"{resource_type.upper()}_NOT_FOUND",
            details={
                "resource_type": resource_type,
                "resource_id": resource_id
            }
        )


class InvalidStatusTransitionError(ValidationError):
    """Error raised when attempting an invalid status transition."""

    def __init__(self, current_status: str, attempted_action: str):
        """
        Initialize invalid status transition error.

        Args:
            current_status: Current status of the shift
            attempted_action: Action that was attempted (e.g., "acknowledge", "update")
        """
        super().__init__(
            message=f"Cannot {attempted_action} a shift with status {current_status}.",
            error_code="INVALID_STATUS_TRANSITION",
            details={
                "current_status": current_status,
                "attempted_action": attempted_action
            }
        )


class NotYourShiftError(ValidationError):
    """Error raised when an employee acts on another employee's shift."""

    def __init__(self, shift_id: str, employee_id: str):
        super().__init__(
            message="This shift does not belong to you.",
            error_code="NOT_YOUR_SHIFT",
            details={
                "shift_id": shift_id,
                "employee_id": employee_id
            }
        )


class PermissionDeniedError(ValidationError):
    """Error raised when the acting user lacks the required role."""

    def __init__(self, action: str):
        super().__init__(
            message=f"You are not allowed to {action}.",
            error_code="FORBIDDEN",
            details={"action": action}
        )


class NoShiftsToCopyError(ValidationError):
    """Error raised when the source week of a copy has no shifts."""

    def __init__(self, source_week_start: date):
        super().__init__(
            message="No shifts found to copy in the source week.",
            error_code="NO_SHIFTS_TO_COPY",
            details={"source_week_start": source_week_start.isoformat()}
        )


class DuplicateEmailError(ValidationError):
    """Error raised when an email address is already registered."""

    def __init__(self, email: str):
        super().__init__(
            message="This email address is already registered.",
            error_code="EMAIL_EXISTS",
            details={"email": email}
        )


def format_error_for_api(error: ValidationError) -> Dict[str, Any]:
    """
    Format validation error for API response.

    Args:
        error: Validation error to format

    Returns:
        Dictionary suitable for JSON API response
    """
    return error.to_dict()
