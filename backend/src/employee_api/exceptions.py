"""Domain-specific exceptions for the employee API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses. The error handlers in
``employee_api.middleware.error_handler`` map each family to a status code.
"""

from typing import Any


class EmployeeAPIError(Exception):
    """Base exception for all employee API errors."""

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class ResourceNotFoundError(EmployeeAPIError):
    """Base class for resource not found errors."""

    pass


class EmployeeNotFoundError(ResourceNotFoundError):
    """Raised when an employee is absent or inactive."""

    def __init__(self, employee_id: int | None = None, message: str | None = None) -> None:
        if message is None:
            message = (
                f"Employee not found with id: {employee_id}"
                if employee_id is not None
                else "Employee not found"
            )
        details = {"employee_id": employee_id} if employee_id is not None else {}
        super().__init__(message, details)


class ManagerNotFoundError(ResourceNotFoundError):
    """Raised when a manager reference does not resolve to an active employee."""

    def __init__(self, manager_id: int, inactive: bool = False) -> None:
        if inactive:
            message = f"Manager with id {manager_id} is inactive"
        else:
            message = f"Manager not found with id: {manager_id}"
        super().__init__(message, {"manager_id": manager_id})


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class DuplicateResourceError(EmployeeAPIError):
    """Base class for resource conflict errors."""

    pass


class EmailAlreadyExistsError(DuplicateResourceError):
    """Raised when an email is already owned by another employee."""

    def __init__(self, email: str | None = None) -> None:
        message = (
            f"Employee with email {email} already exists"
            if email
            else "Employee with this email already exists"
        )
        details = {"email": email} if email else {}
        super().__init__(message, details)


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(EmployeeAPIError):
    """Base class for validation errors."""

    pass


class InvalidSortFieldError(ValidationError):
    """Raised when a sort field does not name a stored employee column."""

    def __init__(self, sort_by: str) -> None:
        super().__init__(f"Invalid sort field: {sort_by}", {"sort_by": sort_by})


class InvalidManagerError(ValidationError):
    """Raised when an employee would become their own manager."""

    def __init__(self, employee_id: int) -> None:
        super().__init__(
            "Employee cannot be their own manager",
            {"employee_id": employee_id},
        )


class InvalidRangeError(ValidationError):
    """Raised when a range filter has its lower bound above its upper bound."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Invalid {field} range: lower bound exceeds upper bound", {"field": field})
