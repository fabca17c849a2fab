"""Data Transfer Objects package."""

from employee_api.models.dto.common import ApiResponse, Page
from employee_api.models.dto.employee import (
    EmployeeRequest,
    EmployeeResponse,
    EmployeeSearchRequest,
)

__all__ = [
    "ApiResponse",
    "Page",
    "EmployeeRequest",
    "EmployeeResponse",
    "EmployeeSearchRequest",
]
