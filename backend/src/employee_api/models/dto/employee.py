"""Employee DTOs."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import EmailStr, Field, field_validator

from employee_api.constants.validation import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SEARCH_SORT_COLUMN,
    DEFAULT_SORT_DIRECTION,
    MAX_DEPARTMENT_LENGTH,
    MAX_EMAIL_LENGTH,
    MAX_EMPLOYEE_ID,
    MAX_NAME_LENGTH,
    MAX_PAGE_SIZE,
    MAX_PHONE_LENGTH,
    MAX_POSITION_LENGTH,
    MAX_SEARCH_LENGTH,
    MAX_SORT_BY_LENGTH,
    SALARY_DECIMAL_PLACES,
    SALARY_MAX_DIGITS,
)
from employee_api.models.dto.common import CamelModel


class EmployeeResponse(CamelModel):
    """Employee response DTO."""

    id: int
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone: str | None = None
    department: str
    position: str
    salary: Decimal | None = None
    hire_date: date
    manager_id: int | None = None
    manager_name: str | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class EmployeeRequest(CamelModel):
    """DTO for creating or updating an employee.

    Updates replace every field wholesale, except hire_date and is_active
    which are only overwritten when provided.
    """

    first_name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH, description="First name")
    last_name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH, description="Last name")
    email: EmailStr = Field(description="Email address")
    phone: str | None = Field(default=None, max_length=MAX_PHONE_LENGTH, description="Phone number")
    department: str = Field(min_length=1, max_length=MAX_DEPARTMENT_LENGTH, description="Department")
    position: str = Field(min_length=1, max_length=MAX_POSITION_LENGTH, description="Job position")
    salary: Decimal | None = Field(
        default=None,
        gt=0,
        max_digits=SALARY_MAX_DIGITS,
        decimal_places=SALARY_DECIMAL_PLACES,
        description="Salary, positive with at most 2 decimal places",
    )
    hire_date: date | None = Field(default=None, description="Hire date, defaults to today")
    manager_id: int | None = Field(
        default=None, ge=1, le=MAX_EMPLOYEE_ID, description="ID of the employee's manager"
    )
    is_active: bool | None = Field(default=None, description="Active flag, defaults to true")

    @field_validator("first_name", "last_name", "department", "position")
    @classmethod
    def not_blank(cls, v: str) -> str:
        """Reject whitespace-only values."""
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def email_length(cls, v: str) -> str:
        """Enforce the stored column length."""
        if len(v) > MAX_EMAIL_LENGTH:
            raise ValueError(f"must not exceed {MAX_EMAIL_LENGTH} characters")
        return v

    @field_validator("phone")
    @classmethod
    def empty_phone_to_none(cls, v: str | None) -> str | None:
        """Treat an empty phone number as absent."""
        if v is None:
            return None
        return v.strip() or None


class EmployeeSearchRequest(CamelModel):
    """Search criteria with pagination and sorting."""

    search_term: str | None = Field(default=None, max_length=MAX_SEARCH_LENGTH)
    department: str | None = Field(default=None, max_length=MAX_DEPARTMENT_LENGTH)
    position: str | None = Field(default=None, max_length=MAX_POSITION_LENGTH)
    page: int = Field(default=0, ge=0)
    size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0, le=MAX_PAGE_SIZE)
    sort_by: str = Field(default=DEFAULT_SEARCH_SORT_COLUMN, max_length=MAX_SORT_BY_LENGTH)
    sort_direction: str = Field(default=DEFAULT_SORT_DIRECTION, max_length=4)
