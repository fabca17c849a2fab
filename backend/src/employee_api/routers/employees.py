"""Employees router - CRUD, listing and search over employee records."""

from datetime import date
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request, status

from employee_api.constants.validation import (
    DEFAULT_LIST_SORT_COLUMN,
    DEFAULT_PAGE_SIZE,
    MAX_DEPARTMENT_LENGTH,
    MAX_EMAIL_LENGTH,
    MAX_EMPLOYEE_ID,
    MAX_PAGE_SIZE,
    MAX_POSITION_LENGTH,
    MAX_SEARCH_LENGTH,
    MAX_SORT_BY_LENGTH,
    SALARY_MAX_DIGITS,
)
from employee_api.dependencies import get_employee_service
from employee_api.models.dto.common import ApiResponse, Page
from employee_api.models.dto.employee import (
    EmployeeRequest,
    EmployeeResponse,
    EmployeeSearchRequest,
)
from employee_api.security.rate_limit import API_DEFAULT_LIMIT, WRITE_OPERATION_LIMIT, limiter
from employee_api.services.employee_service import EmployeeService

router = APIRouter()

Service = Annotated[EmployeeService, Depends(get_employee_service)]
EmployeeId = Annotated[int, Path(ge=1, le=MAX_EMPLOYEE_ID, description="Employee ID")]


# Static paths are registered before /{employee_id} so they are never
# captured by the ID route.


@router.get("", response_model=ApiResponse[list[EmployeeResponse]])
@limiter.limit(API_DEFAULT_LIMIT)
async def list_employees(
    request: Request,
    employee_service: Service,
) -> ApiResponse[list[EmployeeResponse]]:
    """List all active employees."""
    employees = await employee_service.list_all()
    return ApiResponse.ok(employees, "Employees retrieved successfully", count=len(employees))


@router.get("/health", response_model=ApiResponse[str])
async def health_check() -> ApiResponse[str]:
    """Liveness probe for the employee API."""
    return ApiResponse.ok("OK", "Employee API is healthy")


@router.get("/paginated", response_model=ApiResponse[Page[EmployeeResponse]])
@limiter.limit(API_DEFAULT_LIMIT)
async def list_employees_paginated(
    request: Request,
    employee_service: Service,
    page: int = Query(default=0, ge=0),
    size: int = Query(default=DEFAULT_PAGE_SIZE, gt=0, le=MAX_PAGE_SIZE),
    sort_by: str = Query(default=DEFAULT_LIST_SORT_COLUMN, alias="sortBy", max_length=MAX_SORT_BY_LENGTH),
    sort_direction: str = Query(default="asc", alias="sortDirection", max_length=4),
) -> ApiResponse[Page[EmployeeResponse]]:
    """List active employees one page at a time."""
    result = await employee_service.list_page(
        page=page,
        size=size,
        sort_by=sort_by,
        sort_direction=sort_direction,
    )
    return ApiResponse.ok(result, "Employees retrieved successfully", count=len(result.items))


@router.post("/search", response_model=ApiResponse[Page[EmployeeResponse]])
@limiter.limit(API_DEFAULT_LIMIT)
async def search_employees(
    request: Request,
    criteria: EmployeeSearchRequest,
    employee_service: Service,
) -> ApiResponse[Page[EmployeeResponse]]:
    """Search active employees by free text, department and position."""
    result = await employee_service.search(criteria)
    return ApiResponse.ok(result, "Employees search completed successfully", count=len(result.items))


@router.get("/search/name", response_model=ApiResponse[list[EmployeeResponse]])
@limiter.limit(API_DEFAULT_LIMIT)
async def search_employees_by_name(
    request: Request,
    employee_service: Service,
    q: str = Query(min_length=1, max_length=MAX_SEARCH_LENGTH),
) -> ApiResponse[list[EmployeeResponse]]:
    """Search active employees by first, last or full name."""
    employees = await employee_service.search_by_name(q)
    return ApiResponse.ok(employees, "Employees search completed successfully", count=len(employees))


@router.get("/departments", response_model=ApiResponse[list[str]])
@limiter.limit(API_DEFAULT_LIMIT)
async def list_departments(
    request: Request,
    employee_service: Service,
) -> ApiResponse[list[str]]:
    """Get all distinct departments of active employees."""
    departments = await employee_service.get_departments()
    return ApiResponse.ok(departments, "Departments retrieved successfully", count=len(departments))


@router.get("/departments/counts", response_model=ApiResponse[dict[str, int]])
@limiter.limit(API_DEFAULT_LIMIT)
async def count_by_department(
    request: Request,
    employee_service: Service,
) -> ApiResponse[dict[str, int]]:
    """Get the active headcount of every department."""
    counts = await employee_service.get_department_counts()
    return ApiResponse.ok(counts, "Department counts retrieved successfully", count=len(counts))


@router.get("/positions", response_model=ApiResponse[list[str]])
@limiter.limit(API_DEFAULT_LIMIT)
async def list_positions(
    request: Request,
    employee_service: Service,
) -> ApiResponse[list[str]]:
    """Get all distinct positions of active employees."""
    positions = await employee_service.get_positions()
    return ApiResponse.ok(positions, "Positions retrieved successfully", count=len(positions))


@router.get("/department/{department}", response_model=ApiResponse[list[EmployeeResponse]])
@limiter.limit(API_DEFAULT_LIMIT)
async def get_employees_by_department(
    request: Request,
    employee_service: Service,
    department: str = Path(min_length=1, max_length=MAX_DEPARTMENT_LENGTH),
) -> ApiResponse[list[EmployeeResponse]]:
    """Get active employees in a department."""
    employees = await employee_service.get_by_department(department)
    return ApiResponse.ok(
        employees,
        f"Employees retrieved successfully for department: {department}",
        count=len(employees),
    )


@router.get("/position/{position}", response_model=ApiResponse[list[EmployeeResponse]])
@limiter.limit(API_DEFAULT_LIMIT)
async def get_employees_by_position(
    request: Request,
    employee_service: Service,
    position: str = Path(min_length=1, max_length=MAX_POSITION_LENGTH),
) -> ApiResponse[list[EmployeeResponse]]:
    """Get active employees holding a position."""
    employees = await employee_service.get_by_position(position)
    return ApiResponse.ok(
        employees,
        f"Employees retrieved successfully for position: {position}",
        count=len(employees),
    )


@router.get("/manager/{manager_id}", response_model=ApiResponse[list[EmployeeResponse]])
@limiter.limit(API_DEFAULT_LIMIT)
async def get_employees_by_manager(
    request: Request,
    manager_id: EmployeeId,
    employee_service: Service,
) -> ApiResponse[list[EmployeeResponse]]:
    """Get the active direct reports of an active manager."""
    employees = await employee_service.get_by_manager(manager_id)
    return ApiResponse.ok(
        employees,
        f"Employees retrieved successfully for manager: {manager_id}",
        count=len(employees),
    )


@router.get("/top-level", response_model=ApiResponse[list[EmployeeResponse]])
@limiter.limit(API_DEFAULT_LIMIT)
async def get_top_level_employees(
    request: Request,
    employee_service: Service,
) -> ApiResponse[list[EmployeeResponse]]:
    """Get active employees without a manager."""
    employees = await employee_service.get_top_level()
    return ApiResponse.ok(employees, "Top-level employees retrieved successfully", count=len(employees))


@router.get("/hired-between", response_model=ApiResponse[list[EmployeeResponse]])
@limiter.limit(API_DEFAULT_LIMIT)
async def get_employees_hired_between(
    request: Request,
    employee_service: Service,
    start_date: date = Query(alias="startDate"),
    end_date: date = Query(alias="endDate"),
) -> ApiResponse[list[EmployeeResponse]]:
    """Get active employees hired within an inclusive date range."""
    employees = await employee_service.get_hired_between(start_date, end_date)
    return ApiResponse.ok(employees, "Employees retrieved successfully", count=len(employees))


@router.get("/salary-range", response_model=ApiResponse[list[EmployeeResponse]])
@limiter.limit(API_DEFAULT_LIMIT)
async def get_employees_by_salary_range(
    request: Request,
    employee_service: Service,
    min_salary: Decimal = Query(alias="minSalary", ge=0, max_digits=SALARY_MAX_DIGITS),
    max_salary: Decimal = Query(alias="maxSalary", ge=0, max_digits=SALARY_MAX_DIGITS),
) -> ApiResponse[list[EmployeeResponse]]:
    """Get active employees within an inclusive salary range."""
    employees = await employee_service.get_by_salary_range(min_salary, max_salary)
    return ApiResponse.ok(employees, "Employees retrieved successfully", count=len(employees))


@router.get("/email-exists", response_model=ApiResponse[bool])
@limiter.limit(API_DEFAULT_LIMIT)
async def check_email_exists(
    request: Request,
    employee_service: Service,
    email: str = Query(min_length=1, max_length=MAX_EMAIL_LENGTH),
    exclude_id: int | None = Query(default=None, alias="excludeId", ge=1, le=MAX_EMPLOYEE_ID),
) -> ApiResponse[bool]:
    """Check whether an email is already taken, including by inactive employees."""
    exists = await employee_service.email_exists(email, excluding_id=exclude_id)
    return ApiResponse.ok(exists, "Email is taken" if exists else "Email is available")


@router.get("/{employee_id}", response_model=ApiResponse[EmployeeResponse])
@limiter.limit(API_DEFAULT_LIMIT)
async def get_employee(
    request: Request,
    employee_id: EmployeeId,
    employee_service: Service,
) -> ApiResponse[EmployeeResponse]:
    """Get a single active employee by ID."""
    employee = await employee_service.get_employee(employee_id)
    return ApiResponse.ok(employee, "Employee retrieved successfully")


@router.post("", response_model=ApiResponse[EmployeeResponse], status_code=status.HTTP_201_CREATED)
@limiter.limit(WRITE_OPERATION_LIMIT)
async def create_employee(
    request: Request,
    data: EmployeeRequest,
    employee_service: Service,
) -> ApiResponse[EmployeeResponse]:
    """Create a new employee."""
    employee = await employee_service.create_employee(data)
    return ApiResponse.ok(employee, "Employee created successfully")


@router.put("/{employee_id}", response_model=ApiResponse[EmployeeResponse])
@limiter.limit(WRITE_OPERATION_LIMIT)
async def update_employee(
    request: Request,
    employee_id: EmployeeId,
    data: EmployeeRequest,
    employee_service: Service,
) -> ApiResponse[EmployeeResponse]:
    """Replace an active employee's fields."""
    employee = await employee_service.update_employee(employee_id, data)
    return ApiResponse.ok(employee, "Employee updated successfully")


@router.delete("/{employee_id}", response_model=ApiResponse[None])
@limiter.limit(WRITE_OPERATION_LIMIT)
async def delete_employee(
    request: Request,
    employee_id: EmployeeId,
    employee_service: Service,
) -> ApiResponse[None]:
    """Soft delete an employee by marking it inactive."""
    await employee_service.soft_delete_employee(employee_id)
    return ApiResponse.ok(None, "Employee deleted successfully")
