"""Employee service orchestrating queries and invariant checks."""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.constants.validation import (
    DEFAULT_LIST_SORT_COLUMN,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_DIRECTION,
)
from employee_api.exceptions import InvalidRangeError
from employee_api.models.dto.common import Page
from employee_api.models.dto.employee import (
    EmployeeRequest,
    EmployeeResponse,
    EmployeeSearchRequest,
)
from employee_api.models.orm.employee import EmployeeORM
from employee_api.repositories.employee_repository import EmployeeRepository
from employee_api.services.employee_rules_service import EmployeeRulesService

logger = logging.getLogger(__name__)


class EmployeeService:
    """Service for employee operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.employee_repo = EmployeeRepository(session)
        self.rules = EmployeeRulesService(session, self.employee_repo)

    # -------------------------------------------------------------------------
    # Response building
    # -------------------------------------------------------------------------

    @staticmethod
    def _build_employee_response(
        employee: EmployeeORM,
        manager_name: str | None = None,
    ) -> EmployeeResponse:
        """Build EmployeeResponse DTO from an employee ORM object.

        Args:
            employee: Employee ORM object
            manager_name: Resolved display name of the manager, if any

        Returns:
            EmployeeResponse DTO
        """
        return EmployeeResponse(
            id=employee.id,
            first_name=employee.first_name,
            last_name=employee.last_name,
            full_name=employee.full_name,
            email=employee.email,
            phone=employee.phone,
            department=employee.department,
            position=employee.position,
            salary=employee.salary,
            hire_date=employee.hire_date,
            manager_id=employee.manager_id,
            manager_name=manager_name,
            is_active=employee.is_active,
            created_at=employee.created_at,
            updated_at=employee.updated_at,
        )

    async def _build_responses(self, employees: list[EmployeeORM]) -> list[EmployeeResponse]:
        """Build response DTOs, resolving manager names in one batch query.

        Manager names resolve whether or not the manager is still active.
        """
        manager_ids = [emp.manager_id for emp in employees if emp.manager_id is not None]
        managers_by_id = await self.employee_repo.get_by_ids(manager_ids)

        items = []
        for emp in employees:
            manager = managers_by_id.get(emp.manager_id) if emp.manager_id is not None else None
            items.append(
                self._build_employee_response(emp, manager.full_name if manager else None)
            )
        return items

    async def _build_single_response(self, employee: EmployeeORM) -> EmployeeResponse:
        responses = await self._build_responses([employee])
        return responses[0]

    async def _build_page(
        self,
        employees: list[EmployeeORM],
        total: int,
        page: int,
        size: int,
    ) -> Page[EmployeeResponse]:
        items = await self._build_responses(employees)
        return Page[EmployeeResponse].build(items=items, page=page, size=size, total=total)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def list_all(self) -> list[EmployeeResponse]:
        """Get all active employees, unpaginated."""
        logger.debug("Fetching all active employees")
        employees = await self.employee_repo.find_active()
        return await self._build_responses(employees)

    async def list_page(
        self,
        page: int = 0,
        size: int = DEFAULT_PAGE_SIZE,
        sort_by: str = DEFAULT_LIST_SORT_COLUMN,
        sort_direction: str = DEFAULT_SORT_DIRECTION,
    ) -> Page[EmployeeResponse]:
        """Get one page of active employees.

        Args:
            page: Zero-based page index
            size: Page size
            sort_by: Stored field to sort on
            sort_direction: ASC or DESC, case-insensitive

        Returns:
            Page of employees

        Raises:
            InvalidSortFieldError: If sort_by is not a stored field
        """
        logger.debug(
            f"Fetching employees page={page} size={size} "
            f"sort_by={sort_by} sort_direction={sort_direction}"
        )
        employees, total = await self.employee_repo.search(
            page=page,
            size=size,
            sort_by=sort_by,
            sort_direction=sort_direction,
        )
        return await self._build_page(employees, total, page, size)

    async def get_employee(self, employee_id: int) -> EmployeeResponse:
        """Get an active employee by ID.

        Raises:
            EmployeeNotFoundError: If absent or inactive
        """
        logger.debug(f"Fetching employee id={employee_id}")
        employee = await self.rules.require_active_by_id(employee_id)
        return await self._build_single_response(employee)

    async def search(self, criteria: EmployeeSearchRequest) -> Page[EmployeeResponse]:
        """Search active employees by free text, department and position.

        Args:
            criteria: Search, paging and sort parameters

        Returns:
            Page of matching employees

        Raises:
            InvalidSortFieldError: If criteria.sort_by is not a stored field
        """
        logger.debug(f"Searching employees with criteria: {criteria!r}")
        employees, total = await self.employee_repo.search(
            search_term=criteria.search_term,
            department=criteria.department,
            position=criteria.position,
            page=criteria.page,
            size=criteria.size,
            sort_by=criteria.sort_by,
            sort_direction=criteria.sort_direction,
        )
        return await self._build_page(employees, total, criteria.page, criteria.size)

    async def get_by_department(self, department: str) -> list[EmployeeResponse]:
        """Get active employees in a department."""
        logger.debug(f"Fetching employees by department: {department}")
        return await self._build_responses(await self.employee_repo.find_by_department(department))

    async def get_by_position(self, position: str) -> list[EmployeeResponse]:
        """Get active employees holding a position."""
        logger.debug(f"Fetching employees by position: {position}")
        return await self._build_responses(await self.employee_repo.find_by_position(position))

    async def get_by_manager(self, manager_id: int) -> list[EmployeeResponse]:
        """Get active direct reports of an active manager.

        Raises:
            ManagerNotFoundError: If the manager is absent or inactive
        """
        logger.debug(f"Fetching employees by manager id={manager_id}")
        manager = await self.rules.validate_manager(manager_id)
        employees = await self.employee_repo.find_by_manager(manager_id)
        return [self._build_employee_response(emp, manager.full_name) for emp in employees]

    async def get_top_level(self) -> list[EmployeeResponse]:
        """Get active employees with no manager."""
        return await self._build_responses(await self.employee_repo.find_top_level())

    async def get_hired_between(self, start_date: date, end_date: date) -> list[EmployeeResponse]:
        """Get active employees hired within an inclusive date range.

        Raises:
            InvalidRangeError: If start_date is after end_date
        """
        if start_date > end_date:
            raise InvalidRangeError("hire date")
        employees = await self.employee_repo.find_hired_between(start_date, end_date)
        return await self._build_responses(employees)

    async def get_by_salary_range(
        self, min_salary: Decimal, max_salary: Decimal
    ) -> list[EmployeeResponse]:
        """Get active employees within an inclusive salary range.

        Raises:
            InvalidRangeError: If min_salary exceeds max_salary
        """
        if min_salary > max_salary:
            raise InvalidRangeError("salary")
        employees = await self.employee_repo.find_by_salary_range(min_salary, max_salary)
        return await self._build_responses(employees)

    async def search_by_name(self, term: str) -> list[EmployeeResponse]:
        """Search active employees by first, last or full name."""
        return await self._build_responses(await self.employee_repo.search_by_name(term.strip()))

    async def get_departments(self) -> list[str]:
        """Get distinct departments of active employees."""
        return await self.employee_repo.get_distinct_departments()

    async def get_positions(self) -> list[str]:
        """Get distinct positions of active employees."""
        return await self.employee_repo.get_distinct_positions()

    async def get_department_counts(self) -> dict[str, int]:
        """Get active headcount per department."""
        return await self.employee_repo.count_by_department()

    async def email_exists(self, email: str, excluding_id: int | None = None) -> bool:
        """Check whether an email is taken by any employee, active or inactive."""
        return await self.employee_repo.email_exists(email, exclude_id=excluding_id)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create_employee(self, data: EmployeeRequest) -> EmployeeResponse:
        """Create an employee.

        Args:
            data: Employee creation data

        Returns:
            Created EmployeeResponse

        Raises:
            EmailAlreadyExistsError: If the email is taken
            ManagerNotFoundError: If the manager is absent or inactive
        """
        logger.debug("Creating new employee")
        email = str(data.email).lower()
        await self.rules.check_email_available(email)

        if data.manager_id is not None:
            await self.rules.validate_manager(data.manager_id)

        employee = await self.employee_repo.create(
            first_name=data.first_name,
            last_name=data.last_name,
            email=email,
            phone=data.phone,
            department=data.department,
            position=data.position,
            salary=data.salary,
            hire_date=data.hire_date or date.today(),
            manager_id=data.manager_id,
            is_active=True if data.is_active is None else data.is_active,
        )
        logger.info(f"Employee created successfully with id={employee.id}")

        # Note: Commit handled by get_db() dependency after endpoint completes
        return await self._build_single_response(employee)

    async def update_employee(self, employee_id: int, data: EmployeeRequest) -> EmployeeResponse:
        """Update an active employee, replacing all mutable fields.

        Hire date and active flag are only overwritten when provided.

        Args:
            employee_id: Employee ID
            data: Full employee field set

        Returns:
            Updated EmployeeResponse

        Raises:
            EmployeeNotFoundError: If absent or inactive
            EmailAlreadyExistsError: If the new email is taken
            ManagerNotFoundError: If the manager is absent or inactive
            InvalidManagerError: If the employee would manage themselves
        """
        logger.debug(f"Updating employee id={employee_id}")
        employee = await self.rules.require_active_by_id(employee_id, action="update")

        new_email = str(data.email).lower()
        if new_email != employee.email.lower():
            await self.rules.check_email_available(new_email, excluding_id=employee_id)

        if data.manager_id is not None:
            self.rules.validate_not_self_managed(employee_id, data.manager_id)
            await self.rules.validate_manager(data.manager_id)

        employee.first_name = data.first_name
        employee.last_name = data.last_name
        employee.email = new_email
        employee.phone = data.phone
        employee.department = data.department
        employee.position = data.position
        employee.salary = data.salary
        employee.manager_id = data.manager_id
        if data.hire_date is not None:
            employee.hire_date = data.hire_date
        if data.is_active is not None:
            employee.is_active = data.is_active

        employee = await self.employee_repo.save(employee)
        logger.info(f"Employee updated successfully with id={employee_id}")

        return await self._build_single_response(employee)

    async def soft_delete_employee(self, employee_id: int) -> None:
        """Mark an active employee inactive. The row is kept.

        Raises:
            EmployeeNotFoundError: If absent or already inactive
        """
        logger.debug(f"Soft deleting employee id={employee_id}")
        employee = await self.rules.require_active_by_id(employee_id, action="delete")
        employee.is_active = False
        await self.employee_repo.save(employee)
        logger.info(f"Employee soft deleted successfully with id={employee_id}")
