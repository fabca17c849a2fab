"""Uniqueness and reference rules shared by every employee operation."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.exceptions import (
    EmailAlreadyExistsError,
    EmployeeNotFoundError,
    InvalidManagerError,
    ManagerNotFoundError,
)
from employee_api.models.orm.employee import EmployeeORM
from employee_api.repositories.employee_repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeRulesService:
    """Enforces the employee invariants.

    Absent and inactive employees are indistinguishable to callers: both
    surface as not-found. Email uniqueness is the one rule that also looks
    at inactive rows.
    """

    def __init__(self, session: AsyncSession, employee_repo: EmployeeRepository | None = None) -> None:
        """Initialize service with database session."""
        self.session = session
        self.employee_repo = employee_repo or EmployeeRepository(session)

    async def check_email_available(self, email: str, excluding_id: int | None = None) -> None:
        """Ensure no other employee owns this email, case-insensitively.

        Args:
            email: Email address to claim
            excluding_id: Employee whose own email should be ignored

        Raises:
            EmailAlreadyExistsError: If another employee (active or not) has it
        """
        if await self.employee_repo.email_exists(email, exclude_id=excluding_id):
            logger.debug("Email already in use (excluding id=%s)", excluding_id)
            raise EmailAlreadyExistsError(email)

    async def validate_manager(self, manager_id: int) -> EmployeeORM:
        """Ensure a manager reference points at an existing active employee.

        Args:
            manager_id: Manager employee ID

        Returns:
            The manager record

        Raises:
            ManagerNotFoundError: If the manager is absent or inactive
        """
        manager = await self.employee_repo.get_by_id(manager_id)
        if manager is None:
            raise ManagerNotFoundError(manager_id)
        if not manager.is_active:
            raise ManagerNotFoundError(manager_id, inactive=True)
        return manager

    async def require_active_by_id(self, employee_id: int, action: str | None = None) -> EmployeeORM:
        """Fetch an employee that must exist and be active.

        Args:
            employee_id: Employee ID
            action: Optional verb used in the inactive message (e.g. "update")

        Returns:
            The employee record

        Raises:
            EmployeeNotFoundError: If the employee is absent or inactive
        """
        employee = await self.employee_repo.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        if not employee.is_active:
            if action == "delete":
                message = f"Employee with id {employee_id} is already inactive"
            elif action:
                message = f"Cannot {action} inactive employee with id: {employee_id}"
            else:
                message = f"Employee with id {employee_id} is inactive"
            raise EmployeeNotFoundError(employee_id, message=message)
        return employee

    @staticmethod
    def validate_not_self_managed(employee_id: int, manager_id: int | None) -> None:
        """Reject an employee referencing themselves as manager.

        Raises:
            InvalidManagerError: If manager_id equals employee_id
        """
        if manager_id is not None and manager_id == employee_id:
            raise InvalidManagerError(employee_id)
