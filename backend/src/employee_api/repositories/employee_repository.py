"""Employee repository.

Every list query here is scoped to active employees through ``_active()``.
Only ``get_by_id``/``get_by_ids`` (inherited) and ``email_exists`` see
inactive rows.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import ColumnElement, Select, func, or_, select

from employee_api.models.orm.employee import EmployeeORM
from employee_api.repositories.base import BaseRepository
from employee_api.utils.validation import (
    escape_like_wildcards,
    is_descending,
    normalize_filter,
    normalize_search_term,
    resolve_sort_column,
)

# Columns a free-text term is matched against
SEARCHABLE_COLUMNS = (
    EmployeeORM.first_name,
    EmployeeORM.last_name,
    EmployeeORM.email,
    EmployeeORM.department,
    EmployeeORM.position,
)

# Stable secondary ordering so equal sort keys never shuffle between pages
DEFAULT_ORDERING = (
    EmployeeORM.last_name.asc(),
    EmployeeORM.first_name.asc(),
    EmployeeORM.id.asc(),
)


def _active() -> ColumnElement[bool]:
    """Filter clause restricting a query to active employees."""
    return EmployeeORM.is_active.is_(True)


def _contains_ignore_case(column, term: str) -> ColumnElement[bool]:
    """Case-insensitive literal substring match."""
    pattern = f"%{escape_like_wildcards(term.lower())}%"
    return func.lower(column).like(pattern, escape="\\")


def _equals_ignore_case(column, value: str) -> ColumnElement[bool]:
    """Case-insensitive equality."""
    return func.lower(column) == value.lower()


class EmployeeRepository(BaseRepository[EmployeeORM]):
    """Repository for employee operations."""

    model = EmployeeORM

    async def _list(self, query: Select) -> list[EmployeeORM]:
        result = await self.session.execute(query)
        return list(result.scalars().all())

    def _active_query(self, *criteria: ColumnElement[bool]) -> Select:
        return select(EmployeeORM).where(_active(), *criteria).order_by(*DEFAULT_ORDERING)

    async def search(
        self,
        search_term: str | None = None,
        department: str | None = None,
        position: str | None = None,
        page: int = 0,
        size: int = 10,
        sort_by: str = "lastName",
        sort_direction: str = "ASC",
    ) -> tuple[list[EmployeeORM], int]:
        """Search active employees with optional filters, sorting and paging.

        Args:
            search_term: Case-insensitive substring of first name, last name,
                email, department or position
            department: Exact department, case-insensitive
            position: Exact position, case-insensitive
            page: Zero-based page index
            size: Page size
            sort_by: Stored field name, camelCase or snake_case
            sort_direction: "DESC" (any case) for descending, otherwise ascending

        Returns:
            Tuple of (employees on the requested page, total matching count)

        Raises:
            InvalidSortFieldError: If sort_by is not a stored column
        """
        sort_column = getattr(EmployeeORM, resolve_sort_column(sort_by))

        criteria: list[ColumnElement[bool]] = [_active()]

        term = normalize_search_term(search_term)
        if term:
            criteria.append(
                or_(*(_contains_ignore_case(column, term) for column in SEARCHABLE_COLUMNS))
            )

        department = normalize_filter(department)
        if department:
            criteria.append(_equals_ignore_case(EmployeeORM.department, department))

        position = normalize_filter(position)
        if position:
            criteria.append(_equals_ignore_case(EmployeeORM.position, position))

        if is_descending(sort_direction):
            primary = sort_column.desc().nulls_last()
        else:
            primary = sort_column.asc().nulls_last()

        query = (
            select(EmployeeORM)
            .where(*criteria)
            .order_by(primary, *DEFAULT_ORDERING)
            .offset(page * size)
            .limit(size)
        )
        count_query = select(func.count()).select_from(EmployeeORM).where(*criteria)

        total = (await self.session.execute(count_query)).scalar_one()
        # Past the last page: skip the page query, the offset may not fit a BIGINT
        if page * size >= total:
            return [], total
        return await self._list(query), total

    async def find_active(self) -> list[EmployeeORM]:
        """Get all active employees ordered by last name, first name."""
        return await self._list(self._active_query())

    async def find_by_department(self, department: str) -> list[EmployeeORM]:
        """Get active employees in a department (case-insensitive)."""
        return await self._list(
            self._active_query(_equals_ignore_case(EmployeeORM.department, department.strip()))
        )

    async def find_by_position(self, position: str) -> list[EmployeeORM]:
        """Get active employees holding a position (case-insensitive)."""
        return await self._list(
            self._active_query(_equals_ignore_case(EmployeeORM.position, position.strip()))
        )

    async def find_by_manager(self, manager_id: int) -> list[EmployeeORM]:
        """Get active direct reports of a manager."""
        return await self._list(self._active_query(EmployeeORM.manager_id == manager_id))

    async def find_top_level(self) -> list[EmployeeORM]:
        """Get active employees without a manager."""
        return await self._list(self._active_query(EmployeeORM.manager_id.is_(None)))

    async def find_hired_between(self, start_date: date, end_date: date) -> list[EmployeeORM]:
        """Get active employees hired within an inclusive date range."""
        return await self._list(
            self._active_query(EmployeeORM.hire_date.between(start_date, end_date))
        )

    async def find_by_salary_range(
        self, min_salary: Decimal, max_salary: Decimal
    ) -> list[EmployeeORM]:
        """Get active employees whose salary falls within an inclusive range.

        Employees without a salary never match.
        """
        return await self._list(
            self._active_query(EmployeeORM.salary.between(min_salary, max_salary))
        )

    async def search_by_name(self, term: str) -> list[EmployeeORM]:
        """Search active employees by first name, last name or full name."""
        full_name = EmployeeORM.first_name + " " + EmployeeORM.last_name
        return await self._list(
            self._active_query(
                or_(
                    _contains_ignore_case(EmployeeORM.first_name, term),
                    _contains_ignore_case(EmployeeORM.last_name, term),
                    _contains_ignore_case(full_name, term),
                )
            )
        )

    async def get_distinct_departments(self) -> list[str]:
        """Get sorted distinct departments of active employees."""
        result = await self.session.execute(
            select(EmployeeORM.department)
            .where(_active())
            .distinct()
            .order_by(EmployeeORM.department)
        )
        return [row[0] for row in result.all()]

    async def get_distinct_positions(self) -> list[str]:
        """Get sorted distinct positions of active employees."""
        result = await self.session.execute(
            select(EmployeeORM.position)
            .where(_active())
            .distinct()
            .order_by(EmployeeORM.position)
        )
        return [row[0] for row in result.all()]

    async def count_by_department(self) -> dict[str, int]:
        """Count active employees per department."""
        result = await self.session.execute(
            select(EmployeeORM.department, func.count())
            .where(_active())
            .group_by(EmployeeORM.department)
            .order_by(EmployeeORM.department)
        )
        return dict(result.all())

    async def email_exists(self, email: str, exclude_id: int | None = None) -> bool:
        """Check if an email is taken by any employee, active or inactive.

        Args:
            email: Email to check (case-insensitive)
            exclude_id: Optionally exclude an employee ID from the check

        Returns:
            True if email exists, False otherwise
        """
        query = select(func.count()).select_from(EmployeeORM).where(
            func.lower(EmployeeORM.email) == email.strip().lower()
        )
        if exclude_id is not None:
            query = query.where(EmployeeORM.id != exclude_id)
        result = await self.session.execute(query)
        return result.scalar_one() > 0
