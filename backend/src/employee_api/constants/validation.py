"""Centralized validation constants for the employee API.

This module provides a single source of truth for field limits, sort
whitelists and pagination defaults used across routers and services.
"""

from typing import Final

# =============================================================================
# Employee Field Limits
# =============================================================================

MAX_NAME_LENGTH: Final[int] = 50
MAX_EMAIL_LENGTH: Final[int] = 100
MAX_PHONE_LENGTH: Final[int] = 20
MAX_DEPARTMENT_LENGTH: Final[int] = 50
MAX_POSITION_LENGTH: Final[int] = 100

# NUMERIC(10, 2): 8 integer digits, 2 fraction digits
SALARY_MAX_DIGITS: Final[int] = 10
SALARY_DECIMAL_PLACES: Final[int] = 2

# =============================================================================
# Employee Sort Constants
# =============================================================================

# Every stored column of the employees table can be sorted on
ALLOWED_EMPLOYEE_SORT_COLUMNS: Final[frozenset[str]] = frozenset(
    {
        "id",
        "first_name",
        "last_name",
        "email",
        "phone",
        "department",
        "position",
        "salary",
        "hire_date",
        "manager_id",
        "is_active",
        "created_at",
        "updated_at",
    }
)

DEFAULT_LIST_SORT_COLUMN: Final[str] = "firstName"
DEFAULT_SEARCH_SORT_COLUMN: Final[str] = "lastName"
DEFAULT_SORT_DIRECTION: Final[str] = "ASC"

# =============================================================================
# Pagination Constants
# =============================================================================

DEFAULT_PAGE_SIZE: Final[int] = 10
MAX_PAGE_SIZE: Final[int] = 200

# =============================================================================
# Text Length Constants
# =============================================================================

MAX_SEARCH_LENGTH: Final[int] = 200
MAX_SORT_BY_LENGTH: Final[int] = 50

# =============================================================================
# Identity Constants
# =============================================================================

# Upper bound of the INTEGER primary key; larger IDs cannot exist
MAX_EMPLOYEE_ID: Final[int] = 2**31 - 1
