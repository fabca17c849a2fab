"""Input normalization for search, filter and sort parameters."""

from pydantic.alias_generators import to_camel

from employee_api.constants.validation import (
    ALLOWED_EMPLOYEE_SORT_COLUMNS,
    MAX_SEARCH_LENGTH,
    MAX_SORT_BY_LENGTH,
)
from employee_api.exceptions import InvalidSortFieldError


def normalize_search_term(search: str | None, max_length: int = MAX_SEARCH_LENGTH) -> str | None:
    """Normalize a free-text search term.

    Args:
        search: Raw search string
        max_length: Maximum allowed length

    Returns:
        Stripped, truncated term, or None when blank
    """
    if search is None:
        return None
    return search.strip()[:max_length] or None


def normalize_filter(value: str | None) -> str | None:
    """Normalize an exact-match filter value; blank means no filter."""
    if value is None:
        return None
    return value.strip() or None


def sort_field_aliases(allowed_columns: frozenset[str]) -> dict[str, str]:
    """Map each accepted sort field spelling to its column.

    A column is accepted in exactly two forms: its snake_case name and
    the camelCase name used in JSON bodies.

    Example:
        >>> sort_field_aliases(frozenset({"hire_date"}))
        {'hire_date': 'hire_date', 'hireDate': 'hire_date'}
    """
    aliases: dict[str, str] = {}
    for column in allowed_columns:
        aliases[column] = column
        aliases[to_camel(column)] = column
    return aliases


def resolve_sort_column(
    sort_by: str,
    allowed_columns: frozenset[str] = ALLOWED_EMPLOYEE_SORT_COLUMNS,
) -> str:
    """Resolve a client sort field to a whitelisted column name.

    Unlike a silent fallback, an unknown field is a caller error.

    Args:
        sort_by: Field name, exactly in camelCase or snake_case
        allowed_columns: Column names that may be sorted on

    Returns:
        Column name

    Raises:
        InvalidSortFieldError: If the field is not a stored column
    """
    if not sort_by or len(sort_by) > MAX_SORT_BY_LENGTH:
        raise InvalidSortFieldError(sort_by[:MAX_SORT_BY_LENGTH] if sort_by else "")
    column = sort_field_aliases(allowed_columns).get(sort_by.strip())
    if column is None:
        raise InvalidSortFieldError(sort_by)
    return column


def is_descending(sort_direction: str | None) -> bool:
    """Return True only for 'desc' in any case; everything else sorts ascending."""
    return bool(sort_direction) and sort_direction.strip().lower() == "desc"


def escape_like_wildcards(value: str) -> str:
    """Escape SQL LIKE wildcards so they match literally.

    The % and _ characters have special meaning in SQL LIKE patterns:
    - % matches any sequence of characters
    - _ matches any single character

    Args:
        value: Raw string value to escape

    Returns:
        Escaped string safe for use in LIKE patterns with escape="\\"

    Example:
        >>> escape_like_wildcards("test%value")
        'test\\\\%value'
        >>> escape_like_wildcards("test_value")
        'test\\\\_value'
    """
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
