"""Shared response DTOs: the response envelope and the page object."""

import math
from datetime import datetime, timezone
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, accepting either case on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(CamelModel, Generic[T]):
    """Envelope wrapped around every response body."""

    success: bool
    data: T | None = None
    message: str
    error: str | None = None
    count: int | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def ok(cls, data: T | None = None, message: str = "Success", count: int | None = None) -> "ApiResponse[T]":
        """Build a success envelope."""
        return cls(success=True, data=data, message=message, count=count)

    @classmethod
    def fail(cls, message: str, error: str | None = None, data: T | None = None) -> "ApiResponse[T]":
        """Build a failure envelope."""
        return cls(success=False, data=data, message=message, error=error)


class Page(CamelModel, Generic[T]):
    """One page of a sorted, filtered result set."""

    items: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int
    first: bool
    last: bool

    @classmethod
    def build(cls, items: list[T], page: int, size: int, total: int) -> "Page[T]":
        """Build a page, deriving page count and boundary flags from the total.

        Args:
            items: Records on this page
            page: Zero-based page index
            size: Requested page size
            total: Number of records matching across all pages

        Returns:
            Page object
        """
        total_pages = math.ceil(total / size) if size > 0 else 0
        return cls(
            items=items,
            page=page,
            size=size,
            total_elements=total,
            total_pages=total_pages,
            first=page == 0,
            last=page >= total_pages - 1,
        )
