"""Generic repository over an integer-keyed ORM model."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.models.orm.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Lookups and writes shared by every repository.

    There is no delete: records are retired by the services, never removed.
    Lookups here ignore any active flag the model may carry.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, record_id: int) -> ModelT | None:
        """Return the record with this ID, or None."""
        return await self.session.get(self.model, record_id)

    async def get_by_ids(self, record_ids: list[int]) -> dict[int, ModelT]:
        """Load several records in one query.

        Args:
            record_ids: IDs to load; duplicates are fine

        Returns:
            Mapping of ID to record for the IDs that exist
        """
        if not record_ids:
            return {}
        result = await self.session.execute(
            select(self.model).where(self.model.id.in_(set(record_ids)))
        )
        return {record.id: record for record in result.scalars()}

    async def create(self, **values: Any) -> ModelT:
        """Insert a record and reload it so server defaults are populated."""
        return await self.save(self.model(**values))

    async def save(self, instance: ModelT) -> ModelT:
        """Flush a new or modified record and reload it.

        The reload picks up server-side values such as timestamps.
        """
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance
