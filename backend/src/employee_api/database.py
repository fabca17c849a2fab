"""Async engine and per-request session management."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from employee_api.config import Settings, get_settings


def _engine_options(settings: Settings) -> dict[str, Any]:
    """Engine keyword arguments for the configured backend.

    SQLite (local runs, tests) uses SQLAlchemy's default pool; PostgreSQL
    gets a sized, self-healing pool.
    """
    # SQL echo stays off; statements carry employee data
    options: dict[str, Any] = {"echo": False}
    if settings.is_sqlite:
        return options
    options.update(
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        pool_recycle=3600,
    )
    return options


settings = get_settings()

engine = create_async_engine(settings.async_database_url, **_engine_options(settings))

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per request.

    Committed after the endpoint returns; a database error rolls the
    whole request back. Domain errors leave nothing to commit because
    the services validate before they write.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise
