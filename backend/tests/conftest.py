"""Shared test fixtures: in-memory database and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db is overridden with the same commit/rollback contract
    - Rate limiting is disabled so write-heavy tests never hit 429
"""

import itertools
import os
from datetime import date
from decimal import Decimal

# Must be set before employee_api is imported: settings are cached at import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from employee_api.database import get_db
from employee_api.main import app
from employee_api.models.orm import Base, EmployeeORM


@pytest.fixture
async def test_engine():
    # StaticPool keeps every session on the same in-memory database
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with the DB dependency overridden."""

    async def override_get_db():
        async with test_session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def employee_factory(db_session):
    """Insert committed employees with sensible defaults.

    Usage:
        alice = await employee_factory(first_name="Alice", department="Sales")
    """
    sequence = itertools.count(1)

    async def _make(**overrides) -> EmployeeORM:
        n = next(sequence)
        values = {
            "first_name": f"First{n}",
            "last_name": f"Last{n}",
            "email": f"employee{n}@example.com",
            "department": "Engineering",
            "position": "Engineer",
            "salary": Decimal("50000.00"),
            "hire_date": date(2020, 1, 1),
            "is_active": True,
        }
        values.update(overrides)
        employee = EmployeeORM(**values)
        db_session.add(employee)
        await db_session.commit()
        await db_session.refresh(employee)
        return employee

    return _make


@pytest.fixture
def row_count(db_session):
    """Count employees rows, active or not."""

    async def _count() -> int:
        result = await db_session.execute(select(func.count()).select_from(EmployeeORM))
        return result.scalar_one()

    return _count


@pytest.fixture
def employee_payload():
    """Valid create/update request body in the API's camelCase form."""
    return {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada.lovelace@example.com",
        "phone": "+44 20 7946 0000",
        "department": "Engineering",
        "position": "Principal Engineer",
        "salary": "120000.00",
        "hireDate": "2021-03-15",
    }
