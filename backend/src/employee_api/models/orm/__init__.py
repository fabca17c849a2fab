"""SQLAlchemy ORM models package."""

from employee_api.models.orm.base import Base
from employee_api.models.orm.employee import EmployeeORM

__all__ = [
    "Base",
    "EmployeeORM",
]
