"""Employee ORM model."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, ForeignKey, Index, Integer, Numeric, String, true
from sqlalchemy.orm import Mapped, mapped_column

from employee_api.constants.validation import (
    MAX_DEPARTMENT_LENGTH,
    MAX_EMAIL_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_POSITION_LENGTH,
    SALARY_DECIMAL_PLACES,
    SALARY_MAX_DIGITS,
)
from employee_api.models.orm.base import Base, TimestampMixin


class EmployeeORM(Base, TimestampMixin):
    """Employee database model.

    The manager link is stored as a plain identity. The manager's display
    name is resolved with a separate lookup rather than an ORM relationship,
    so loading an employee never walks the reporting chain.
    """

    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    last_name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(String(MAX_EMAIL_LENGTH), unique=True, nullable=False)
    phone: Mapped[str | None] = mapped_column(String(MAX_PHONE_LENGTH), nullable=True)
    department: Mapped[str] = mapped_column(String(MAX_DEPARTMENT_LENGTH), nullable=False)
    position: Mapped[str] = mapped_column(String(MAX_POSITION_LENGTH), nullable=False)
    salary: Mapped[Decimal | None] = mapped_column(
        Numeric(SALARY_MAX_DIGITS, SALARY_DECIMAL_PLACES), nullable=True
    )
    hire_date: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    manager_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("employees.id", ondelete="SET NULL"),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    __table_args__ = (
        Index("idx_employees_department", "department"),
        Index("idx_employees_position", "position"),
        Index("idx_employees_manager_id", "manager_id"),
        Index("idx_employees_is_active", "is_active"),
    )

    @property
    def full_name(self) -> str:
        """First and last name joined by a space."""
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return (
            f"EmployeeORM(id={self.id!r}, first_name={self.first_name!r}, "
            f"last_name={self.last_name!r}, department={self.department!r}, "
            f"is_active={self.is_active!r})"
        )
