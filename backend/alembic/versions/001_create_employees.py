"""Create employees table.

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates the employees table with a self-referencing manager link,
a unique email constraint and lookup indexes for the list filters.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create employees table and indexes."""
    op.create_table(
        "employees",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(50), nullable=False),
        sa.Column("last_name", sa.String(50), nullable=False),
        sa.Column("email", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("department", sa.String(50), nullable=False),
        sa.Column("position", sa.String(100), nullable=False),
        sa.Column("salary", sa.Numeric(10, 2), nullable=True),
        sa.Column("hire_date", sa.Date(), nullable=False),
        sa.Column(
            "manager_id",
            sa.Integer(),
            sa.ForeignKey("employees.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.UniqueConstraint("email", name="uq_employees_email"),
    )

    op.create_index("idx_employees_department", "employees", ["department"])
    op.create_index("idx_employees_position", "employees", ["position"])
    op.create_index("idx_employees_manager_id", "employees", ["manager_id"])
    op.create_index("idx_employees_is_active", "employees", ["is_active"])


def downgrade() -> None:
    """Drop employees table."""
    op.drop_index("idx_employees_is_active", table_name="employees")
    op.drop_index("idx_employees_manager_id", table_name="employees")
    op.drop_index("idx_employees_position", table_name="employees")
    op.drop_index("idx_employees_department", table_name="employees")
    op.drop_table("employees")
