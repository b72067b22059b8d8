"""Create employees table.

Revision ID: 001_create_employees
Revises: None
Create Date: 2026-02-04

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_create_employees"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "employees",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("email", sa.Text, nullable=False),
        sa.Column("position", sa.Text, nullable=False),
        sa.Column("department", sa.Text, nullable=False),
        sa.Column("salary", sa.Numeric(10, 2), nullable=False),
        sa.Column("hire_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("email", name="employees_email_key"),
    )
    op.create_index("ix_employees_department", "employees", ["department"])


def downgrade() -> None:
    op.drop_index("ix_employees_department", table_name="employees")
    op.drop_table("employees")
