"""Employee ORM — the only persisted entity.

Invariants:
    - id is an auto-incrementing integer primary key
    - email is unique and stored lowercased (normalized before it reaches the model)
    - salary is NUMERIC(10, 2); the model never holds floats
    - created_at set once on insert; updated_at refreshed on every update
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from employee_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Employee(Base):
    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    position: Mapped[str] = mapped_column(Text, nullable=False)
    department: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    salary: Mapped[Decimal] = mapped_column(
        Numeric(10, 2, asdecimal=True), nullable=False,
    )
    hire_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )

    def __repr__(self) -> str:
        return f"<Employee id={self.id} email={self.email!r}>"
