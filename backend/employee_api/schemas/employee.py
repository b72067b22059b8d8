"""Employee Schemas — read projections of the Employee entity plus the response envelope.

Invariants:
    - EmployeeListItem never carries salary
    - EmployeePublicResponse never carries id
    - EmployeeDetailResponse carries both
    - salary is exact decimal text with two places, never a float
"""

from datetime import datetime
from decimal import Decimal
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from employee_api.core.domain_types import to_money

DataT = TypeVar("DataT")


def format_salary(value: Decimal | int | float | str) -> str:
    """Render a salary as exact two-place decimal text."""
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    return str(to_money(amount))


class _Projection(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True,
    )

    @field_validator("salary", mode="before", check_fields=False)
    @classmethod
    def render_salary(cls, v):
        if isinstance(v, (Decimal, int, float)) and not isinstance(v, bool):
            return format_salary(v)
        return v


class EmployeeListItem(_Projection):
    """Minimal projection for list views."""
    id: int
    name: str
    email: str
    position: str
    department: str


class EmployeePublicResponse(_Projection):
    """Projection without the internal id."""
    name: str
    email: str
    position: str
    department: str
    salary: str
    hire_date: datetime
    created_at: datetime
    updated_at: datetime


class EmployeeDetailResponse(_Projection):
    """Full projection, including id."""
    id: int
    name: str
    email: str
    position: str
    department: str
    salary: str
    hire_date: datetime
    created_at: datetime
    updated_at: datetime


class ApiResponse(BaseModel, Generic[DataT]):
    """Response envelope: {success, data?, error?, message?}."""
    success: bool
    data: DataT | None = None
    error: str | None = None
    message: str | None = None
