"""Employee Repository — SQLAlchemy persistence adapter for the employees table.

Invariants:
    - No business rules here: no uniqueness or existence checks, no error mapping
    - Ids are coerced with int() before reaching a query
    - update() writes only fields present on the request and always refreshes updated_at
    - Lists are ordered by created_at desc, then id desc
"""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.core.domain_types import EmployeeId, to_money
from employee_api.core.employee_requests import (
    CreateEmployeeRequest, UpdateEmployeeRequest,
)
from employee_api.models.employee import Employee


class EmployeeRepository:
    """Thin async pass-through to the database."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def find_all(self) -> list[Employee]:
        result = await self._db.execute(
            select(Employee).order_by(Employee.created_at.desc(), Employee.id.desc()),
        )
        return list(result.scalars().all())

    async def find_by_id(self, employee_id: EmployeeId | int | str) -> Employee | None:
        result = await self._db.execute(
            select(Employee).where(Employee.id == int(employee_id)),
        )
        return result.scalar_one_or_none()

    async def create(self, request: CreateEmployeeRequest) -> Employee:
        """Insert a validated create request."""
        employee = Employee(
            name=request.name,
            email=request.email,
            position=request.position,
            department=request.department,
            salary=to_money(request.salary),
            hire_date=request.hire_date,
        )
        self._db.add(employee)
        await self._db.commit()
        await self._db.refresh(employee)
        return employee

    async def update(
        self, employee_id: EmployeeId | int | str, request: UpdateEmployeeRequest,
    ) -> Employee:
        """Apply the present fields of request. Raises NoResultFound for an unknown id."""
        employee = await self._get_one(employee_id)
        for attr, value in self._build_update_payload(request).items():
            setattr(employee, attr, value)
        employee.updated_at = datetime.now(timezone.utc)
        await self._db.commit()
        await self._db.refresh(employee)
        return employee

    async def delete(self, employee_id: EmployeeId | int | str) -> Employee:
        """Hard-delete a row. Raises NoResultFound for an unknown id."""
        employee = await self._get_one(employee_id)
        await self._db.delete(employee)
        await self._db.commit()
        return employee

    async def find_by_email(self, email: str) -> Employee | None:
        result = await self._db.execute(
            select(Employee).where(Employee.email == email),
        )
        return result.scalar_one_or_none()

    async def find_by_department(self, department: str) -> list[Employee]:
        result = await self._db.execute(
            select(Employee)
            .where(Employee.department == department)
            .order_by(Employee.created_at.desc(), Employee.id.desc()),
        )
        return list(result.scalars().all())

    async def _get_one(self, employee_id: EmployeeId | int | str) -> Employee:
        result = await self._db.execute(
            select(Employee).where(Employee.id == int(employee_id)),
        )
        return result.scalar_one()

    @staticmethod
    def _build_update_payload(request: UpdateEmployeeRequest) -> dict:
        # present-but-null text fields carry nothing to write
        payload = {
            attr: value
            for attr, value in request.present_fields().items()
            if value is not None
        }
        if "salary" in payload:
            payload["salary"] = to_money(payload["salary"])
        return payload
