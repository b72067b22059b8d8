"""Employee Service — business-rule orchestration over the employee repository.

Invariants:
    - Raises only EmployeeNotFoundError, InputValidationError, EmailConflictError;
      every other failure from the repository propagates unchanged
    - Uniqueness is checked before insert/update; a unique-constraint violation from
      the store (concurrent duplicate) is still reported as EmailConflictError
    - An update with no recognised fields never reaches repository.update()

Design Decisions:
    - Stateless: holds only the repository, constructed per request via FastAPI Depends
"""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from employee_api.core.domain_types import EmployeeId
from employee_api.core.employee_requests import (
    CreateEmployeeRequest, UpdateEmployeeRequest,
)
from employee_api.core.errors import (
    DEPARTMENT_REQUIRED, NO_FIELDS_TO_UPDATE, EmailConflictError,
    EmployeeNotFoundError, ErrorContext, InputValidationError,
)
from employee_api.core.repository_protocols import (
    EmployeeRepository, RequestDto, UpdateDto,
)
from employee_api.models.employee import Employee

logger = logging.getLogger(__name__)


class EmployeeService:
    def __init__(self, repository: EmployeeRepository):
        self._repository = repository

    async def get_all_employees(self) -> list[Employee]:
        return await self._repository.find_all()

    async def get_employee_by_id(self, employee_id: EmployeeId | int | str) -> Employee:
        return await self._get_existing(employee_id)

    async def create_employee(self, raw: Any) -> Employee:
        request = CreateEmployeeRequest.from_raw(raw)
        _require_valid(request, operation="create")

        if await self._repository.find_by_email(request.email):
            logger.warning("Rejected create: email already in use")
            raise EmailConflictError(request.email, ErrorContext(operation="create"))

        try:
            employee = await self._repository.create(request)
        except IntegrityError as e:
            logger.warning(f"Unique constraint rejected create: {e.orig or e}")
            raise EmailConflictError(
                request.email, ErrorContext(operation="create"),
            ) from e

        logger.info("Employee created", extra={"employee_id": employee.id})
        return employee

    async def update_employee(
        self, employee_id: EmployeeId | int | str, raw: Any,
    ) -> Employee:
        current = await self._get_existing(employee_id)

        request = UpdateEmployeeRequest.from_raw(raw)
        _require_valid(request, operation="update", employee_id=current.id)
        _require_changes(request, employee_id=current.id)

        if request.email and request.email != current.email:
            holder = await self._repository.find_by_email(request.email)
            if holder is not None and holder.id != current.id:
                logger.warning(
                    "Rejected update: email already in use",
                    extra={"employee_id": current.id},
                )
                raise EmailConflictError(
                    request.email,
                    ErrorContext(employee_id=current.id, operation="update"),
                )

        try:
            employee = await self._repository.update(current.id, request)
        except IntegrityError as e:
            logger.warning(f"Unique constraint rejected update: {e.orig or e}")
            raise EmailConflictError(
                request.email or None,
                ErrorContext(employee_id=current.id, operation="update"),
            ) from e

        logger.info("Employee updated", extra={"employee_id": employee.id})
        return employee

    async def delete_employee(self, employee_id: EmployeeId | int | str) -> Employee:
        current = await self._get_existing(employee_id)
        employee = await self._repository.delete(current.id)
        logger.info("Employee deleted", extra={"employee_id": current.id})
        return employee

    async def get_employees_by_department(self, department: str | None) -> list[Employee]:
        if not department or not department.strip():
            raise InputValidationError(
                DEPARTMENT_REQUIRED, context=ErrorContext(operation="list_by_department"),
            )
        return await self._repository.find_by_department(department)

    async def _get_existing(self, employee_id: EmployeeId | int | str) -> Employee:
        employee = await self._repository.find_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee


def _require_valid(
    request: RequestDto, operation: str, employee_id: int | None = None,
) -> None:
    result = request.validate()
    if not result.is_valid:
        logger.warning(
            f"Rejected {operation}: {', '.join(result.errors)}",
            extra={"employee_id": employee_id},
        )
        raise InputValidationError.from_errors(
            result.errors,
            ErrorContext(employee_id=employee_id, operation=operation),
        )


def _require_changes(request: UpdateDto, employee_id: int) -> None:
    if request.is_empty():
        raise InputValidationError(
            NO_FIELDS_TO_UPDATE,
            context=ErrorContext(employee_id=employee_id, operation="update"),
        )
