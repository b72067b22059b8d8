"""Boundary Protocols — contracts between the request pipeline and persistence.

Invariants:
    - Services depend on EmployeeRepository, never on a concrete store
    - Both request DTOs satisfy RequestDto; only the update DTO satisfies UpdateDto

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
"""

from typing import TYPE_CHECKING, Protocol

from employee_api.core.domain_types import EmployeeId, ValidationResult

if TYPE_CHECKING:
    from employee_api.core.employee_requests import (
        CreateEmployeeRequest, UpdateEmployeeRequest,
    )
    from employee_api.models.employee import Employee


class RequestDto(Protocol):
    """A sanitized request that can report its own validity."""
    def validate(self) -> ValidationResult: ...


class UpdateDto(RequestDto, Protocol):
    """A partial request that can tell whether it carries any field."""
    def is_empty(self) -> bool: ...


class EmployeeRepository(Protocol):
    """Contract for employee persistence — implemented by services/employee_repository.py."""
    async def find_all(self) -> list["Employee"]: ...
    async def find_by_id(self, employee_id: EmployeeId | int | str) -> "Employee | None": ...
    async def create(self, request: "CreateEmployeeRequest") -> "Employee": ...
    async def update(
        self, employee_id: EmployeeId | int | str, request: "UpdateEmployeeRequest",
    ) -> "Employee": ...
    async def delete(self, employee_id: EmployeeId | int | str) -> "Employee": ...
    async def find_by_email(self, email: str) -> "Employee | None": ...
    async def find_by_department(self, department: str) -> list["Employee"]: ...
