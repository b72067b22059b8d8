"""Employee Mapper — pure conversions from the ORM entity to response projections.

Invariants:
    - Single conversions return None for a None input
    - Array conversions drop None results and return [] for a non-sequence input
"""

from collections.abc import Sequence

from employee_api.models.employee import Employee
from employee_api.schemas.employee import (
    EmployeeDetailResponse, EmployeeListItem, EmployeePublicResponse,
)


def to_detail_response(employee: Employee | None) -> EmployeeDetailResponse | None:
    if employee is None:
        return None
    return EmployeeDetailResponse(
        id=employee.id,
        name=employee.name,
        email=employee.email,
        position=employee.position,
        department=employee.department,
        salary=employee.salary,
        hire_date=employee.hire_date,
        created_at=employee.created_at,
        updated_at=employee.updated_at,
    )


def to_public_response(employee: Employee | None) -> EmployeePublicResponse | None:
    if employee is None:
        return None
    return EmployeePublicResponse(
        name=employee.name,
        email=employee.email,
        position=employee.position,
        department=employee.department,
        salary=employee.salary,
        hire_date=employee.hire_date,
        created_at=employee.created_at,
        updated_at=employee.updated_at,
    )


def to_list_item(employee: Employee | None) -> EmployeeListItem | None:
    if employee is None:
        return None
    return EmployeeListItem(
        id=employee.id,
        name=employee.name,
        email=employee.email,
        position=employee.position,
        department=employee.department,
    )


def to_detail_responses(employees: object) -> list[EmployeeDetailResponse]:
    return [dto for dto in map(to_detail_response, _as_sequence(employees)) if dto is not None]


def to_public_responses(employees: object) -> list[EmployeePublicResponse]:
    return [dto for dto in map(to_public_response, _as_sequence(employees)) if dto is not None]


def to_list_items(employees: object) -> list[EmployeeListItem]:
    return [dto for dto in map(to_list_item, _as_sequence(employees)) if dto is not None]


def _as_sequence(employees: object) -> Sequence:
    if isinstance(employees, Sequence) and not isinstance(employees, (str, bytes)):
        return employees
    return ()
