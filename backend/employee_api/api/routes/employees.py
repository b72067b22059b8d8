"""Employee Routes — route table and controller translation for /employees.

Invariants:
    - Handlers take ids from the path and raw JSON objects from the body,
      call exactly one service method, and map the result through the mapper
    - List endpoints answer with list projections; single-entity endpoints with
      the detail projection
    - Failures are raised, never formatted here; api/error_handlers.py owns status codes
    - /department/ routes are declared before /{employee_id}
    - employee_id is an int path parameter: a non-numeric id never reaches the
      service and answers 400 "Invalid request data: ..." via RequestValidationError
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.infrastructure.database import get_db
from employee_api.schemas import employee_mapper
from employee_api.schemas.employee import (
    ApiResponse, EmployeeDetailResponse, EmployeeListItem,
)
from employee_api.services.employee_repository import EmployeeRepository
from employee_api.services.employee_service import EmployeeService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/employees", tags=["employees"])

DELETED_MESSAGE = "Employee deleted successfully"


def get_employee_service(db: AsyncSession = Depends(get_db)) -> EmployeeService:
    return EmployeeService(EmployeeRepository(db))


@router.get(
    "", response_model=ApiResponse[list[EmployeeListItem]],
    response_model_exclude_none=True,
)
async def list_employees(service: EmployeeService = Depends(get_employee_service)):
    """List all employees, newest first (list projection)."""
    employees = await service.get_all_employees()
    return ApiResponse(success=True, data=employee_mapper.to_list_items(employees))


@router.get(
    "/department/", response_model=ApiResponse[list[EmployeeListItem]],
    response_model_exclude_none=True, include_in_schema=False,
)
@router.get(
    "/department", response_model=ApiResponse[list[EmployeeListItem]],
    response_model_exclude_none=True, include_in_schema=False,
)
async def list_employees_without_department(
    service: EmployeeService = Depends(get_employee_service),
):
    """Empty department segment — always rejected by the service."""
    employees = await service.get_employees_by_department("")
    return ApiResponse(success=True, data=employee_mapper.to_list_items(employees))


@router.get(
    "/department/{department}",
    response_model=ApiResponse[list[EmployeeListItem]],
    response_model_exclude_none=True,
)
async def list_employees_by_department(
    department: str, service: EmployeeService = Depends(get_employee_service),
):
    """List employees of one department (exact match)."""
    employees = await service.get_employees_by_department(department)
    return ApiResponse(success=True, data=employee_mapper.to_list_items(employees))


@router.get(
    "/{employee_id}", response_model=ApiResponse[EmployeeDetailResponse],
    response_model_exclude_none=True,
)
async def get_employee(
    employee_id: int, service: EmployeeService = Depends(get_employee_service),
):
    employee = await service.get_employee_by_id(employee_id)
    return ApiResponse(success=True, data=employee_mapper.to_detail_response(employee))


@router.post(
    "", response_model=ApiResponse[EmployeeDetailResponse],
    response_model_exclude_none=True, status_code=status.HTTP_201_CREATED,
)
async def create_employee(
    body: dict[str, Any] | None = Body(None),
    service: EmployeeService = Depends(get_employee_service),
):
    """Create an employee from {name, email, position, department, salary, hireDate}."""
    employee = await service.create_employee(body or {})
    return ApiResponse(success=True, data=employee_mapper.to_detail_response(employee))


@router.put(
    "/{employee_id}", response_model=ApiResponse[EmployeeDetailResponse],
    response_model_exclude_none=True,
)
async def update_employee(
    employee_id: int,
    body: dict[str, Any] | None = Body(None),
    service: EmployeeService = Depends(get_employee_service),
):
    """Partially update an employee; only keys present in the body are written."""
    employee = await service.update_employee(employee_id, body or {})
    return ApiResponse(success=True, data=employee_mapper.to_detail_response(employee))


@router.delete(
    "/{employee_id}", response_model=ApiResponse[None],
    response_model_exclude_none=True,
)
async def delete_employee(
    employee_id: int, service: EmployeeService = Depends(get_employee_service),
):
    await service.delete_employee(employee_id)
    return ApiResponse(success=True, message=DELETED_MESSAGE)
