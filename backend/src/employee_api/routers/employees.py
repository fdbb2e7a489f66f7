"""Employees router - CRUD over the record store."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status

from employee_api.constants.validation import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from employee_api.dependencies import get_employee_service, get_json_body
from employee_api.models.dto.employee import (
    EmployeeListResponse,
    EmployeeResponse,
    ErrorResponse,
    MessageResponse,
)
from employee_api.services.employee_service import EmployeeService

router = APIRouter()

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Validation failed"},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Employee not found"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse, "description": "Server error"},
}


@router.get("/employees", response_model=EmployeeListResponse, responses=ERROR_RESPONSES)
async def list_employees(
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
    page: int = Query(default=DEFAULT_PAGE, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1),
    department: str | None = None,
    status: str | None = None,
) -> EmployeeListResponse:
    """List employees with pagination and optional equality filters."""
    employees, pagination = await employee_service.list_employees(
        filters={"department": department, "status": status},
        page=page,
        limit=limit,
    )
    return EmployeeListResponse(
        data=employees,
        pagination=pagination,
        message="Employees retrieved successfully",
    )


@router.get("/employees/{employee_id}", response_model=EmployeeResponse, responses=ERROR_RESPONSES)
async def get_employee(
    employee_id: str,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Get an employee by ID."""
    employee = await employee_service.get_employee(employee_id)
    return EmployeeResponse(data=employee, message="Employee retrieved successfully")


@router.post(
    "/employees",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_employee(
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
    payload: Annotated[Any, Depends(get_json_body)],
) -> EmployeeResponse:
    """Create an employee. Every field but ``status`` is required."""
    employee = await employee_service.create_employee(payload)
    return EmployeeResponse(data=employee, message="Employee created successfully")


@router.put("/employees/{employee_id}", response_model=EmployeeResponse, responses=ERROR_RESPONSES)
async def update_employee(
    employee_id: str,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
    payload: Annotated[Any, Depends(get_json_body)],
) -> EmployeeResponse:
    """Partially update an employee. Absent fields are left untouched."""
    employee = await employee_service.update_employee(employee_id, payload)
    return EmployeeResponse(data=employee, message="Employee updated successfully")


@router.delete("/employees/{employee_id}", response_model=MessageResponse, responses=ERROR_RESPONSES)
async def delete_employee(
    employee_id: str,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> MessageResponse:
    """Delete an employee."""
    await employee_service.delete_employee(employee_id)
    return MessageResponse(message="Employee deleted successfully")
