"""Data Transfer Objects package."""

from employee_api.models.dto.employee import (
    EmployeeListResponse,
    EmployeeResponse,
    ErrorResponse,
    FieldErrorResponse,
    MessageResponse,
    Pagination,
)

__all__ = [
    "EmployeeListResponse",
    "EmployeeResponse",
    "ErrorResponse",
    "FieldErrorResponse",
    "MessageResponse",
    "Pagination",
]
