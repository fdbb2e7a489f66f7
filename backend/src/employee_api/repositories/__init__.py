"""Repositories package."""

from employee_api.repositories.employee_repository import (
    EmployeePage,
    EmployeeRepository,
    create_store_client,
)

__all__ = [
    "EmployeePage",
    "EmployeeRepository",
    "create_store_client",
]
