"""API routers package."""

from employee_api.routers import employees, system

__all__ = [
    "employees",
    "system",
]
