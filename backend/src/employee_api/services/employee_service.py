"""Employee service: validation and record store orchestration."""

import logging
from collections.abc import Mapping
from typing import Any

from employee_api.constants.validation import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from employee_api.exceptions import EmployeeNotFoundError
from employee_api.models.dto.employee import Pagination
from employee_api.repositories.employee_repository import EmployeeRepository
from employee_api.utils.validation import (
    CREATE_RULES,
    UPDATE_RULES,
    apply_defaults,
    ensure_valid,
)

logger = logging.getLogger(__name__)


class EmployeeService:
    """Service for employee CRUD.

    Payloads are validated before any store call, so a rejected request
    never causes a partial write.
    """

    def __init__(self, repository: EmployeeRepository) -> None:
        """Initialize service with the employee repository."""
        self.employee_repo = repository

    async def list_employees(
        self,
        filters: Mapping[str, str | None] | None = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> tuple[list[dict[str, Any]], Pagination]:
        """List employees with optional equality filters.

        Args:
            filters: Field/value pairs; None and empty values are ignored
            page: 1-based page number
            limit: Page size

        Returns:
            Tuple of (records, pagination)
        """
        active_filters = {key: value for key, value in (filters or {}).items() if value}
        result = await self.employee_repo.list(active_filters, page, limit)
        return result.records, Pagination.from_counts(page, limit, result.total_count)

    async def get_employee(self, employee_id: str) -> dict[str, Any]:
        """Get an employee by ID.

        Raises:
            EmployeeNotFoundError: If the store has no such employee
        """
        employee = await self.employee_repo.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee

    async def create_employee(self, payload: Any) -> dict[str, Any]:
        """Validate and create an employee.

        Args:
            payload: Decoded request body

        Returns:
            Stored employee including its store-assigned id

        Raises:
            ValidationFailedError: If the payload violates the create rules
        """
        ensure_valid(payload, CREATE_RULES)
        record = apply_defaults(payload, CREATE_RULES)
        return await self.employee_repo.create(record)

    async def update_employee(self, employee_id: str, payload: Any) -> dict[str, Any]:
        """Validate and apply a partial update.

        Raises:
            ValidationFailedError: If a present field violates its rule
            EmployeeNotFoundError: If the store has no such employee
        """
        ensure_valid(payload, UPDATE_RULES)
        updated = await self.employee_repo.update(employee_id, payload)
        if updated is None:
            raise EmployeeNotFoundError(employee_id)
        return updated

    async def delete_employee(self, employee_id: str) -> None:
        """Delete an employee.

        Raises:
            EmployeeNotFoundError: If the store has no such employee
        """
        if not await self.employee_repo.remove(employee_id):
            raise EmployeeNotFoundError(employee_id)
        logger.info(f"Employee deleted: id={employee_id}")
