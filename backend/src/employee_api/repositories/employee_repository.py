"""Employee repository backed by a remote json-server style document store."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import httpx

from employee_api.config import Settings
from employee_api.exceptions import StoreError

logger = logging.getLogger(__name__)

EMPLOYEES_PATH = "/employees"
TOTAL_COUNT_HEADER = "X-Total-Count"

# User-Agent per RFC 7231
USER_AGENT = "EmployeeRestAPI/1.0"


def create_store_client(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """Create the shared HTTP client used for all record store calls.

    Args:
        settings: Application settings
        transport: Optional transport override (tests pass a mock transport)

    Returns:
        Configured AsyncClient with connection pooling
    """
    return httpx.AsyncClient(
        base_url=settings.record_store_url,
        timeout=httpx.Timeout(
            settings.record_store_timeout_seconds,
            connect=settings.record_store_connect_timeout_seconds,
        ),
        limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
        headers={
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        },
        transport=transport,
    )


def _describe(exc: Exception) -> str:
    """Short root-cause text for a failed store call."""
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        return f"Request failed with status code {response.status_code}"
    return str(exc) or type(exc).__name__


def _item_path(employee_id: str) -> str:
    """Store path for one record; the id is a single encoded path segment."""
    return f"{EMPLOYEES_PATH}/{quote(str(employee_id), safe='')}"


def _record(response: httpx.Response) -> dict[str, Any]:
    """Decode a single-record response body."""
    payload = response.json()
    if not isinstance(payload, dict):
        raise ValueError("Unexpected response payload")
    return payload


@dataclass
class EmployeePage:
    """One page of employee records plus the store-wide match count."""

    records: list[dict[str, Any]] = field(default_factory=list)
    total_count: int = 0


class EmployeeRepository:
    """Repository for employee records held by the record store.

    Not-found answers become ``None`` / ``False``; every other failure is
    re-raised as ``StoreError`` with a ``Failed to <verb> ...`` message.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Initialize repository with the shared store client."""
        self.client = client

    async def list(
        self,
        filters: Mapping[str, str] | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> EmployeePage:
        """List employees matching equality filters.

        Args:
            filters: Field/value pairs; empty values are skipped
            page: 1-based page number
            limit: Page size

        Returns:
            EmployeePage with the page records and the total count
        """
        params: list[tuple[str, str | int]] = [
            (key, value) for key, value in (filters or {}).items() if value
        ]
        params.append(("_page", page))
        params.append(("_limit", limit))

        try:
            response = await self.client.get(EMPLOYEES_PATH, params=params)
            response.raise_for_status()
            records = response.json()
            if not isinstance(records, list):
                raise ValueError("Unexpected response payload")
            total_header = response.headers.get(TOTAL_COUNT_HEADER)
            total_count = int(total_header) if total_header else len(records)
        except (httpx.HTTPError, ValueError) as e:
            raise StoreError(f"Failed to fetch employees: {_describe(e)}") from e

        return EmployeePage(records=records, total_count=total_count)

    async def get_by_id(self, employee_id: str) -> dict[str, Any] | None:
        """Get an employee by ID.

        Args:
            employee_id: Store-assigned identifier

        Returns:
            Employee record or None if not found
        """
        try:
            response = await self.client.get(_item_path(employee_id))
            if response.status_code == httpx.codes.NOT_FOUND:
                return None
            response.raise_for_status()
            return _record(response)
        except (httpx.HTTPError, ValueError) as e:
            raise StoreError(f"Failed to fetch employee: {_describe(e)}") from e

    async def create(self, record: Mapping[str, Any]) -> dict[str, Any]:
        """Create an employee; the store assigns ``id``.

        Args:
            record: Validated employee fields

        Returns:
            Stored employee record
        """
        try:
            response = await self.client.post(EMPLOYEES_PATH, json=dict(record))
            response.raise_for_status()
            created = _record(response)
        except (httpx.HTTPError, ValueError) as e:
            raise StoreError(f"Failed to create employee: {_describe(e)}") from e

        logger.info(f"Employee created in record store: id={created.get('id')}")
        return created

    async def update(self, employee_id: str, changes: Mapping[str, Any]) -> dict[str, Any] | None:
        """Merge ``changes`` into an existing employee.

        Uses PATCH so fields absent from ``changes`` keep their stored values.

        Args:
            employee_id: Store-assigned identifier
            changes: Validated subset of employee fields

        Returns:
            Updated employee record or None if not found
        """
        try:
            response = await self.client.patch(_item_path(employee_id), json=dict(changes))
            if response.status_code == httpx.codes.NOT_FOUND:
                return None
            response.raise_for_status()
            return _record(response)
        except (httpx.HTTPError, ValueError) as e:
            raise StoreError(f"Failed to update employee: {_describe(e)}") from e

    async def remove(self, employee_id: str) -> bool:
        """Delete an employee.

        Args:
            employee_id: Store-assigned identifier

        Returns:
            True if removed, False if not found
        """
        try:
            response = await self.client.delete(_item_path(employee_id))
            if response.status_code == httpx.codes.NOT_FOUND:
                return False
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise StoreError(f"Failed to delete employee: {_describe(e)}") from e

        logger.info(f"Employee removed from record store: id={employee_id}")
        return True
