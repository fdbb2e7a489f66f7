"""Centralized dependency injection factories for FastAPI."""

import json
from typing import Annotated, Any

from fastapi import Depends, Request

from employee_api.config import Settings
from employee_api.exceptions import MalformedBodyError
from employee_api.repositories.employee_repository import EmployeeRepository
from employee_api.services.employee_service import EmployeeService


def get_app_settings(request: Request) -> Settings:
    """Get the settings the running application was built with."""
    return request.app.state.settings


def get_employee_repository(request: Request) -> EmployeeRepository:
    """Get EmployeeRepository bound to the shared record store client."""
    return EmployeeRepository(request.app.state.store_client)


def get_employee_service(
    repository: Annotated[EmployeeRepository, Depends(get_employee_repository)],
) -> EmployeeService:
    """Get EmployeeService instance."""
    return EmployeeService(repository)


async def get_json_body(request: Request) -> Any:
    """Decode the request body as JSON.

    An empty body decodes to an empty object so that validation, not the
    parser, reports the missing fields.

    Raises:
        MalformedBodyError: If the body is not valid JSON
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError as e:
        raise MalformedBodyError(f"Malformed JSON in request body: {e}") from e
