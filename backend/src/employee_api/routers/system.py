"""System router - health check and API information."""

import platform
import time
from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from employee_api.config import Settings
from employee_api.constants.validation import (
    ALLOWED_DEPARTMENTS,
    ALLOWED_EMPLOYEE_STATUSES,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
)
from employee_api.dependencies import get_app_settings

router = APIRouter()


@router.get("/health")
async def health_check(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> dict[str, Any]:
    """Health check endpoint."""
    return {
        "success": True,
        "message": "Server is healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "environment": settings.environment,
    }


@router.get("/")
async def api_info(settings: Annotated[Settings, Depends(get_app_settings)]) -> dict[str, Any]:
    """API information and endpoint documentation."""
    return {
        "message": settings.app_name,
        "version": settings.app_version,
        "description": "REST API for employee management backed by a JSON document store",
        "documentation": {
            "endpoints": {
                "GET /": "API information and documentation",
                "GET /health": "Health check endpoint",
                "GET /api/employees": "Get all employees (supports pagination and filtering)",
                "GET /api/employees/{id}": "Get employee by ID",
                "POST /api/employees": "Create new employee",
                "PUT /api/employees/{id}": "Update employee by ID (supports partial updates)",
                "DELETE /api/employees/{id}": "Delete employee by ID",
            },
            "queryParameters": {
                "page": f"Page number for pagination (default: {DEFAULT_PAGE})",
                "limit": f"Number of records per page (default: {DEFAULT_PAGE_SIZE})",
                "department": f"Filter by department ({', '.join(ALLOWED_DEPARTMENTS)})",
                "status": f"Filter by status ({', '.join(ALLOWED_EMPLOYEE_STATUSES)})",
            },
            "responseFormat": {
                "success": "boolean",
                "data": "object|array",
                "message": "string",
                "pagination": "object (for list endpoints)",
                "errors": "array (for validation errors)",
            },
        },
        "dependencies": {
            "recordStore": settings.record_store_url,
            "pythonVersion": platform.python_version(),
            "platform": platform.system().lower(),
        },
    }
