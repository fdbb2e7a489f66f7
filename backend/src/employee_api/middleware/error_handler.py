"""Centralized error classification and the handlers that emit it.

Every failure becomes a ``{success: false, message, errors?, stack?}``
response. ``classify`` is a pure function of the error and the execution
mode; ``handle_exception`` logs the error exactly once and renders the
classification.
"""

import logging
import traceback
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from employee_api.exceptions import (
    AggregateValidationError,
    EmployeeAPIError,
    ErrorKind,
    RouteNotFoundError,
    StoreError,
    ValidationFailedError,
)
from employee_api.utils.validation import FieldError

logger = logging.getLogger(__name__)

DEVELOPMENT_ENVIRONMENT = "development"
SERVER_ERROR_MESSAGE = "Server Error"
VALIDATION_FAILED_MESSAGE = "Validation failed"
DUPLICATE_KEY_MESSAGE = "Duplicate field value entered"
CAST_ERROR_MESSAGE = "Resource not found"

# Detail Starlette uses when no route matches
ROUTING_NOT_FOUND_DETAIL = "Not Found"


@dataclass(frozen=True)
class ClassifiedError:
    """HTTP rendering of a single error."""

    status_code: int
    message: str
    errors: list[FieldError] | None = None
    stack: str | None = None

    def to_content(self) -> dict[str, Any]:
        """Build the JSON error envelope."""
        content: dict[str, Any] = {"success": False, "message": self.message}
        if self.errors is not None:
            content["errors"] = [error.to_dict() for error in self.errors]
        if self.stack is not None:
            content["stack"] = self.stack
        return content


_Classification = tuple[int, str, list[FieldError] | None]


def _classify_validation(exc: ValidationFailedError) -> _Classification:
    return status.HTTP_400_BAD_REQUEST, VALIDATION_FAILED_MESSAGE, exc.errors


def _classify_upstream(exc: StoreError) -> _Classification:
    status_code = exc.status_code or status.HTTP_500_INTERNAL_SERVER_ERROR
    return status_code, exc.message or SERVER_ERROR_MESSAGE, None


def _classify_aggregate(exc: AggregateValidationError) -> _Classification:
    return (
        status.HTTP_400_BAD_REQUEST,
        f"Validation Error: {', '.join(exc.errors.values())}",
        None,
    )


def _own_message(status_code: int) -> Callable[[EmployeeAPIError], _Classification]:
    def classify_kind(exc: EmployeeAPIError) -> _Classification:
        return status_code, exc.message or SERVER_ERROR_MESSAGE, None

    return classify_kind


def _fixed_message(status_code: int, message: str) -> Callable[[EmployeeAPIError], _Classification]:
    def classify_kind(exc: EmployeeAPIError) -> _Classification:
        return status_code, message, None

    return classify_kind


_KIND_CLASSIFIERS: dict[ErrorKind, Callable[[Any], _Classification]] = {
    ErrorKind.VALIDATION: _classify_validation,
    ErrorKind.NOT_FOUND: _own_message(status.HTTP_404_NOT_FOUND),
    ErrorKind.UPSTREAM: _classify_upstream,
    ErrorKind.DUPLICATE_KEY: _fixed_message(status.HTTP_400_BAD_REQUEST, DUPLICATE_KEY_MESSAGE),
    ErrorKind.CAST: _fixed_message(status.HTTP_404_NOT_FOUND, CAST_ERROR_MESSAGE),
    ErrorKind.AGGREGATE_VALIDATION: _classify_aggregate,
    ErrorKind.ROUTE_NOT_FOUND: _own_message(status.HTTP_404_NOT_FOUND),
    ErrorKind.TIMEOUT: _own_message(status.HTTP_408_REQUEST_TIMEOUT),
    ErrorKind.PAYLOAD_TOO_LARGE: _own_message(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE),
    ErrorKind.MALFORMED_BODY: _own_message(status.HTTP_400_BAD_REQUEST),
}


def _classify_unknown(exc: BaseException) -> _Classification:
    """Generic branch for exceptions outside the API hierarchy."""
    if isinstance(exc, StarletteHTTPException):
        return exc.status_code, str(exc.detail) or SERVER_ERROR_MESSAGE, None

    status_code = getattr(exc, "status_code", None)
    if not isinstance(status_code, int) or not 400 <= status_code <= 599:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return status_code, str(exc) or SERVER_ERROR_MESSAGE, None


def format_stack(exc: BaseException) -> str:
    """Format the full traceback of an exception."""
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def classify(exc: BaseException, environment: str) -> ClassifiedError:
    """Map an error to its HTTP status, message and optional details.

    Args:
        exc: Any exception raised while handling a request
        environment: Execution mode; the traceback is exposed only in development

    Returns:
        ClassifiedError for the response
    """
    if isinstance(exc, EmployeeAPIError):
        status_code, message, errors = _KIND_CLASSIFIERS[exc.kind](exc)
    else:
        status_code, message, errors = _classify_unknown(exc)

    stack = format_stack(exc) if environment == DEVELOPMENT_ENVIRONMENT else None
    return ClassifiedError(status_code=status_code, message=message, errors=errors, stack=stack)


def _log_error(request: Request, exc: BaseException, classified: ClassifiedError) -> None:
    log = logger.error if classified.status_code >= 500 else logger.warning
    log(
        f"{request.method} {request.url.path} -> {classified.status_code}: {classified.message}",
        exc_info=exc,
        extra={"status_code": classified.status_code, "path": request.url.path},
    )


def handle_exception(request: Request, exc: BaseException) -> JSONResponse:
    """Classify, log once and render an error response.

    The execution mode is read from the settings bound to the running
    application each time, never cached here.
    """
    environment = request.app.state.settings.environment
    classified = classify(exc, environment)
    _log_error(request, exc, classified)
    return JSONResponse(status_code=classified.status_code, content=classified.to_content())


def requested_path(request: Request) -> str:
    """Path plus query string, as the client asked for it."""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


async def api_error_handler(request: Request, exc: EmployeeAPIError) -> JSONResponse:
    """Handle all employee API errors."""
    return handle_exception(request, exc)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle framework-level request validation (path and query parameters).

    Reported in the same shape as body validation failures.
    """
    errors = []
    for error in exc.errors():
        loc = error.get("loc", ())
        field = str(loc[-1]) if loc else "request"
        errors.append(FieldError(field, f"{field}: {error.get('msg', 'Invalid value')}"))
    failure = ValidationFailedError(errors)
    failure.__cause__ = exc
    return handle_exception(request, failure)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions raised by routing.

    An unmatched route becomes a route-not-found error naming the path.
    """
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == ROUTING_NOT_FOUND_DETAIL:
        not_found = RouteNotFoundError(requested_path(request))
        not_found.__cause__ = exc
        return handle_exception(request, not_found)
    return handle_exception(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI app.

    The catch-all for unexpected exceptions lives in
    ``ErrorHandlingMiddleware`` so it answers without re-raising.
    """
    app.add_exception_handler(EmployeeAPIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
