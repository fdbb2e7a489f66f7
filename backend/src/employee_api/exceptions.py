"""Domain-specific exceptions for the employee API.

Every failure the API knows how to report is an ``EmployeeAPIError`` subclass
tagged with an ``ErrorKind``. The error handler dispatches on that tag, so a
new failure shape needs a new kind rather than another attribute sniff.
"""

from collections.abc import Mapping, Sequence
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from employee_api.utils.validation import FieldError


class ErrorKind(StrEnum):
    """Discriminant for classified API errors."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UPSTREAM = "upstream"
    DUPLICATE_KEY = "duplicate_key"
    CAST = "cast"
    AGGREGATE_VALIDATION = "aggregate_validation"
    ROUTE_NOT_FOUND = "route_not_found"
    TIMEOUT = "timeout"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    MALFORMED_BODY = "malformed_body"


class EmployeeAPIError(Exception):
    """Base exception for all employee API errors."""

    kind: ErrorKind = ErrorKind.UPSTREAM

    def __init__(self, message: str = "", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationFailedError(EmployeeAPIError):
    """Raised when a request payload violates one or more field rules."""

    kind = ErrorKind.VALIDATION

    def __init__(self, errors: Sequence["FieldError"]) -> None:
        self.errors = list(errors)
        super().__init__("Validation failed", {"fields": [e.field for e in self.errors]})


class MalformedBodyError(EmployeeAPIError):
    """Raised when a request body cannot be decoded as JSON."""

    kind = ErrorKind.MALFORMED_BODY

    def __init__(self, message: str = "Malformed JSON in request body") -> None:
        super().__init__(message)


class PayloadTooLargeError(EmployeeAPIError):
    """Raised when a request body exceeds the configured size limit."""

    kind = ErrorKind.PAYLOAD_TOO_LARGE

    def __init__(self, limit: int) -> None:
        super().__init__("Request entity too large", {"limit": limit})


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(EmployeeAPIError):
    """Raised when the record store has no record for an identifier."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str = "Resource", resource_id: str | None = None) -> None:
        self.resource = resource
        details = {"id": str(resource_id)} if resource_id is not None else {}
        super().__init__(f"{resource} not found", details)


class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee cannot be found."""

    def __init__(self, employee_id: str | None = None) -> None:
        super().__init__("Employee", employee_id)


class RouteNotFoundError(EmployeeAPIError):
    """Raised for requests that match no route."""

    kind = ErrorKind.ROUTE_NOT_FOUND

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Not found - {path}")


# =============================================================================
# Upstream Errors (record store)
# =============================================================================


class StoreError(EmployeeAPIError):
    """Raised when a record store call fails for any reason but not-found.

    ``status_code`` is only set when the failure declares one; the handler
    falls back to 500 otherwise.
    """

    kind = ErrorKind.UPSTREAM

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class DuplicateKeyError(EmployeeAPIError):
    """Raised when the store rejects a write because a unique key exists."""

    kind = ErrorKind.DUPLICATE_KEY


class CastError(EmployeeAPIError):
    """Raised when the store cannot interpret an identifier or value type."""

    kind = ErrorKind.CAST


class AggregateValidationError(EmployeeAPIError):
    """Raised when the store reports several field-level rejections at once."""

    kind = ErrorKind.AGGREGATE_VALIDATION

    def __init__(self, errors: Mapping[str, str]) -> None:
        self.errors = dict(errors)
        super().__init__(", ".join(self.errors.values()))


# =============================================================================
# Request Lifecycle Errors
# =============================================================================


class RequestTimeoutError(EmployeeAPIError):
    """Raised when handling a request exceeds the configured time budget."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__("Request timeout", {"timeout_seconds": timeout_seconds})
