"""Middleware package."""

from employee_api.middleware.body_limit_middleware import BodyLimitMiddleware
from employee_api.middleware.error_handling_middleware import ErrorHandlingMiddleware
from employee_api.middleware.request_logging_middleware import RequestLoggingMiddleware
from employee_api.middleware.security_headers_middleware import SecurityHeadersMiddleware
from employee_api.middleware.timeout_middleware import TimeoutMiddleware

__all__ = [
    "BodyLimitMiddleware",
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
]
