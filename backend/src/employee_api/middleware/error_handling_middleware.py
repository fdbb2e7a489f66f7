"""Catch-all middleware for exceptions no registered handler claims."""

from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from employee_api.middleware.error_handler import handle_exception


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Render unexpected exceptions through the central error handler.

    Handling them here instead of with an ``Exception`` handler keeps
    Starlette's server error middleware from re-raising (and logging) them a
    second time.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Response],
    ) -> Response:
        """Process the request and convert unhandled exceptions.

        Args:
            request: Incoming request
            call_next: Next middleware/handler

        Returns:
            Response from downstream handler or an error response
        """
        try:
            return await call_next(request)
        except Exception as exc:
            return handle_exception(request, exc)
