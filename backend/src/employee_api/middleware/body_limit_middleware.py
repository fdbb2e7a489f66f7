"""Request body size limit middleware."""

from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from employee_api.exceptions import MalformedBodyError, PayloadTooLargeError
from employee_api.middleware.error_handler import handle_exception


class BodyLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose declared body size exceeds the limit.

    Only the Content-Length header is checked.
    """

    def __init__(self, app, max_body_bytes: int) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application
            max_body_bytes: Largest accepted request body
        """
        super().__init__(app)
        self.max_body_bytes = max_body_bytes

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Response],
    ) -> Response:
        """Check the declared body size before the handler runs.

        Args:
            request: Incoming request
            call_next: Next middleware/handler

        Returns:
            Response from downstream handler or a 413/400 error response
        """
        content_length = request.headers.get("content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                return handle_exception(request, MalformedBodyError("Invalid Content-Length header"))
            if declared > self.max_body_bytes:
                return handle_exception(request, PayloadTooLargeError(self.max_body_bytes))

        return await call_next(request)
