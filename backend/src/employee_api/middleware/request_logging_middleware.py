"""Request logging middleware."""

import logging
import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with status and duration.

    Development gets a short line; other environments also record the
    client address, query string and user agent.
    """

    # Paths to exclude from request logging
    EXCLUDED_PATHS = {"/health"}

    def __init__(self, app, verbose: bool = True) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application
            verbose: Include client details in each line
        """
        super().__init__(app)
        self.verbose = verbose

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Response],
    ) -> Response:
        """Process the request and log its outcome.

        Args:
            request: Incoming request
            call_next: Next middleware/handler

        Returns:
            Response from downstream handler
        """
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        line = f"{request.method} {request.url.path} {response.status_code} {duration_ms:.1f}ms"
        if self.verbose:
            client_ip = request.client.host if request.client else "unknown"
            user_agent = request.headers.get("user-agent", "-")
            query = f"?{request.url.query}" if request.url.query else ""
            line = (
                f"{client_ip} \"{request.method} {request.url.path}{query}\" "
                f"{response.status_code} {duration_ms:.1f}ms \"{user_agent}\""
            )

        if response.status_code < 400:
            logger.info(line)
        else:
            logger.warning(line)

        return response
