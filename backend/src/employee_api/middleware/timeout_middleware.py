"""Request timeout middleware."""

import asyncio

from fastapi import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from employee_api.exceptions import RequestTimeoutError
from employee_api.middleware.error_handler import handle_exception


class TimeoutMiddleware:
    """Answer 408 when a request is not answered within the time budget.

    Written as plain ASGI so the timed-out handler is cancelled rather than
    left running behind a response that was already sent. Once the response
    has started the timeout can no longer be reported and is re-raised.
    """

    def __init__(self, app: ASGIApp, timeout_seconds: float) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application
            timeout_seconds: Time budget per request
        """
        self.app = app
        self.timeout_seconds = timeout_seconds

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(self.app(scope, receive, send_wrapper), timeout=self.timeout_seconds)
        except TimeoutError:
            if response_started:
                raise
            response = handle_exception(Request(scope), RequestTimeoutError(self.timeout_seconds))
            await response(scope, receive, send)
