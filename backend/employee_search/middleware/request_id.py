"""
Request ID middleware for correlation tracking.

Every request gets a correlation ID:
- Taken from the X-Request-ID header when the client sends one
- Generated as a UUID4 otherwise
- Stored on request.state.request_id
- Echoed back in the X-Request-ID response header
"""

import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware to attach a correlation ID to every request and response.

    Example:
        app.add_middleware(RequestIDMiddleware)

    Usage in routes:
        @router.get("/example")
        async def example(request: Request):
            logger.info("Searching", extra={"request_id": request.state.request_id})
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
