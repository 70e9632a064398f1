"""
Request Context Middleware

Binds a per-request ID into structlog's context so every log line emitted
while handling a request can be correlated, and echoes it back to the client.
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
import structlog

REQUEST_ID_HEADER = "X-Request-ID"

logger = structlog.get_logger()


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Assigns an ID to each request and logs its outcome.

    An incoming ``X-Request-ID`` header is reused; otherwise a UUID4 is
    generated. The authenticated user, when there is one, is taken from
    ``request.state.user_id`` after the handler ran.

    Usage:
        app.add_middleware(RequestContextMiddleware)
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            response = await call_next(request)

            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                user_id=getattr(request.state, "user_id", None),
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
