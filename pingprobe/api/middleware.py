"""HTTP middleware binding request context to structured logs.

Every log entry emitted while a ping is handled (including "Ping failed"
and deprecation notices) carries the request ID and protocol version.
"""

import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from pingprobe.core.logging_config import bind_contextvars, clear_contextvars

REQUEST_ID_HEADER = "X-Request-ID"


class RequestCorrelationMiddleware(BaseHTTPMiddleware):
    """Attach a correlation ID to the logging context.

    An upstream `X-Request-ID` is reused; otherwise a UUID4 is generated.
    The ID is not echoed back: ping responses carry only their caching and
    content-type headers.
    """

    async def dispatch(self, request: Request, call_next):
        # Context may survive between requests served by the same task.
        clear_contextvars()

        bind_contextvars(
            request_id=request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4()),
            http_version=request.scope.get("http_version"),
        )

        response: Response = await call_next(request)
        return response
