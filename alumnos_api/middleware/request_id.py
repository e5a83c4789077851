"""
Alumnos API: Request ID Middleware
==================================

What:  Assigns an ID to each incoming request and returns it in X-Request-ID.
Why:   Every log line written while handling a request can be correlated,
       including the driver error logged before a 500 response.
How:   Uses the client's X-Request-ID when present, otherwise a short UUID;
       stores it in a ContextVar and echoes it in the response header.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on the same loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Client-supplied IDs end up in every error log line; longer ones are cut
MAX_REQUEST_ID_LENGTH = 64


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a unique ID to each request for tracing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        supplied = request.headers.get("X-Request-ID", "").strip()
        rid = supplied[:MAX_REQUEST_ID_LENGTH] or uuid.uuid4().hex[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
