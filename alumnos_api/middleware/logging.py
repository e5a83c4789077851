"""
Alumnos API: Request Logging Middleware
=======================================

What:  One access-log line for every HTTP request.
How:   Measures the time spent in the rest of the stack and logs method,
       path, status, duration, request ID and client address on the
       `alumnos.access` logger. main.setup_logging() can additionally route
       that logger to a file (ACCESS_LOG_PATH).

Level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Request bodies are never logged; they carry personal data (CURP, RFC, email).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from alumnos_api.middleware.request_id import request_id_var

ACCESS_LOGGER_NAME = "alumnos.access"

logger = logging.getLogger(ACCESS_LOGGER_NAME)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of each request."""

    # Probed every few seconds by orchestrators
    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        if path in self.SKIPPED_PATHS:
            return await call_next(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
