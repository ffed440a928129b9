"""
TxtStore — Request Logging Middleware
======================================

What:  One access-log line per request: method, path, status, duration.
Why:   Store failures surface to clients as opaque 500s; the access log plus
       the request ID is how an operator finds the matching warning from the
       Record Store.
How:   Times the downstream call and logs at a level chosen by status class.

What we log vs what we don't:
    Log: method, path, status, duration, client IP, request ID
    Don't log: request bodies (record text is arbitrary user content)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from txtstore.middleware.request_id import request_id_var

logger = logging.getLogger("txtstore.access")

# Probe endpoints hit every few seconds; logging them drowns real traffic
QUIET_PATHS = {"/", "/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs structured information about each HTTP request and response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        # 5xx → ERROR, 4xx → WARNING, everything else → INFO
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
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
