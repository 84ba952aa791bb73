"""
MoodJournal Backend — Request Logging Middleware
=================================================

What:  One access log line per HTTP request.
How:   Measures time around the downstream call and logs method, path,
       status and duration, with the request ID for correlation.

Log line:
    2025-10-15T12:00:00 [INFO] moodjournal.access: POST /api/stats/summary 200 3.1ms [1f0c2a9e] from 127.0.0.1

Privacy:
    Request bodies are never logged. They contain the user's journal text.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from moodjournal.middleware.request_id import request_id_var

logger = logging.getLogger("moodjournal.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request with its outcome.

    Level by status: 5xx → ERROR, 4xx → WARNING, otherwise INFO.
    /health is skipped; probes hit it every few seconds.
    """

    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

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
