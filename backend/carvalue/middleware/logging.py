"""
CarValue Backend — Request Logging Middleware
===============================================

What:  One access-log line per HTTP request: method, path, status, duration.
Who:   Applied to every request except QUIET_PATHS (probes would drown the log).

Log level follows the status code:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Request bodies, cookies and auth headers are never logged: they carry
passwords and the signed session.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from carvalue.middleware.request_id import request_id_var

logger = logging.getLogger("carvalue.access")

QUIET_PATHS = frozenset({"/health"})


def _level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        rid = request_id_var.get("")
        client = request.client.host if request.client else "unknown"
        logger.log(
            _level_for_status(response.status_code),
            "[%s] %s %s → %d (%.1fms) client=%s",
            rid,
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            client,
            extra={
                "request_id": rid,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
