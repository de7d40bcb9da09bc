"""
CarValue Backend — Request ID Middleware
==========================================

What:  Tags each request with a short correlation ID and echoes it back in
       the X-Request-ID response header.
How:   A client-supplied X-Request-ID is reused when it is short and
       printable; anything else is replaced by an 8-character UUID prefix.
       The ID lives in a ContextVar (loggers, exception handlers) and in
       request.state (route handlers).
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
MAX_CLIENT_ID_LENGTH = 64

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def _new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(header_value) -> str:
    """Reuse the caller's ID if it is safe to put in logs, else mint one."""
    if (
        header_value
        and len(header_value) <= MAX_CLIENT_ID_LENGTH
        and header_value.isprintable()
    ):
        return header_value
    return _new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
