"""
Student API — Request ID Middleware
====================================

What:  Assigns a correlation id to each request and echoes it back in the
       X-Request-ID response header.
How:   A client-supplied X-Request-ID is reused when it is a short token of
       letters, digits, '.', '_' or '-'; anything else is replaced by a fresh
       8-hex id so it cannot forge or split access log lines. The id lives in
       a ContextVar so loggers and exception handlers can read it without
       access to the request object.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(supplied: Optional[str]) -> str:
    """Returns the client's id if it is safe to log, else a new one."""
    if supplied and _VALID_REQUEST_ID.fullmatch(supplied):
        return supplied
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Stores the id in request_id_var and request.state.request_id."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        # Left set after the response: the fallback 500 handler runs outside
        # this middleware and still reads it
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
