"""
Student API — Request Logging Middleware
=========================================

What:  One access log line per request on the `student_api.access` logger:
       method, path, status, duration, request id, caller and client IP.
Why:   uvicorn's access log has no request id, no duration and no caller.

Line format:
    POST /students 201 12.4ms [a1b2c3d4] user=65f0c0ffee... from 10.0.0.7

`user` is the `sub` claim of the bearer token when the auth gate accepted
one, otherwise "-". The same values are attached to the record as extras
(request_id, method, path, status, duration_ms, user, client_ip).

Log levels by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

A request whose handler raised past the exception handlers is logged as a
500 before the exception continues to the server error handler.

Request bodies and the Authorization header are never logged: bodies carry
passwords and headers carry bearer tokens.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from student_api.middleware.request_id import request_id_var

logger = logging.getLogger("student_api.access")

ANONYMOUS = "-"


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def authenticated_subject(request: Request) -> str:
    """`sub` claim stored by require_auth, or "-" for public/rejected calls."""
    claims: Optional[dict] = getattr(request.state, "user", None)
    if not claims:
        return ANONYMOUS
    return str(claims.get("sub") or ANONYMOUS)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request after the response has been produced."""

    # Probes hit these every few seconds
    QUIET_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log(request, 500, start_time)
            raise

        self._log(request, response.status_code, start_time)
        return response

    def _log(self, request: Request, status: int, start_time: float) -> None:
        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")
        user = authenticated_subject(request)
        client_ip = request.client.host if request.client else "unknown"

        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] user=%s from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            rid,
            user,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "user": user,
                "client_ip": client_ip,
            },
        )
