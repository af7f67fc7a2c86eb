"""
ShopDesk Backend: Access Log Middleware
=======================================

What:  One access log line per API request.
Who:   Runs inside RequestIDMiddleware, so the request ID is already set.

Log line:
    PUT /updateProduct/3 200 4.2ms 18342B [a1b2c3d4] from 192.168.1.100

The byte count is the request's Content-Length (image uploads dominate it),
or "-" when the client did not send one. Static page assets are not logged.
Request bodies and headers never are.
"""

import logging
import time
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from shopdesk.middleware.request_id import request_id_var

logger = logging.getLogger("shopdesk.access")

DEFAULT_QUIET_SUFFIXES = (".css", ".js", ".png", ".jpg", ".jpeg", ".gif", ".svg", ".ico", ".woff", ".woff2")


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status, duration, upload size, request ID and client.

    A request whose handler raises is logged as a 500 before the exception
    continues to the server.
    """

    def __init__(
        self, app: ASGIApp, quiet_suffixes: Iterable[str] = DEFAULT_QUIET_SUFFIXES
    ) -> None:
        super().__init__(app)
        self.quiet_suffixes = tuple(s.lower() for s in quiet_suffixes)

    def is_quiet(self, path: str) -> bool:
        return path.lower().endswith(self.quiet_suffixes)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if self.is_quiet(path):
            return await call_next(request)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self.log_request(request, 500, started)
            raise

        self.log_request(request, response.status_code, started)
        return response

    def log_request(self, request: Request, status: int, started: float) -> None:
        duration_ms = (time.perf_counter() - started) * 1000
        client = request.client.host if request.client else "unknown"
        size = request.headers.get("content-length", "-")
        rid = request_id_var.get()

        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms %sB [%s] from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            size,
            rid,
            client,
            extra={
                "request_id": rid,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )
