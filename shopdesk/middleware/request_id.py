"""
ShopDesk Backend: Request ID Middleware
=======================================

What:  Gives each request a correlation ID and returns it as X-Request-ID.
How:   A well-formed client ID is reused; anything else is replaced by a
       short generated one. The ID lives in a ContextVar for the duration of
       the request so log lines and error bodies can pick it up.

Client IDs are written into log lines, so only short tokens of letters,
digits, dots, dashes and underscores are trusted.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def accept_client_id(value: Optional[str]) -> Optional[str]:
    """Return the client-supplied ID if it is safe to log, else None."""
    if value and _CLIENT_ID_PATTERN.match(value):
        return value
    return None


class RequestIDMiddleware(BaseHTTPMiddleware):

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER) -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = accept_client_id(request.headers.get(self.header_name)) or new_request_id()
        request.state.request_id = rid

        # Left set after the response: the catch-all 500 handler runs outside
        # this middleware and still reads it
        request_id_var.set(rid)
        response = await call_next(request)

        response.headers[self.header_name] = rid
        return response
