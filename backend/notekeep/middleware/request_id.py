"""
NoteKeep Backend — Request ID Middleware
=========================================

What:  Tags every request with a correlation ID that shows up in the access
       log, in error bodies (`request_id`) and in the X-Request-ID header.
How:   resolve_request_id() accepts a caller-supplied ID only when it is a
       short token of safe characters; anything else is replaced, so a
       client cannot inject newlines or padding into the logs.

Accepted client IDs:
    1-64 characters from [A-Za-z0-9._-]   e.g. "trace-123", "a1b2c3d4"
Rejected (a fresh ID is generated instead):
    empty, too long, spaces, control characters, anything else
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

_SAFE_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")

# Read by exception handlers and the access log; each request runs in its
# own context, so concurrent requests never see each other's ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(supplied: Optional[str]) -> str:
    """Return `supplied` if it is a safe token, otherwise a new ID."""
    if supplied and _SAFE_REQUEST_ID.fullmatch(supplied):
        return supplied
    if supplied:
        logger.debug("Discarding malformed %s header (%d chars)", REQUEST_ID_HEADER, len(supplied))
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Binds the resolved ID to the request context and echoes it back."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
