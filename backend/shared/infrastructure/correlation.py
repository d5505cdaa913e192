"""
Request ids for the kiosk API.

Every request carries an ``X-Request-ID``: the one sent by the client (the
kiosk dashboard or the student app) when it looks sane, otherwise a fresh
UUID. The id is echoed in the response and stamped on every log line written
while the request is handled, so a failed checkout can be traced from the
browser error to the persistence fallback logs.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"

# Client ids end up verbatim in the logs
_ACCEPTED_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(incoming: str | None) -> str:
    """Keep a well-formed client id, otherwise mint a new one."""
    if incoming and _ACCEPTED_REQUEST_ID.match(incoming):
        return incoming
    return str(uuid.uuid4())


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Binds the request id to the context for the duration of the request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(request_id)

        try:
            request.state.request_id = request_id
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_var.reset(token)


class CorrelationIdFilter:
    """Logging filter installed by setup_logging(); '-' outside a request."""

    def filter(self, record) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True
