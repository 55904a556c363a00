"""Server middleware."""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

CORRELATION_ID_HEADER = "X-Request-ID"

NO_CACHE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-store, no-cache, must-revalidate, private",
    "Pragma": "no-cache",
    "Expires": "0",
}

# ContextVar so the correlation ID is available to any code in the request path,
# including the logging filter below.
correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Attach a unique request ID to every request/response cycle.

    If the client sends an ``X-Request-ID`` header, it is preserved;
    otherwise a new UUID4 is generated.  The ID is set on
    ``request.state.correlation_id`` **and** stored in a ``ContextVar``
    so downstream logging can include it automatically.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        cid = request.headers.get(CORRELATION_ID_HEADER) or uuid.uuid4().hex
        request.state.correlation_id = cid
        correlation_id_var.set(cid)
        response = await call_next(request)
        response.headers[CORRELATION_ID_HEADER] = cid
        return response


class NoCacheMiddleware(BaseHTTPMiddleware):
    """Mark API responses as uncacheable; dashboards poll for live values."""

    def __init__(self, app, *, path_prefix: str = "/api") -> None:
        super().__init__(app)
        self._path_prefix = path_prefix

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        if request.url.path.startswith(self._path_prefix):
            response.headers.update(NO_CACHE_HEADERS)
        return response


class CorrelationIDFilter(logging.Filter):
    """Logging filter that injects ``correlation_id`` into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get()  # type: ignore[attr-defined]
        return True
