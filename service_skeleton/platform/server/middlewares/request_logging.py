"""Middleware that logs every handled request."""

from time import monotonic

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration once the handler has returned."""

    def __init__(self, app: ASGIApp, logger: structlog.stdlib.BoundLogger) -> None:
        super().__init__(app)
        self.logger = logger

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start_time = monotonic()
        response = await call_next(request)
        self.logger.info(
            "request handled",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration=round(monotonic() - start_time, 6),
        )
        return response
