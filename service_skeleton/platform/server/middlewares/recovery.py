"""Middleware that turns unhandled request faults into 500 responses."""

import structlog
from fastapi import status
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from service_skeleton.platform.server.responses import respond

INTERNAL_SERVER_ERROR_BODY = {"error": "Internal Server Error"}


class RecoveryMiddleware(BaseHTTPMiddleware):
    """Catch any exception raised below this middleware.

    The fault is logged at error level and the client gets a generic 500, so
    one failing request neither takes the process down nor leaves its
    connection without a response.
    """

    def __init__(self, app: ASGIApp, logger: structlog.stdlib.BoundLogger) -> None:
        super().__init__(app)
        self.logger = logger

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            self.logger.error(
                "panic recovered",
                error=repr(exc),
                method=request.method,
                path=request.url.path,
                exc_info=exc,
            )
            return respond(
                self.logger,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                INTERNAL_SERVER_ERROR_BODY,
            )
