"""FastAPI application factory.

This module creates and configures the FastAPI application with the
middleware chain and the route table.
"""

import structlog
from fastapi import FastAPI

from service_skeleton.platform.server.middlewares import (
    CorrelationIdMiddleware,
    RecoveryMiddleware,
    RequestLoggingMiddleware,
    TransportTimeoutMiddleware,
)
from service_skeleton.platform.server.routes import root as root_router
from service_skeleton.platform.settings import ServerTimeouts, Settings


def create_app(
    settings: Settings,
    logger: structlog.stdlib.BoundLogger,
    timeouts: ServerTimeouts | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Middleware added last runs first, so requests pass through transport
    timeouts, correlation ID, recovery and request logging, in that order,
    before reaching the routes.

    Args:
        settings: Application settings instance
        logger: Logger shared with the server
        timeouts: Read and write timeouts for client connections

    Returns:
        Configured FastAPI application
    """
    timeouts = timeouts or ServerTimeouts()

    app = FastAPI(
        title=settings.service_name,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.logger = logger

    app.add_middleware(RequestLoggingMiddleware, logger=logger)
    app.add_middleware(RecoveryMiddleware, logger=logger)
    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(
        TransportTimeoutMiddleware,
        logger=logger,
        read_timeout=timeouts.read,
        write_timeout=timeouts.write,
    )

    # Include platform routes (health, ready)
    app.include_router(root_router)

    return app
