"""Base HTTP endpoints for liveness and readiness checks.

This module provides infrastructure endpoints that are typically used
by load balancers and orchestrators.
"""

from enum import Enum

import attr
import structlog
from fastapi import APIRouter, Depends, Response, status

from service_skeleton.platform.server.dependencies.logger import get_logger
from service_skeleton.platform.server.responses import respond

base_router = APIRouter()
base_tags: list[Enum | str] = ["base"]


@attr.s(auto_attribs=True, frozen=True)
class ProbeStatus:
    """Body of a liveness or readiness response."""

    status: str


@base_router.get("/health", tags=base_tags)
async def health(logger: structlog.stdlib.BoundLogger = Depends(get_logger)) -> Response:
    """Liveness check endpoint for load balancers and orchestrators.

    Returns:
        200 OK with status "ok"
    """
    return respond(logger, status.HTTP_200_OK, ProbeStatus("ok"))


@base_router.get("/ready", tags=base_tags)
async def ready(logger: structlog.stdlib.BoundLogger = Depends(get_logger)) -> Response:
    """Readiness check endpoint.

    There are no dependencies to check yet, so the service is ready
    whenever it is serving.
    """
    return respond(logger, status.HTTP_200_OK, ProbeStatus("ready"))
