"""HTTP middleware components."""

from service_skeleton.platform.server.middlewares.correlation import (
    REQUEST_ID_HEADER,
    CorrelationIdMiddleware,
)
from service_skeleton.platform.server.middlewares.request_logging import RequestLoggingMiddleware
from service_skeleton.platform.server.middlewares.recovery import RecoveryMiddleware
from service_skeleton.platform.server.middlewares.timeouts import TransportTimeoutMiddleware

__all__ = [
    "CorrelationIdMiddleware",
    "REQUEST_ID_HEADER",
    "RecoveryMiddleware",
    "RequestLoggingMiddleware",
    "TransportTimeoutMiddleware",
]
