"""Observability infrastructure module.

This module provides structured logging with correlation IDs.
"""

from service_skeleton.platform.observability.logging import (
    configure_logging,
    correlation_id_ctx,
    get_logger,
)

__all__ = [
    "configure_logging",
    "correlation_id_ctx",
    "get_logger",
]
