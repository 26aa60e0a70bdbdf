"""HTTP server infrastructure module.

This module provides the FastAPI application factory and the server lifecycle:
- Application factory
- Route handlers
- Middleware chain
- Graceful shutdown
"""

from service_skeleton.platform.server.app import create_app
from service_skeleton.platform.server.lifecycle import LifecycleState, Server
from service_skeleton.platform.server.shutdown import ShutdownTrigger, SignalShutdownTrigger

__all__ = [
    "create_app",
    "LifecycleState",
    "Server",
    "ShutdownTrigger",
    "SignalShutdownTrigger",
]
