"""service-skeleton - A minimal HTTP service with liveness endpoints and graceful shutdown."""

from .platform.server import Server, create_app
from .platform.settings import Settings, load_settings

__all__ = [
    "Server",
    "Settings",
    "create_app",
    "load_settings",
]
