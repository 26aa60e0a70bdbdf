"""Exception hierarchy for the service.

Configuration and lifecycle errors propagate to the entry point and end the
process with a nonzero exit code. Request-level faults never reach this far:
they are recovered by the middleware chain and turned into 500 responses.
"""


class ServiceError(Exception):
    """Base exception for all service errors."""


class ConfigError(ServiceError):
    """Raised when an environment value cannot be parsed."""

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        super().__init__(f"Invalid configuration{f' for {key}' if key else ''}: {message}")


class ListenError(ServiceError):
    """Raised when the listener cannot bind or stops for a reason other than shutdown."""

    def __init__(self, message: str, address: str | None = None):
        self.address = address
        super().__init__(f"Listener failed{f' on {address}' if address else ''}: {message}")


class ShutdownError(ServiceError):
    """Base exception for failures on the graceful shutdown path."""


class ShutdownTimeoutError(ShutdownError):
    """Raised when in-flight requests did not drain before the shutdown deadline."""

    def __init__(self, timeout_seconds: float, pending: int = 0):
        self.timeout_seconds = timeout_seconds
        self.pending = pending
        super().__init__(
            f"Graceful shutdown exceeded {timeout_seconds}s, force-closed {pending} connection(s)"
        )


class ForcedShutdownError(ShutdownError):
    """Raised when a second termination request cut the graceful drain short."""

    def __init__(self, reason: str, pending: int = 0):
        self.reason = reason
        self.pending = pending
        super().__init__(f"Shutdown forced by {reason}, force-closed {pending} connection(s)")


class WriteTimeoutError(ServiceError):
    """Raised when writing a response to a slow client exceeds the write timeout."""

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Response write timed out after {timeout_seconds}s")
