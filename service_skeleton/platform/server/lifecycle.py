"""HTTP server lifecycle.

``Server.run`` owns the listener from bind to close. Two tasks race once the
listener is up: the serve task, which only ends when the listener is told to
stop or fails, and the shutdown task, which waits for a termination request
and then drains in-flight requests against a deadline. The serve task is
awaited first; its failure wins and abandons the shutdown task, otherwise the
shutdown task's result is the outcome of the run.
"""

import asyncio
import contextlib
import socket
from collections.abc import Iterator
from enum import StrEnum

import structlog
import uvicorn

from service_skeleton.platform.errors import (
    ForcedShutdownError,
    ListenError,
    ShutdownError,
    ShutdownTimeoutError,
)
from service_skeleton.platform.server.app import create_app
from service_skeleton.platform.server.shutdown import ShutdownTrigger, SignalShutdownTrigger
from service_skeleton.platform.settings import ServerTimeouts, Settings


class LifecycleState(StrEnum):
    """States of a server run."""

    IDLE = "idle"
    STARTING = "starting"
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"
    STOPPED = "stopped"
    FAILED = "failed"


class _Listener(uvicorn.Server):
    """uvicorn server that leaves signals and forced closes to ``Server``."""

    def __init__(self, config: uvicorn.Config) -> None:
        super().__init__(config)
        self.running = asyncio.Event()

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        yield

    async def startup(self, sockets: list[socket.socket] | None = None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            self.running.set()

    def force_close(self) -> int:
        """Cancel in-flight requests and abort every open connection.

        Returns:
            The number of connections that were still open
        """
        self.force_exit = True
        connections = list(self.server_state.connections)
        for task in list(self.server_state.tasks):
            task.cancel()
        for connection in connections:
            connection.transport.abort()
        return len(connections)

    def close_listeners(self) -> None:
        for server in getattr(self, "servers", []):
            server.close()


async def _cancel(task: asyncio.Task) -> None:
    if task.done():
        # marks a superseded failure as retrieved
        if not task.cancelled():
            task.exception()
        return
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task


class Server:
    """HTTP server for the service with graceful shutdown.

    The route table and middleware chain are built once, at construction. The
    logger is shared with the caller and outlives the server.

    Attributes:
        app: The FastAPI application served
        state: Current lifecycle state
        address: Bound (host, port) once the listener is bound
        started: Set once the listener accepts connections
    """

    def __init__(
        self,
        settings: Settings,
        logger: structlog.stdlib.BoundLogger,
        timeouts: ServerTimeouts | None = None,
        host: str = "0.0.0.0",
    ):
        self.settings = settings
        self.logger = logger
        self.timeouts = timeouts or ServerTimeouts()
        self.host = host
        self.app = create_app(settings, logger, self.timeouts)
        self.state = LifecycleState.IDLE
        self.address: tuple[str, int] | None = None
        self.started = asyncio.Event()
        self._shutdown_requested = False

    async def run(self, trigger: ShutdownTrigger | None = None) -> None:
        """Serve until a shutdown request has been handled.

        Args:
            trigger: Source of shutdown requests, SIGINT/SIGTERM when omitted

        Raises:
            ListenError: If the listener cannot bind, fails, or stops on its own
            ShutdownTimeoutError: If in-flight requests outlived the shutdown deadline
            ForcedShutdownError: If a second shutdown request cut the drain short
        """
        if self.state is not LifecycleState.IDLE:
            raise RuntimeError(f"server cannot run from state {self.state}")
        trigger = trigger or SignalShutdownTrigger()

        self._set_state(LifecycleState.STARTING)
        try:
            sock = self._bind()
        except ListenError:
            self._set_state(LifecycleState.FAILED)
            raise

        listener = _Listener(self._listener_config())
        self.logger.info(
            "starting server",
            addr=self._addr(),
            environment=self.settings.environment,
        )

        with trigger:
            serve_task = asyncio.create_task(listener.serve(sockets=[sock]), name="serve")
            shutdown_task = asyncio.create_task(
                self._shutdown_on_request(listener, serve_task, trigger), name="shutdown"
            )
            running_task = asyncio.create_task(self._mark_running(listener), name="running")
            try:
                await self._serve(listener, serve_task)
                await shutdown_task
            except BaseException:
                self._set_state(LifecycleState.FAILED)
                raise
            finally:
                await _cancel(running_task)
                await _cancel(shutdown_task)
                if not serve_task.done():
                    listener.force_close()
                    await _cancel(serve_task)
                listener.close_listeners()
                sock.close()

        self._set_state(LifecycleState.STOPPED)
        self.logger.info("server shutdown complete")

    async def _serve(self, listener: _Listener, serve_task: asyncio.Task) -> None:
        try:
            await serve_task
        except Exception as exc:
            raise ListenError(str(exc), address=self._addr()) from exc
        if not listener.started:
            raise ListenError("application startup failed", address=self._addr())
        if not self._shutdown_requested:
            raise ListenError("stopped before shutdown was requested", address=self._addr())

    async def _mark_running(self, listener: _Listener) -> None:
        await listener.running.wait()
        if self.state is LifecycleState.STARTING:
            self._set_state(LifecycleState.RUNNING)
        self.started.set()

    async def _shutdown_on_request(
        self,
        listener: _Listener,
        serve_task: asyncio.Task,
        trigger: ShutdownTrigger,
    ) -> None:
        reason = await trigger.wait()
        self._shutdown_requested = True
        self.logger.info("shutting down server", signal=reason)

        # uvicorn skips its shutdown sequence when asked to exit during startup
        running = asyncio.create_task(listener.running.wait())
        await asyncio.wait({running, serve_task}, return_when=asyncio.FIRST_COMPLETED)
        await _cancel(running)

        self._set_state(LifecycleState.SHUTTING_DOWN)
        listener.should_exit = True

        escalation = asyncio.create_task(trigger.wait())
        try:
            done, _ = await asyncio.wait(
                {serve_task, escalation},
                timeout=self.timeouts.shutdown,
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            await _cancel(escalation)

        try:
            if serve_task in done:
                return
            if escalation in done:
                second = escalation.result()
                self.logger.warning("forcing shutdown", signal=second)
                raise ForcedShutdownError(second, pending=listener.force_close())
            raise ShutdownTimeoutError(self.timeouts.shutdown, pending=listener.force_close())
        except ShutdownError as exc:
            self.logger.error("graceful shutdown failed", error=str(exc))
            raise

    def _bind(self) -> socket.socket:
        try:
            sock = socket.create_server((self.host, self.settings.port))
        except (OSError, OverflowError) as exc:
            raise ListenError(str(exc), address=self._addr()) from exc
        sock.set_inheritable(True)
        self.address = sock.getsockname()[:2]
        return sock

    def _listener_config(self) -> uvicorn.Config:
        return uvicorn.Config(
            self.app,
            host=self.host,
            port=self.address[1] if self.address else self.settings.port,
            timeout_keep_alive=self.timeouts.idle,
            log_config=None,
            access_log=False,
            server_header=False,
        )

    def _addr(self) -> str:
        host, port = self.address or (self.host, self.settings.port)
        return f"{host}:{port}"

    def _set_state(self, state: LifecycleState) -> None:
        self.logger.debug("lifecycle state changed", previous=str(self.state), state=str(state))
        self.state = state
