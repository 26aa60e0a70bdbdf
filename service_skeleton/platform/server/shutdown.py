"""Sources of shutdown requests for the server lifecycle."""

import asyncio
import signal
from collections.abc import Iterable

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ShutdownTrigger:
    """Queue of termination requests consumed by ``Server.run``.

    Every call to ``trigger`` is delivered to exactly one ``wait`` call, in
    order, so the server can tell a first request (drain gracefully) from a
    second one (force the close).
    """

    def __init__(self) -> None:
        self._requests: asyncio.Queue[str] = asyncio.Queue()

    def trigger(self, reason: str = "manual") -> None:
        """Request a shutdown."""
        self._requests.put_nowait(reason)

    async def wait(self) -> str:
        """Wait for the next shutdown request and return its reason."""
        return await self._requests.get()

    def install(self) -> None:
        pass

    def remove(self) -> None:
        pass

    def __enter__(self) -> "ShutdownTrigger":
        self.install()
        return self

    def __exit__(self, *exc_info) -> None:
        self.remove()


class SignalShutdownTrigger(ShutdownTrigger):
    """Shutdown trigger fed by OS signals.

    Handlers are registered on the running event loop, so ``install`` must be
    called from inside it. Each received signal becomes one request whose
    reason is the signal name.
    """

    def __init__(self, signals: Iterable[signal.Signals] = HANDLED_SIGNALS) -> None:
        super().__init__()
        self.signals = tuple(signals)
        self._loop: asyncio.AbstractEventLoop | None = None

    def install(self) -> None:
        """
        Register signal handlers on the running loop
        """
        self._loop = asyncio.get_running_loop()
        for sig in self.signals:
            self._loop.add_signal_handler(sig, self.trigger, sig.name)

    def remove(self) -> None:
        """
        Restore default handling for the signals
        """
        if self._loop is None:
            return
        for sig in self.signals:
            self._loop.remove_signal_handler(sig)
        self._loop = None
