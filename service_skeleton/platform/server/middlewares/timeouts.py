"""Read and write deadlines for client connections.

uvicorn only bounds the idle time between requests on a keep-alive
connection. This middleware adds the other two bounds so that a client
that trickles its request body or stops reading the response cannot hold
a connection open indefinitely.
"""

import asyncio

import structlog
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from service_skeleton.platform.errors import WriteTimeoutError

DISCONNECT_MESSAGE: Message = {"type": "http.disconnect"}


class TransportTimeoutMiddleware:
    """Pure ASGI middleware applying read and write timeouts.

    The read timeout bounds the time from the start of the request until its
    body has been fully received; a client that misses it is reported to the
    application as disconnected. The write timeout bounds every individual
    response write; exceeding it raises WriteTimeoutError and uvicorn drops
    the connection.
    """

    def __init__(
        self,
        app: ASGIApp,
        logger: structlog.stdlib.BoundLogger,
        read_timeout: float,
        write_timeout: float,
    ) -> None:
        self.app = app
        self.logger = logger
        self.read_timeout = read_timeout
        self.write_timeout = write_timeout

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        read_deadline = asyncio.get_running_loop().time() + self.read_timeout
        body_complete = False

        async def receive_with_deadline() -> Message:
            nonlocal body_complete
            if body_complete:
                return await receive()
            try:
                async with asyncio.timeout_at(read_deadline):
                    message = await receive()
            except TimeoutError:
                body_complete = True
                self.logger.warning(
                    "request read timed out",
                    path=scope["path"],
                    timeout=self.read_timeout,
                )
                return DISCONNECT_MESSAGE
            if message["type"] != "http.request" or not message.get("more_body", False):
                body_complete = True
            return message

        async def send_with_deadline(message: Message) -> None:
            try:
                async with asyncio.timeout(self.write_timeout):
                    await send(message)
            except TimeoutError:
                raise WriteTimeoutError(self.write_timeout) from None

        await self.app(scope, receive_with_deadline, send_with_deadline)
