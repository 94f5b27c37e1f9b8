"""ASGI send wrapper that observes status code and body size."""

import threading
import time
from http import HTTPStatus
from typing import Iterable, Tuple

from starlette.types import Message, Send

# Without an explicit http.response.start the response is treated as 200 OK.
DEFAULT_STATUS_CODE = int(HTTPStatus.OK)


class ResponseInterceptor:
    """Wrap an ASGI ``send`` callable, recording status and bytes written.

    The wrapped callable is forwarded every message unchanged, so the inner
    app cannot tell it is being observed.  Errors raised by the underlying
    ``send`` propagate as-is.
    """

    def __init__(self, send: Send) -> None:
        self._send = send
        self._started = time.perf_counter()
        self._status = DEFAULT_STATUS_CODE
        self._response_started = False
        self._count = 0
        self._lock = threading.Lock()

    async def __call__(self, message: Message) -> None:
        message_type = message["type"]
        if message_type == "http.response.start":
            self._status = int(message["status"])
            self._response_started = True
            await self._send(message)
        elif message_type == "http.response.body":
            await self._send(message)
            self._add(len(message.get("body", b"")))
        else:
            await self._send(message)

    async def write(self, data: bytes, *, more_body: bool = False) -> int:
        """Send one body chunk and return its length."""
        await self({"type": "http.response.body", "body": data, "more_body": more_body})
        return len(data)

    async def set_status(self, code: int, headers: Iterable[Tuple[bytes, bytes]] = ()) -> None:
        """Start the response with ``code``."""
        await self({"type": "http.response.start", "status": code, "headers": list(headers)})

    def _add(self, n: int) -> None:
        with self._lock:
            self._count += n

    @property
    def response_started(self) -> bool:
        """Whether ``http.response.start`` has been sent."""
        return self._response_started

    @property
    def status(self) -> int:
        return self._status

    def status_as_string(self) -> str:
        return str(self._status)

    @property
    def bytes_written(self) -> int:
        with self._lock:
            return self._count

    def elapsed(self) -> float:
        """Seconds since the interceptor was created."""
        return time.perf_counter() - self._started
