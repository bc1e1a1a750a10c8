"""Socket.IO transport channel.

The channel is a thin lifecycle wrapper around :class:`socketio.AsyncClient`:
it connects in the background, forwards named events to at most one handler
each, and emits outbound events without waiting for delivery.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
import inspect
import logging
from typing import Any, Protocol

import socketio
from socketio.exceptions import ConnectionError as SocketIOConnectionError

from .task_manager import TaskManager

LOGGER = logging.getLogger(__name__)

EventHandler = Callable[[Any], Any]

_CONNECT_TASK = "connect"


class ChannelHandle(Protocol):
    """Surface the session controller relies on."""

    def send(self, event_name: str, payload: Any) -> None: ...

    def on(self, event_name: str, handler: EventHandler) -> None: ...

    def off(self, event_name: str) -> None: ...

    def is_connected(self) -> bool: ...

    async def close(self) -> None: ...


Connector = Callable[[str], Awaitable[ChannelHandle]]


class SocketIOChannel:
    """Channel handle backed by a Socket.IO async client."""

    def __init__(
        self,
        client: Any | None = None,
        *,
        socketio_path: str = "socket.io",
        transports: list[str] | None = None,
        connect_timeout: float = 5.0,
        reconnection: bool = True,
    ) -> None:
        self._client = client if client is not None else socketio.AsyncClient(
            reconnection=reconnection, logger=False, engineio_logger=False
        )
        self._socketio_path = socketio_path
        self._transports = list(transports) if transports else None
        self._connect_timeout = connect_timeout
        self._handlers: dict[str, EventHandler] = {}
        self._bound: set[str] = set()
        self._tasks = TaskManager()
        self._endpoint = ""
        self._closed = False

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self, endpoint: str) -> None:
        """Begin connecting to ``endpoint`` in the background.

        A connect attempt that is still running is left alone.
        """
        attempt = self._tasks.get(_CONNECT_TASK)
        if self._closed or (attempt is not None and not attempt.done()):
            return
        self._endpoint = endpoint
        self._tasks.spawn(self._connect(endpoint), name=_CONNECT_TASK)

    async def _connect(self, endpoint: str) -> None:
        LOGGER.info(
            "channel.connect.start",
            extra={"event": "channel.connect.start", "endpoint": endpoint},
        )
        try:
            await self._client.connect(
                endpoint,
                transports=self._transports,
                socketio_path=self._socketio_path,
                wait_timeout=self._connect_timeout,
            )
        except SocketIOConnectionError as exc:
            LOGGER.warning(
                "channel.connect.failed",
                extra={
                    "event": "channel.connect.failed",
                    "endpoint": endpoint,
                    "reason": str(exc),
                },
            )
            return
        LOGGER.info(
            "channel.connect.ok",
            extra={"event": "channel.connect.ok", "endpoint": endpoint},
        )

    def is_connected(self) -> bool:
        return not self._closed and bool(getattr(self._client, "connected", False))

    def send(self, event_name: str, payload: Any) -> None:
        """Emit ``event_name`` without waiting; no-op while disconnected."""
        if not self.is_connected():
            LOGGER.debug(
                "channel.send.skipped",
                extra={"event": "channel.send.skipped", "event_name": event_name},
            )
            return
        self._tasks.spawn(self._client.emit(event_name, payload))

    def on(self, event_name: str, handler: EventHandler) -> None:
        """Route ``event_name`` to ``handler``, replacing any earlier handler."""
        if self._closed:
            return
        self._handlers[event_name] = handler
        if event_name not in self._bound:
            self._client.on(event_name, self._make_dispatcher(event_name))
            self._bound.add(event_name)

    def off(self, event_name: str) -> None:
        self._handlers.pop(event_name, None)

    def _make_dispatcher(self, event_name: str) -> Callable[..., Awaitable[None]]:
        async def dispatch(*args: Any) -> None:
            handler = self._handlers.get(event_name)
            if handler is None:
                LOGGER.debug(
                    "channel.event.dropped",
                    extra={"event": "channel.event.dropped", "event_name": event_name},
                )
                return
            if not args:
                payload = None
            elif len(args) == 1:
                payload = args[0]
            else:
                payload = list(args)
            result = handler(payload)
            if inspect.isawaitable(result):
                await result

        return dispatch

    async def drain(self) -> None:
        """Wait for in-flight emits to finish."""
        await self._tasks.await_all()

    async def close(self) -> None:
        """Release handlers, then tear the connection down. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._handlers.clear()
        await self._tasks.cancel_all()
        await self._client.disconnect()
        LOGGER.info(
            "channel.closed",
            extra={"event": "channel.closed", "endpoint": self._endpoint},
        )


async def connect_channel(
    endpoint: str,
    *,
    socketio_path: str = "socket.io",
    transports: list[str] | None = None,
    connect_timeout: float = 5.0,
    reconnection: bool = True,
    client: Any | None = None,
) -> SocketIOChannel:
    """Open a channel to ``endpoint`` and return its handle immediately.

    The connection completes in the background; until it does,
    :meth:`SocketIOChannel.is_connected` reports ``False``.
    """
    channel = SocketIOChannel(
        client,
        socketio_path=socketio_path,
        transports=transports,
        connect_timeout=connect_timeout,
        reconnection=reconnection,
    )
    channel.start(endpoint)
    return channel
