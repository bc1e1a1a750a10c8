"""Connection state monitoring."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
import inspect
import logging

from ..state import ConnectionState

LOGGER = logging.getLogger(__name__)

Probe = Callable[[], "bool | Awaitable[bool]"]
StateCallback = Callable[[ConnectionState, ConnectionState], "Awaitable[None] | None"]


class ConnectionManager:
    """Poll channel reachability and report changes.

    Purely observational: the session never consults this manager before
    sending, it only feeds the status display.
    """

    def __init__(
        self,
        probe: Probe,
        check_interval_seconds: float = 2.0,
    ) -> None:
        """Initialize connection manager.

        Args:
            probe: Callable returning whether the channel is currently connected
            check_interval_seconds: How often to check connection
        """
        self.probe = probe
        self.check_interval = check_interval_seconds
        self._state = ConnectionState.UNKNOWN
        self._check_task: asyncio.Task | None = None
        self._on_state_change: list[StateCallback] = []

    @property
    def state(self) -> ConnectionState:
        """Current connection state."""
        return self._state

    def on_state_change(self, callback: StateCallback) -> None:
        """Register callback for state changes.

        Args:
            callback: Function called with (old_state, new_state)
        """
        self._on_state_change.append(callback)

    async def start_monitoring(self) -> None:
        """Start background connection monitoring."""
        if self._check_task is None:
            self._check_task = asyncio.create_task(self._monitor_loop())
            LOGGER.info("Connection monitoring started")

    async def stop_monitoring(self) -> None:
        """Stop background connection monitoring."""
        if self._check_task:
            self._check_task.cancel()
            try:
                await self._check_task
            except asyncio.CancelledError:
                pass
            self._check_task = None
            LOGGER.info("Connection monitoring stopped")

    async def check_connection(self) -> ConnectionState:
        """Run the probe once and update state.

        Returns:
            Current connection state after check
        """
        try:
            result = self.probe()
            if inspect.isawaitable(result):
                result = await result
            new_state = ConnectionState.ONLINE if result else ConnectionState.OFFLINE
        except Exception as exc:
            LOGGER.debug(f"Connection probe failed: {exc}")
            new_state = ConnectionState.OFFLINE

        if new_state != self._state:
            old_state = self._state
            self._state = new_state
            await self._notify_change(old_state, new_state)
            LOGGER.info(
                "Connection state changed",
                extra={"old": old_state.value, "new": new_state.value},
            )

        return self._state

    async def _monitor_loop(self) -> None:
        """Background task that polls connection status."""
        while True:
            await self.check_connection()
            await asyncio.sleep(self.check_interval)

    async def _notify_change(
        self,
        old_state: ConnectionState,
        new_state: ConnectionState,
    ) -> None:
        """Notify callbacks of state change."""
        for callback in self._on_state_change:
            try:
                result = callback(old_state, new_state)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                LOGGER.error(f"State change callback error: {e}")
