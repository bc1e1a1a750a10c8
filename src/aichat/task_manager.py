"""Lifecycle tracking for fire-and-forget asyncio work."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
import logging
from typing import Any

LOGGER = logging.getLogger(__name__)


class TaskManager:
    """Own the background tasks spawned by a channel.

    Named tasks (at most one per name) cover long-lived work such as the
    connect attempt; anonymous tasks cover one-shot work such as emits and
    drop out of tracking as soon as they finish.
    """

    def __init__(self) -> None:
        self._named: dict[str, asyncio.Task[Any]] = {}
        self._anonymous: set[asyncio.Task[Any]] = set()

    def spawn(
        self, coro: Coroutine[Any, Any, Any], name: str | None = None
    ) -> asyncio.Task[Any]:
        """Schedule ``coro`` on the running loop and track the task."""
        task = asyncio.create_task(coro)
        if name is not None:
            self._named[name] = task
        else:
            self._anonymous.add(task)
            task.add_done_callback(self._anonymous.discard)
        task.add_done_callback(self._log_failure)
        return task

    def _log_failure(self, task: asyncio.Task[Any]) -> None:
        """Log exceptions from finished tasks so they are not silently lost."""
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            LOGGER.warning(
                "task.failed",
                extra={
                    "event": "task.failed",
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )

    def get(self, name: str) -> asyncio.Task[Any] | None:
        """Return the named task or ``None`` if not registered."""
        return self._named.get(name)

    async def cancel(self, name: str) -> None:
        """Cancel a named task and await its completion."""
        task = self._named.pop(name, None)
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def cancel_all(self) -> None:
        """Cancel every tracked task and await them all."""
        all_tasks: list[asyncio.Task[Any]] = list(self._named.values()) + list(
            self._anonymous
        )
        for task in all_tasks:
            if not task.done():
                task.cancel()
        if all_tasks:
            # Failures were already logged by the done callback.
            await asyncio.gather(*all_tasks, return_exceptions=True)
        self._named.clear()
        self._anonymous.clear()

    async def await_all(self) -> None:
        """Wait for tracked tasks to finish without cancelling them."""
        pending = [
            t for t in list(self._named.values()) + list(self._anonymous) if not t.done()
        ]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
