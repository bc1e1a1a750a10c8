"""Instance-scoped notification hub between the session and the UI.

The session publishes after every state mutation; the app subscribes once at
construction and drops its subscriptions on unmount:

    bus = EventBus()
    unsubscribe = bus.subscribe(MESSAGE_APPENDED, on_appended)
    await bus.publish(MESSAGE_APPENDED, {"message": record}, source="session")
    unsubscribe()
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass, field
import inspect
import logging
from typing import Any

LOGGER = logging.getLogger(__name__)

MESSAGE_APPENDED = "conversation.message_appended"
PENDING_CHANGED = "conversation.pending_changed"
SESSION_STATE_CHANGED = "session.state_changed"

SESSION_EVENTS = frozenset({MESSAGE_APPENDED, PENDING_CHANGED, SESSION_STATE_CHANGED})


@dataclass(frozen=True)
class Event:
    """A published notification; ``data`` is a private copy of the payload."""

    name: str
    data: dict[str, Any] = field(default_factory=dict)
    source: str | None = None


EventHandler = Callable[[Event], "Awaitable[None] | None"]
Unsubscribe = Callable[[], None]


class EventBus:
    """Deliver events to subscribers in subscription order.

    Handlers run one after another before :meth:`publish` returns, so a
    subscriber always observes the state that produced the event. A failing
    handler is logged and the remaining handlers still run.
    """

    def __init__(self, known_events: Iterable[str] | None = SESSION_EVENTS) -> None:
        self._known = frozenset(known_events) if known_events is not None else None
        self._subscribers: defaultdict[str, list[EventHandler]] = defaultdict(list)

    def _check_name(self, event_name: str) -> None:
        if self._known is not None and event_name not in self._known:
            raise ValueError(f"Unknown event name {event_name!r}.")

    def subscribe(self, event_name: str, handler: EventHandler) -> Unsubscribe:
        """Register ``handler`` and return a callable that removes it again."""
        self._check_name(event_name)
        self._subscribers[event_name].append(handler)

        def unsubscribe() -> None:
            handlers = self._subscribers.get(event_name, [])
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    async def publish(
        self, event_name: str, data: Mapping[str, Any], source: str | None = None
    ) -> Event:
        """Build an :class:`Event` and hand it to every current subscriber."""
        self._check_name(event_name)
        event = Event(name=event_name, data=dict(data), source=source)
        for handler in tuple(self._subscribers.get(event_name, ())):
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                LOGGER.exception(
                    "event.handler.failed",
                    extra={
                        "event": "event.handler.failed",
                        "event_name": event_name,
                        "handler": getattr(handler, "__qualname__", repr(handler)),
                    },
                )
        return event
