"""Event bus used to notify the UI about session changes."""

from .bus import (
    MESSAGE_APPENDED,
    PENDING_CHANGED,
    SESSION_EVENTS,
    SESSION_STATE_CHANGED,
    Event,
    EventBus,
    EventHandler,
    Unsubscribe,
)

__all__ = [
    "Event",
    "EventBus",
    "EventHandler",
    "MESSAGE_APPENDED",
    "PENDING_CHANGED",
    "SESSION_EVENTS",
    "SESSION_STATE_CHANGED",
    "Unsubscribe",
]
