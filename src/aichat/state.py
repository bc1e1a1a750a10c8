"""Session and connection state enumerations."""

from __future__ import annotations

from enum import Enum


class SessionState(str, Enum):
    """Finite state machine for the conversation session lifecycle."""

    DISCONNECTED = "DISCONNECTED"
    CONNECTING = "CONNECTING"
    CONNECTED = "CONNECTED"
    CLOSED = "CLOSED"


class ConnectionState(str, Enum):
    """Observed reachability of the transport channel."""

    UNKNOWN = "unknown"
    ONLINE = "online"
    OFFLINE = "offline"

    def __str__(self) -> str:
        return self.value
