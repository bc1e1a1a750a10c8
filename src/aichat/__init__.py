"""Top-level package for aichat-term."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .app import AIChatApp
    from .config import ensure_config_dir, load_config
    from .exceptions import AIChatError, ConfigValidationError, SessionStateError
    from .message_store import ConversationStore
    from .models import Message, Sender
    from .payloads import normalize_payload
    from .pending import PendingTracker
    from .session import SessionController
    from .state import SessionState
    from .transport import SocketIOChannel, connect_channel

__all__ = [
    "AIChatApp",
    "AIChatError",
    "ConfigValidationError",
    "ConversationStore",
    "Message",
    "PendingTracker",
    "Sender",
    "SessionController",
    "SessionState",
    "SessionStateError",
    "SocketIOChannel",
    "connect_channel",
    "ensure_config_dir",
    "load_config",
    "normalize_payload",
]

_LAZY_EXPORTS: dict[str, str] = {
    "AIChatApp": ".app",
    "AIChatError": ".exceptions",
    "ConfigValidationError": ".exceptions",
    "SessionStateError": ".exceptions",
    "ConversationStore": ".message_store",
    "Message": ".models",
    "Sender": ".models",
    "normalize_payload": ".payloads",
    "PendingTracker": ".pending",
    "SessionController": ".session",
    "SessionState": ".state",
    "SocketIOChannel": ".transport",
    "connect_channel": ".transport",
    "ensure_config_dir": ".config",
    "load_config": ".config",
}


def __getattr__(name: str) -> Any:
    """Lazily import symbols to keep UI and transport dependencies optional at import time."""
    module_name = _LAZY_EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    from importlib import import_module

    return getattr(import_module(module_name, __name__), name)
