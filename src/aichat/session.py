"""Conversation session controller.

Ties the channel handle, the conversation timeline, and the pending-response
counter together for the lifetime of one conversation view:

    DISCONNECTED --start()--> CONNECTING --handle returned--> CONNECTED
         |                                                       |
         +-------------------------close()-----------------------+--> CLOSED

A closed controller is never reused; a new conversation needs a new instance.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
from types import TracebackType
from typing import Any

from .events import MESSAGE_APPENDED, PENDING_CHANGED, SESSION_STATE_CHANGED, EventBus
from .exceptions import SessionStateError
from .message_store import ConversationStore
from .models import Message, generate_timestamp
from .payloads import DEFAULT_TEXT_FIELD, normalize_payload
from .pending import PendingTracker
from .state import SessionState
from .transport import ChannelHandle, Connector, connect_channel

LOGGER = logging.getLogger(__name__)

OUTBOUND_EVENT = "ai-message"
INBOUND_EVENT = "ai-response"


class SessionController:
    """Own the transport channel and reconcile traffic with the timeline."""

    def __init__(
        self,
        endpoint: str,
        *,
        connector: Connector | None = None,
        event_bus: EventBus | None = None,
        outbound_event: str = OUTBOUND_EVENT,
        inbound_event: str = INBOUND_EVENT,
        response_field: str = DEFAULT_TEXT_FIELD,
        trim_outbound: bool = True,
        clock: Callable[[], str] = generate_timestamp,
    ) -> None:
        self.endpoint = endpoint
        self.event_bus = event_bus or EventBus()
        self.outbound_event = outbound_event
        self.inbound_event = inbound_event
        self.response_field = response_field
        self.trim_outbound = trim_outbound
        self.draft = ""
        self._connector: Connector = connector or connect_channel
        self._clock = clock
        self._store = ConversationStore()
        self._pending = PendingTracker()
        self._handle: ChannelHandle | None = None
        self._state = SessionState.DISCONNECTED

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def messages(self) -> tuple[Message, ...]:
        """Ordered snapshot of the conversation timeline."""
        return self._store.all()

    @property
    def store(self) -> ConversationStore:
        return self._store

    @property
    def pending_count(self) -> int:
        return self._pending.value

    def is_connected(self) -> bool:
        return self._handle is not None and self._handle.is_connected()

    async def _transition(self, new_state: SessionState) -> None:
        old_state = self._state
        self._state = new_state
        LOGGER.info(
            "session.state.transition",
            extra={
                "event": "session.state.transition",
                "from_state": old_state.value,
                "to_state": new_state.value,
            },
        )
        await self.event_bus.publish(
            SESSION_STATE_CHANGED,
            {"old": old_state, "new": new_state},
            source="session",
        )

    async def start(self) -> None:
        """Open the channel and begin listening for responses."""
        if self._state is not SessionState.DISCONNECTED:
            raise SessionStateError(
                f"Cannot start a session in state {self._state.value}."
            )
        await self._transition(SessionState.CONNECTING)
        handle = await self._connector(self.endpoint)
        if self._state is SessionState.CLOSED:
            # close() ran while the connector was awaited.
            await handle.close()
            return
        self._handle = handle
        handle.on(self.inbound_event, self.on_inbound_response)
        await self._transition(SessionState.CONNECTED)

    async def close(self) -> None:
        """Stop listening, then release the channel. Safe to call repeatedly."""
        if self._state is SessionState.CLOSED:
            return
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.off(self.inbound_event)
            await handle.close()
        await self._transition(SessionState.CLOSED)

    async def __aenter__(self) -> SessionController:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def submit_user_message(self, raw_text: str) -> Message | None:
        """Record the operator's message and send it when the channel is up.

        Blank input is ignored without touching any state. Otherwise the
        message is always echoed into the timeline; the pending count only
        moves when the outbound event was actually handed to the channel.
        """
        trimmed = raw_text.strip()
        if not trimmed:
            return None

        record = Message.from_user(raw_text, timestamp=self._clock())
        self._store.append(record)

        if self._handle is not None and self._handle.is_connected():
            outbound = trimmed if self.trim_outbound else raw_text
            self._handle.send(self.outbound_event, outbound)
            self._pending.increment()
            LOGGER.debug(
                "session.send.ok",
                extra={
                    "event": "session.send.ok",
                    "message_id": record.id,
                    "pending": self._pending.value,
                },
            )
        else:
            LOGGER.info(
                "session.send.skipped",
                extra={
                    "event": "session.send.skipped",
                    "message_id": record.id,
                    "state": self._state.value,
                },
            )
        self.draft = ""

        await self._notify(record)
        return record

    async def on_inbound_response(self, payload: Any) -> Message:
        """Append the assistant's answer and settle one pending request."""
        text = normalize_payload(payload, self.response_field)
        record = Message.from_bot(text, timestamp=self._clock())
        self._store.append(record)
        self._pending.decrement_floored()

        LOGGER.debug(
            "session.response.received",
            extra={
                "event": "session.response.received",
                "message_id": record.id,
                "pending": self._pending.value,
            },
        )
        await self._notify(record)
        return record

    async def _notify(self, record: Message) -> None:
        await self.event_bus.publish(
            MESSAGE_APPENDED, {"message": record}, source="session"
        )
        await self.event_bus.publish(
            PENDING_CHANGED,
            {"value": self._pending.value, "waiting": self._pending.is_waiting},
            source="session",
        )
