"""Append-only conversation timeline."""

from __future__ import annotations

from .models import Message, Sender


class ConversationStore:
    """Ordered, append-only sequence of conversation records.

    ``append`` is the only mutator. Readers get immutable snapshots, so a
    snapshot taken before an append never changes afterwards.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []

    def append(self, record: Message) -> None:
        """Add a record to the end of the timeline."""
        self._messages.append(record)

    def all(self) -> tuple[Message, ...]:
        """Return an ordered snapshot of every stored record."""
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def latest(self, sender: Sender | None = None) -> Message | None:
        """Return the most recent record, optionally from ``sender`` only."""
        for message in reversed(self._messages):
            if sender is None or message.sender is sender:
                return message
        return None
