"""Count of outbound messages still awaiting an answer."""

from __future__ import annotations


class PendingTracker:
    """Non-negative counter of sent-but-unanswered user messages.

    Responses are matched by count only, never by message identity.
    """

    def __init__(self) -> None:
        self._value = 0

    @property
    def value(self) -> int:
        return self._value

    @property
    def is_waiting(self) -> bool:
        """Return True while at least one response is outstanding."""
        return self._value > 0

    def increment(self) -> None:
        self._value += 1

    def decrement_floored(self) -> None:
        """Decrement by one, clamping at zero."""
        if self._value > 0:
            self._value -= 1
