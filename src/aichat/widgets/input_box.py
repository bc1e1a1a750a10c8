"""Input row containing the message field and send button."""

from __future__ import annotations

from textual.containers import Horizontal
from textual.widgets import Button, Input


class InputBox(Horizontal):
    """Single-line message field with a send button."""

    def compose(self):  # type: ignore[override]
        yield Input(placeholder="Type your message...", id="message_input")
        yield Button(
            "Send", id="send_button", variant="success", disabled=True
        )

    def set_can_send(self, can_send: bool) -> None:
        """Enable the send button only when there is something to send."""
        self.query_one("#send_button", Button).disabled = not can_send
