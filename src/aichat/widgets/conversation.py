"""Scrollable conversation view widget."""

from __future__ import annotations

from textual.containers import VerticalScroll
from textual.widgets import Static

from ..models import Message
from .message import MessageBubble


class ConversationView(VerticalScroll):
    """A scrollable container that hosts message bubbles."""

    EMPTY_TEXT = "Start a conversation"

    def compose(self):  # type: ignore[override]
        yield Static(self.EMPTY_TEXT, id="no_messages")

    async def add_message(
        self, message: Message, show_timestamp: bool = True
    ) -> MessageBubble:
        """Mount a bubble for ``message`` at the end and scroll to it."""
        for placeholder in self.query("#no_messages"):
            await placeholder.remove()
        bubble = MessageBubble(message, show_timestamp=show_timestamp)
        bubble.add_class(f"message-{message.sender.value}")
        await self.mount(bubble)
        self.scroll_end(animate=True)
        return bubble
