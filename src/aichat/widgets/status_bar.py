"""Status bar widget for connection and conversation telemetry."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.widgets import Label, Static


class StatusBar(Static):
    """Render compact runtime status information.

    Segments (left to right):
        🟢 online  |  localhost:3000  |  Messages: 4  |  Awaiting: 1
    """

    DEFAULT_CSS = """
    StatusBar {
        layout: horizontal;
        height: auto;
    }
    StatusBar Label {
        margin-right: 1;
    }
    """

    def compose(self) -> ComposeResult:
        yield Label("⚪ unknown", id="status_connection")
        yield Label("|")
        yield Label("", id="status_endpoint")
        yield Label("|")
        yield Label("Messages: 0", id="status_messages")
        yield Label("|")
        yield Label("Awaiting: 0", id="status_pending")

    def on_mount(self) -> None:
        """Cache label references once after the DOM is ready."""
        self._lbl_connection = self.query_one("#status_connection", Label)
        self._lbl_endpoint = self.query_one("#status_endpoint", Label)
        self._lbl_messages = self.query_one("#status_messages", Label)
        self._lbl_pending = self.query_one("#status_pending", Label)

    @staticmethod
    def connection_icon(connection_state: str) -> str:
        if connection_state == "online":
            return "🟢"
        if connection_state == "offline":
            return "🔴"
        return "⚪"

    def set_status(
        self,
        *,
        connection_state: str,
        endpoint: str,
        message_count: int,
        pending_count: int,
    ) -> None:
        """Update all status segment labels."""
        icon = self.connection_icon(connection_state)
        self._lbl_connection.update(f"{icon} {connection_state}")
        self._lbl_endpoint.update(endpoint)
        self._lbl_messages.update(f"Messages: {message_count}")
        self._lbl_pending.update(f"Awaiting: {pending_count}")
