"""Main Textual application for chatting with a Socket.IO assistant."""

from __future__ import annotations

from functools import partial
import logging
from typing import Any
from urllib.parse import urlparse

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Button, Footer, Header, Input

from .config import load_config
from .events import MESSAGE_APPENDED, PENDING_CHANGED, Event, EventBus, Unsubscribe
from .logging_utils import configure_logging
from .managers import ConnectionManager
from .models import Message, Sender
from .session import SessionController
from .state import ConnectionState
from .transport import Connector, connect_channel
from .widgets import ActivityBar, ConversationView, InputBox, MessageBubble, StatusBar

LOGGER = logging.getLogger(__name__)


def build_connector(channel_cfg: dict[str, Any]) -> Connector:
    """Bind channel options from config onto :func:`connect_channel`."""
    return partial(
        connect_channel,
        socketio_path=str(channel_cfg["socketio_path"]),
        transports=list(channel_cfg["transports"]) or None,
        connect_timeout=float(channel_cfg["connect_timeout_seconds"]),
        reconnection=bool(channel_cfg["reconnection"]),
    )


class AIChatApp(App[None]):
    """Chat TUI bound to a single conversation session."""

    CSS = """
    Screen {
        layout: vertical;
        background: $background;
    }

    #app-root {
        layout: vertical;
        width: 100%;
        height: 1fr;
    }

    #conversation {
        height: 1fr;
        padding: 1;
    }

    #no_messages {
        width: 100%;
        content-align: center middle;
        color: $text-muted;
    }

    InputBox {
        height: auto;
        padding: 0 1 1 1;
        border-top: solid $panel;
        background: $surface;
    }

    #message_input {
        width: 1fr;
    }

    #send_button {
        margin-left: 1;
        min-width: 10;
    }

    #status_bar {
        height: auto;
        padding: 0 1;
        border-top: solid $panel;
        background: $surface;
    }

    #activity_bar {
        border-top: dashed $panel;
        background: $surface;
    }

    MessageBubble {
        width: 85%;
        margin: 1 0;
        padding: 1 2;
        border: round $panel;
    }
    """

    ACTION_DESCRIPTIONS: dict[str, str] = {
        "send_message": "Send",
        "quit": "Quit",
        "scroll_up": "Scroll Up",
        "scroll_down": "Scroll Down",
        "copy_last_message": "Copy Last",
    }

    def __init__(
        self,
        config: dict[str, dict[str, Any]] | None = None,
        connector: Connector | None = None,
    ) -> None:
        self.config = config or load_config()
        configure_logging(self.config["logging"])
        super().__init__()

        channel_cfg = self.config["channel"]
        self.event_bus = EventBus()
        self.session = SessionController(
            str(channel_cfg["endpoint"]),
            connector=connector or build_connector(channel_cfg),
            event_bus=self.event_bus,
            outbound_event=str(channel_cfg["outbound_event"]),
            inbound_event=str(channel_cfg["inbound_event"]),
            response_field=str(channel_cfg["response_field"]),
            trim_outbound=bool(channel_cfg["trim_outbound"]),
        )
        self.connection_manager = ConnectionManager(
            self.session.is_connected,
            check_interval_seconds=float(channel_cfg["status_check_interval_seconds"]),
        )
        self.connection_manager.on_state_change(self._on_connection_state_changed)
        self._unsubscribers: list[Unsubscribe] = [
            self.event_bus.subscribe(MESSAGE_APPENDED, self._on_message_appended),
            self.event_bus.subscribe(PENDING_CHANGED, self._on_pending_changed),
        ]

        self._binding_specs = self._binding_specs_from_config(self.config["keybinds"])
        self._w_input: Input | None = None
        self._w_input_box: InputBox | None = None
        self._w_conversation: ConversationView | None = None
        self._w_status: StatusBar | None = None
        self._w_activity: ActivityBar | None = None

    @classmethod
    def _binding_specs_from_config(cls, keybinds: dict[str, str]) -> list[Binding]:
        return [
            Binding(str(key), action, description)
            for action, description in cls.ACTION_DESCRIPTIONS.items()
            if (key := keybinds.get(action))
        ]

    @property
    def show_timestamps(self) -> bool:
        return bool(self.config["ui"]["show_timestamps"])

    @property
    def endpoint_label(self) -> str:
        parsed = urlparse(self.session.endpoint)
        return parsed.netloc or self.session.endpoint

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="app-root"):
            yield ConversationView(id="conversation")
            yield InputBox()
            yield StatusBar(id="status_bar")
            yield ActivityBar(shortcut_hints="enter send", id="activity_bar")
        yield Footer()

    async def on_mount(self) -> None:
        """Register keybindings, then open the conversation session."""
        self.title = str(self.config["app"]["title"])
        self.sub_title = str(self.config["app"]["subtitle"])
        for binding in self._binding_specs:
            self.bind(
                binding.key,
                binding.action,
                description=binding.description,
                show=binding.show,
            )

        self._w_input = self.query_one("#message_input", Input)
        self._w_input_box = self.query_one(InputBox)
        self._w_conversation = self.query_one(ConversationView)
        self._w_status = self.query_one("#status_bar", StatusBar)
        self._w_activity = self.query_one("#activity_bar", ActivityBar)
        self._update_status_bar()

        await self.session.start()
        await self.connection_manager.start_monitoring()
        self._w_input.focus()

    async def on_unmount(self) -> None:
        """Stop monitoring and release the channel."""
        await self.connection_manager.stop_monitoring()
        await self.session.close()
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    def _update_status_bar(self) -> None:
        if self._w_status is None:
            return
        self._w_status.set_status(
            connection_state=self.connection_manager.state.value,
            endpoint=self.endpoint_label,
            message_count=len(self.session.store),
            pending_count=self.session.pending_count,
        )

    def _style_bubble(self, bubble: MessageBubble) -> None:
        ui_cfg = self.config["ui"]
        if bubble.message.is_user:
            bubble.styles.background = str(ui_cfg["user_message_color"])
            bubble.styles.color = "black"
            bubble.styles.margin = (1, 0, 1, 8)
        else:
            bubble.styles.background = str(ui_cfg["assistant_message_color"])
            bubble.styles.color = "black"
        bubble.styles.border = ("round", str(ui_cfg["border_color"]))

    async def _on_message_appended(self, event: Event) -> None:
        message: Message = event.data["message"]
        if self._w_conversation is None:
            return
        bubble = await self._w_conversation.add_message(
            message, show_timestamp=self.show_timestamps
        )
        self._style_bubble(bubble)
        self._update_status_bar()

    def _on_pending_changed(self, event: Event) -> None:
        if self._w_activity is not None:
            self._w_activity.set_typing(bool(event.data["waiting"]))
        self._update_status_bar()

    async def _on_connection_state_changed(
        self, old_state: ConnectionState, new_state: ConnectionState
    ) -> None:
        LOGGER.info(
            "app.connection.state",
            extra={
                "event": "app.connection.state",
                "old": old_state.value,
                "connection_state": new_state.value,
            },
        )
        self._update_status_bar()

    def on_input_changed(self, event: Input.Changed) -> None:
        """Mirror the input field into the session draft."""
        if event.input.id != "message_input":
            return
        self.session.draft = event.value
        if self._w_input_box is not None:
            self._w_input_box.set_can_send(bool(event.value.strip()))

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "message_input":
            await self.send_user_message()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send_button":
            await self.send_user_message()

    async def action_send_message(self) -> None:
        await self.send_user_message()

    async def send_user_message(self) -> None:
        """Hand the current draft to the session and reset the input field."""
        input_widget = self._w_input
        raw_text = input_widget.value if input_widget is not None else self.session.draft
        await self.session.submit_user_message(raw_text)
        if input_widget is not None and not self.session.draft:
            input_widget.value = ""

    async def action_quit(self) -> None:
        self.exit()

    def action_scroll_up(self) -> None:
        if self._w_conversation is not None:
            self._w_conversation.scroll_relative(y=-10, animate=False)

    def action_scroll_down(self) -> None:
        if self._w_conversation is not None:
            self._w_conversation.scroll_relative(y=10, animate=False)

    def action_copy_last_message(self) -> None:
        """Copy the latest assistant reply to the clipboard."""
        reply = self.session.store.latest(Sender.BOT)
        if reply is None:
            self.sub_title = "No reply to copy yet."
            return
        self.copy_to_clipboard(reply.text)
        self.sub_title = "Copied last reply."
