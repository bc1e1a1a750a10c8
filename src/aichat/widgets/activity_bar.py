"""Typing indicator shown while responses are outstanding."""

from __future__ import annotations

from typing import Any

from textual.app import ComposeResult
from textual.timer import Timer
from textual.widgets import Label, Static

_ANIMATION_FRAMES: tuple[str, ...] = (
    "·  ",
    "●· ",
    "·●·",
    " ·●",
    "  ·",
)


class ActivityBar(Static):
    """Animated "assistant is typing" indicator plus shortcut hints."""

    DEFAULT_CSS = """
    ActivityBar {
        layout: horizontal;
        height: 1;
        padding: 0 1;
    }
    ActivityBar #activity_left {
        width: 1fr;
    }
    ActivityBar #activity_right {
        width: auto;
        text-align: right;
    }
    """

    TYPING_HINT = "AI is typing"

    def __init__(self, shortcut_hints: str = "", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._shortcut_hints = shortcut_hints
        self._animation_timer: Timer | None = None
        self._frame_index = 0
        self._left_label: Label | None = None

    @property
    def running(self) -> bool:
        return self._animation_timer is not None

    def compose(self) -> ComposeResult:
        yield Label("", id="activity_left")
        yield Label(self._shortcut_hints, id="activity_right")

    def on_mount(self) -> None:
        self._left_label = self.query_one("#activity_left", Label)

    def set_typing(self, typing: bool) -> None:
        """Show or hide the typing animation."""
        if typing:
            self.start_activity()
        else:
            self.stop_activity()

    def start_activity(self) -> None:
        if self.running:
            return
        self._frame_index = 0
        self._update_left()
        self._animation_timer = self.set_interval(0.2, self._advance_frame)

    def stop_activity(self) -> None:
        if self._animation_timer is not None:
            self._animation_timer.stop()
            self._animation_timer = None
        if self._left_label is not None:
            self._left_label.update("")

    def _advance_frame(self) -> None:
        self._frame_index = (self._frame_index + 1) % len(_ANIMATION_FRAMES)
        self._update_left()

    def _update_left(self) -> None:
        if self._left_label is None:
            return
        frame = _ANIMATION_FRAMES[self._frame_index]
        self._left_label.update(f"{frame}  {self.TYPING_HINT}")
