"""Message bubble widget and its body renderer.

A record's text arrives raw. ``segment_body`` cuts it into prose and fenced
code without altering either; prose goes through ``rich`` markdown, where
inline code keeps the ``markdown.code`` style, while each fenced block
becomes a :class:`CodeSnippet` with full syntax highlighting.
"""

from __future__ import annotations

import re
from typing import Any, Literal, NamedTuple

from rich.markdown import Markdown
from rich.syntax import Syntax
from textual import events
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.message import Message as TextualMessage
from textual.widgets import Static

from ..models import Message

# Opening and closing fences sit at the start of a line and must use the same
# run of backticks or tildes.
_FENCE_RE = re.compile(
    r"^(?P<fence>`{3,}|~{3,})(?P<info>[^\n]*)\n(?P<code>.*?)^(?P=fence)[ \t]*$",
    re.DOTALL | re.MULTILINE,
)


class BodySegment(NamedTuple):
    kind: Literal["prose", "code"]
    text: str
    lang: str = ""


def segment_body(text: str) -> list[BodySegment]:
    """Split ``text`` into prose and fenced-code segments.

    Segment text is an exact slice of the input. Whitespace-only prose
    between blocks is dropped, and an unterminated fence stays prose.
    """
    segments: list[BodySegment] = []
    cursor = 0
    for match in _FENCE_RE.finditer(text):
        prose = text[cursor : match.start()]
        if prose.strip():
            segments.append(BodySegment("prose", prose))
        info = match.group("info").split()
        segments.append(BodySegment("code", match.group("code"), info[0] if info else ""))
        cursor = match.end()
    tail = text[cursor:]
    if tail.strip():
        segments.append(BodySegment("prose", tail))
    return segments


class CodeSnippet(Static):
    """Highlighted fenced block; clicking it copies the code."""

    DEFAULT_CSS = """
    CodeSnippet {
        height: auto;
        margin: 1 0;
        padding: 0 1;
        border: round $panel;
        border-title-color: $text-muted;
        background: $surface-darken-1;
    }
    CodeSnippet:hover {
        border: round $accent;
    }
    """

    class Copy(TextualMessage):
        def __init__(self, code: str) -> None:
            super().__init__()
            self.code = code

    def __init__(self, code: str, lang: str = "", **kwargs: Any) -> None:
        super().__init__(
            Syntax(code, lang or "text", theme="monokai", word_wrap=True),
            **kwargs,
        )
        self.code = code
        self.lang = lang
        self.border_title = lang or "code"
        self.border_subtitle = "click to copy"

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.post_message(self.Copy(self.code))


class MessageBubble(Vertical):
    """One conversation record: sender label, optional timestamp, and body."""

    DEFAULT_CSS = """
    MessageBubble {
        height: auto;
    }
    MessageBubble > .bubble-header {
        color: $text-muted;
    }
    MessageBubble > .prose-segment {
        height: auto;
        padding: 0;
    }
    """

    def __init__(
        self, message: Message, show_timestamp: bool = True, **kwargs: Any
    ) -> None:
        super().__init__(**kwargs)
        self.message = message
        self.show_timestamp = show_timestamp
        self.add_class(f"role-{message.sender.value}")

    @property
    def message_content(self) -> str:
        return self.message.text

    @property
    def role_prefix(self) -> str:
        return "You" if self.message.is_user else "AI"

    def header_text(self) -> str:
        if self.show_timestamp and self.message.timestamp:
            return f"**{self.role_prefix}**  _{self.message.timestamp}_"
        return f"**{self.role_prefix}**"

    def compose(self) -> ComposeResult:
        yield Static(Markdown(self.header_text()), classes="bubble-header")
        for segment in segment_body(self.message.text):
            if segment.kind == "code":
                yield CodeSnippet(segment.text, segment.lang)
            else:
                yield Static(Markdown(segment.text), classes="prose-segment")

    def on_code_snippet_copy(self, event: CodeSnippet.Copy) -> None:
        event.stop()
        self.app.copy_to_clipboard(event.code)
        self.app.sub_title = "Code copied to clipboard."
