"""Widget exports for the aichat UI."""

from .activity_bar import ActivityBar
from .conversation import ConversationView
from .input_box import InputBox
from .message import BodySegment, CodeSnippet, MessageBubble, segment_body
from .status_bar import StatusBar

__all__ = [
    "ActivityBar",
    "BodySegment",
    "CodeSnippet",
    "ConversationView",
    "InputBox",
    "MessageBubble",
    "StatusBar",
    "segment_body",
]
