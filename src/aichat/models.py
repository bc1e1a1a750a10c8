"""Conversation record types."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
import time
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Sender(str, Enum):
    """Author of a conversation turn."""

    USER = "user"
    BOT = "bot"


def new_message_id() -> str:
    """Return a time-ordered id with a random tiebreaker.

    The nanosecond prefix keeps ids roughly sortable by creation time; the
    random suffix separates records created within the same clock tick.
    """
    return f"{time.time_ns():x}-{uuid4().hex[:12]}"


def generate_timestamp(now: datetime | None = None) -> str:
    """Format a time-of-day string such as ``"3:45 PM"``."""
    moment = now or datetime.now()
    if moment.hour < 12:
        period = "AM"
        hour = moment.hour if moment.hour != 0 else 12
    else:
        period = "PM"
        hour = moment.hour if moment.hour <= 12 else moment.hour - 12
    return f"{hour}:{moment.minute:02d} {period}"


class Message(BaseModel):
    """One immutable turn in the conversation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_message_id)
    text: str
    timestamp: str = Field(default_factory=generate_timestamp)
    sender: Sender

    @classmethod
    def from_user(cls, text: str, timestamp: str | None = None) -> Message:
        if timestamp is None:
            return cls(text=text, sender=Sender.USER)
        return cls(text=text, sender=Sender.USER, timestamp=timestamp)

    @classmethod
    def from_bot(cls, text: str, timestamp: str | None = None) -> Message:
        if timestamp is None:
            return cls(text=text, sender=Sender.BOT)
        return cls(text=text, sender=Sender.BOT, timestamp=timestamp)

    @property
    def is_user(self) -> bool:
        return self.sender is Sender.USER
