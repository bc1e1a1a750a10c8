"""Boundary normalization for inbound assistant payloads.

Whatever the remote responder emits is classified into one of three shapes
and immediately collapsed into display text, so nothing past this module ever
handles the raw value:

    classify_payload({"response": "hi"})  -> StructuredPayload
    classify_payload("hi")                -> TextPayload
    classify_payload(42)                  -> ScalarPayload
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
import json
import logging
from typing import Any, Union

LOGGER = logging.getLogger(__name__)

DEFAULT_TEXT_FIELD = "response"


@dataclass(frozen=True)
class TextPayload:
    text: str


@dataclass(frozen=True)
class StructuredPayload:
    data: Mapping[str, Any] | Sequence[Any]

    def field(self, name: str) -> Any:
        """Return the named field of a mapping payload, or ``None``."""
        if isinstance(self.data, Mapping):
            return self.data.get(name)
        return None


@dataclass(frozen=True)
class ScalarPayload:
    value: Any


InboundPayload = Union[TextPayload, StructuredPayload, ScalarPayload]


def classify_payload(raw: Any) -> InboundPayload:
    """Tag an arbitrary inbound value with its shape."""
    if isinstance(raw, str):
        return TextPayload(raw)
    if isinstance(raw, Mapping):
        return StructuredPayload(raw)
    if isinstance(raw, Sequence) and not isinstance(raw, (bytes, bytearray)):
        return StructuredPayload(raw)
    return ScalarPayload(raw)


def _serialize(value: Any) -> str:
    """Render a value as compact JSON, falling back to ``str()``."""
    try:
        return json.dumps(
            value, ensure_ascii=False, separators=(",", ":"), default=str
        )
    except (TypeError, ValueError, RecursionError) as exc:
        LOGGER.debug(
            "payload.serialize.fallback",
            extra={"event": "payload.serialize.fallback", "reason": str(exc)},
        )
    try:
        return str(value)
    except RecursionError:
        # repr() of a container nested past the recursion limit fails as well.
        return f"<{type(value).__name__} nested too deeply to display>"


def _scalar_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return _serialize(value)


def payload_text(payload: InboundPayload, text_field: str = DEFAULT_TEXT_FIELD) -> str:
    """Collapse a classified payload into display text."""
    if isinstance(payload, TextPayload):
        return payload.text
    if isinstance(payload, StructuredPayload):
        designated = payload.field(text_field)
        if designated is None:
            return _serialize(payload.data)
        if isinstance(designated, str):
            return designated
        return _serialize(designated)
    return _scalar_text(payload.value)


def normalize_payload(raw: Any, text_field: str = DEFAULT_TEXT_FIELD) -> str:
    """Classify and normalize an inbound value; never raises."""
    payload = classify_payload(raw)
    text = payload_text(payload, text_field)
    LOGGER.debug(
        "payload.normalized",
        extra={
            "event": "payload.normalized",
            "shape": type(payload).__name__,
            "length": len(text),
        },
    )
    return text
