"""Domain exception hierarchy for the AI chat client."""

from __future__ import annotations


class AIChatError(RuntimeError):
    """Base class for all domain-level chat errors."""


class SessionStateError(AIChatError):
    """Raised when a session lifecycle operation is invalid in the current state."""


class ConfigValidationError(AIChatError):
    """Raised when configuration cannot be validated safely."""
