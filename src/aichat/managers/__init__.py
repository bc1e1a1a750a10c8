"""Helpers that run alongside the session without owning conversation state.

Available managers:
- ConnectionManager: periodic channel reachability checks for the status bar
"""

from __future__ import annotations

from .connection import ConnectionManager

__all__ = ["ConnectionManager"]
