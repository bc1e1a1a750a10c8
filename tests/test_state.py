"""Tests for session and connection state enumerations."""

from __future__ import annotations

import unittest

from aichat.state import ConnectionState, SessionState


class StateEnumTests(unittest.TestCase):
    """Validate the lifecycle vocabulary."""

    def test_session_states_are_closed_set(self) -> None:
        self.assertEqual(
            [state.value for state in SessionState],
            ["DISCONNECTED", "CONNECTING", "CONNECTED", "CLOSED"],
        )

    def test_connection_state_renders_as_value(self) -> None:
        self.assertEqual(str(ConnectionState.ONLINE), "online")
        self.assertEqual(ConnectionState("offline"), ConnectionState.OFFLINE)


if __name__ == "__main__":
    unittest.main()
