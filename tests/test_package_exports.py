"""Tests for top-level package lazy exports."""

from __future__ import annotations

import unittest

import aichat


class PackageExportTests(unittest.TestCase):
    """Ensure __getattr__ and exported symbols behave as expected."""

    def test_lazy_exports_resolve_known_symbols(self) -> None:
        self.assertTrue(callable(aichat.load_config))
        self.assertTrue(callable(aichat.ensure_config_dir))
        self.assertTrue(callable(aichat.normalize_payload))
        self.assertTrue(callable(aichat.connect_channel))
        self.assertIsNotNone(aichat.SessionController)
        self.assertIsNotNone(aichat.SessionState)
        self.assertIsNotNone(aichat.ConversationStore)
        self.assertIsNotNone(aichat.PendingTracker)
        self.assertIsNotNone(aichat.Message)
        self.assertIsNotNone(aichat.Sender)
        self.assertIsNotNone(aichat.SocketIOChannel)
        self.assertTrue(issubclass(aichat.SessionStateError, aichat.AIChatError))
        self.assertTrue(issubclass(aichat.ConfigValidationError, aichat.AIChatError))

    def test_unknown_symbol_raises_attribute_error(self) -> None:
        with self.assertRaises(AttributeError):
            getattr(aichat, "THIS_DOES_NOT_EXIST")


if __name__ == "__main__":
    unittest.main()
