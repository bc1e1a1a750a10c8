"""Tests for domain exception hierarchy."""

from __future__ import annotations

import unittest

from aichat.exceptions import AIChatError, ConfigValidationError, SessionStateError


class ExceptionHierarchyTests(unittest.TestCase):
    """Validate exception inheritance contract."""

    def test_exception_hierarchy(self) -> None:
        self.assertTrue(issubclass(SessionStateError, AIChatError))
        self.assertTrue(issubclass(ConfigValidationError, AIChatError))
        self.assertTrue(issubclass(AIChatError, RuntimeError))


if __name__ == "__main__":
    unittest.main()
