"""Tests for logging bootstrap."""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
import unittest

import structlog

from aichat.logging_utils import configure_logging


class LoggingTests(unittest.TestCase):
    """Validate handler wiring for structured and plain output."""

    def setUp(self) -> None:
        root = logging.getLogger()
        self._saved_handlers = list(root.handlers)
        self._saved_level = root.level

    def tearDown(self) -> None:
        root = logging.getLogger()
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = self._saved_handlers
        root.setLevel(self._saved_level)
        structlog.reset_defaults()

    def test_structured_file_logging_writes_json(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            log_path = Path(temp_dir) / "logs" / "app.log"
            configure_logging(
                {
                    "level": "DEBUG",
                    "structured": True,
                    "log_to_file": True,
                    "log_file_path": str(log_path),
                }
            )
            logging.getLogger("aichat.session").info(
                "session.state.transition",
                extra={"event": "session.state.transition", "to_state": "CONNECTED"},
            )
            for handler in logging.getLogger().handlers:
                handler.flush()

            line = log_path.read_text(encoding="utf-8").strip().splitlines()[-1]
            payload = json.loads(line)
            self.assertEqual(payload["event"], "session.state.transition")
            self.assertEqual(payload["to_state"], "CONNECTED")
            self.assertEqual(payload["level"], "info")
            self.assertEqual(payload["logger"], "aichat.session")

    def test_plain_mode_installs_stderr_handler_only(self) -> None:
        configure_logging({"level": "INFO", "structured": False})
        handlers = logging.getLogger().handlers
        self.assertEqual(len(handlers), 1)
        self.assertEqual(handlers[0].level, logging.WARNING)
        self.assertEqual(logging.getLogger().level, logging.INFO)

    def test_stderr_filter_keeps_only_app_records(self) -> None:
        configure_logging({"level": "WARNING", "structured": False})
        handler = logging.getLogger().handlers[0]
        app_record = logging.LogRecord("aichat.app", logging.WARNING, "", 0, "x", None, None)
        lib_record = logging.LogRecord("engineio.client", logging.WARNING, "", 0, "x", None, None)
        self.assertTrue(handler.filter(app_record))
        self.assertFalse(handler.filter(lib_record))

    def test_noisy_libraries_are_quietened(self) -> None:
        configure_logging({"level": "DEBUG", "structured": False})
        self.assertEqual(logging.getLogger("socketio").level, logging.WARNING)
        self.assertEqual(logging.getLogger("engineio").level, logging.WARNING)


if __name__ == "__main__":
    unittest.main()
