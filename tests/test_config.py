"""Tests for configuration loading and validation."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
import unittest

from aichat.config import DEFAULT_CONFIG, load_config


class ConfigTests(unittest.TestCase):
    """Validate config merge and fallback behavior."""

    def _load(self, text: str | None, **kwargs: object) -> dict:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            if text is not None:
                config_path.write_text(text.strip(), encoding="utf-8")
            return load_config(config_path=config_path, **kwargs)  # type: ignore[arg-type]

    def test_missing_config_uses_defaults(self) -> None:
        config = self._load(None)
        self.assertEqual(config, DEFAULT_CONFIG)
        self.assertEqual(config["channel"]["endpoint"], "http://localhost:3000")
        self.assertEqual(config["channel"]["outbound_event"], "ai-message")
        self.assertEqual(config["channel"]["inbound_event"], "ai-response")
        self.assertEqual(config["channel"]["response_field"], "response")
        self.assertEqual(config["app"]["class"], "aichat-term")

    def test_partial_config_overrides_selected_values(self) -> None:
        config = self._load(
            """
[channel]
endpoint = "http://127.0.0.1:4000"
transports = ["WebSocket", "websocket"]

[ui]
show_timestamps = false
            """
        )
        self.assertEqual(config["channel"]["endpoint"], "http://127.0.0.1:4000")
        self.assertEqual(config["channel"]["transports"], ["websocket"])
        self.assertFalse(config["ui"]["show_timestamps"])
        self.assertEqual(config["app"]["title"], DEFAULT_CONFIG["app"]["title"])

    def test_remote_endpoint_rejected_without_opt_in(self) -> None:
        config = self._load(
            """
[channel]
endpoint = "https://chat.example.com"
            """
        )
        self.assertEqual(config["channel"]["endpoint"], DEFAULT_CONFIG["channel"]["endpoint"])

    def test_remote_endpoint_allowed_with_opt_in(self) -> None:
        config = self._load(
            """
[channel]
endpoint = "wss://chat.example.com"

[security]
allow_remote_hosts = true
            """
        )
        self.assertEqual(config["channel"]["endpoint"], "wss://chat.example.com")

    def test_invalid_scheme_falls_back_to_defaults(self) -> None:
        config = self._load(
            """
[channel]
endpoint = "ftp://localhost"
            """
        )
        self.assertEqual(config, DEFAULT_CONFIG)

    def test_invalid_values_fall_back_to_defaults(self) -> None:
        config = self._load(
            """
[logging]
level = "LOUD"
            """
        )
        self.assertEqual(config["logging"]["level"], "INFO")

    def test_unparsable_toml_is_ignored(self) -> None:
        config = self._load("this is = = not toml")
        self.assertEqual(config, DEFAULT_CONFIG)

    def test_overrides_are_applied_last(self) -> None:
        config = self._load(
            """
[channel]
endpoint = "http://127.0.0.1:4000"
            """,
            overrides={"channel": {"endpoint": "http://localhost:5000"}},
        )
        self.assertEqual(config["channel"]["endpoint"], "http://localhost:5000")

    @unittest.skipUnless(os.name == "posix", "POSIX permissions only")
    def test_config_file_permissions_are_private(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text("[ui]\nshow_timestamps = true\n", encoding="utf-8")
            config_path.chmod(0o644)
            load_config(config_path=config_path)
            self.assertEqual(config_path.stat().st_mode & 0o777, 0o600)


if __name__ == "__main__":
    unittest.main()
