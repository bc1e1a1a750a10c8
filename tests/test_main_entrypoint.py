"""Tests for CLI entrypoint wiring."""

from __future__ import annotations

import io
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

try:
    from aichat.__main__ import main
except ModuleNotFoundError:
    main = None  # type: ignore[assignment]


@unittest.skipIf(main is None, "textual is not installed")
class MainEntrypointTests(unittest.TestCase):
    """Validate top-level main() behavior."""

    def test_main_ensures_config_and_runs_app(self) -> None:
        with patch("aichat.__main__.ensure_config_dir") as ensure_mock, patch(
            "aichat.__main__.load_config", return_value={"stub": {}}
        ) as load_mock, patch("aichat.__main__.AIChatApp") as app_cls_mock:
            main([])
            ensure_mock.assert_called_once()
            load_mock.assert_called_once_with(config_path=None, overrides={})
            app_cls_mock.assert_called_once_with(config={"stub": {}})
            app_cls_mock.return_value.run.assert_called_once()

    def test_endpoint_flag_becomes_override(self) -> None:
        with patch("aichat.__main__.ensure_config_dir"), patch(
            "aichat.__main__.load_config", return_value={}
        ) as load_mock, patch("aichat.__main__.AIChatApp"):
            main(["--endpoint", "http://localhost:9000"])
            load_mock.assert_called_once_with(
                config_path=None,
                overrides={"channel": {"endpoint": "http://localhost:9000"}},
            )

    def test_version_flag_prints_and_skips_app(self) -> None:
        buffer = io.StringIO()
        with patch("aichat.__main__.AIChatApp") as app_cls_mock, redirect_stdout(buffer):
            main(["--version"])
        self.assertTrue(buffer.getvalue().startswith("aichat-term "))
        app_cls_mock.assert_not_called()


if __name__ == "__main__":
    unittest.main()
