"""CLI entrypoint for aichat-term."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from importlib import metadata
from pathlib import Path
from typing import Any

from .app import AIChatApp
from .config import ensure_config_dir, load_config


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aichat-term",
        description="aichat-term - Terminal chat client for a Socket.IO assistant",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    parser.add_argument(
        "--endpoint",
        help="Socket.IO endpoint URL (overrides channel.endpoint)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to an alternative config.toml",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Ensure configuration exists, handle CLI flags, and run the TUI."""

    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.version:
        try:
            version = metadata.version("aichat-term")
        except metadata.PackageNotFoundError:
            version = "0.0.0"
        print(f"aichat-term {version}")
        return

    ensure_config_dir()
    overrides: dict[str, Any] = {}
    if args.endpoint:
        overrides["channel"] = {"endpoint": args.endpoint}
    config = load_config(config_path=args.config, overrides=overrides)
    app = AIChatApp(config=config)
    app.run()


if __name__ == "__main__":
    main()
