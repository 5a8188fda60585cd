"""Command line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from emuconsole.constants.enums import ViewName
from emuconsole.models.state import AppSettings, ConfigError, ConfigManager

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="emuconsole",
        description="Live admin console for the queue and pub/sub emulators.",
    )
    parser.add_argument("--base-url", help="Backend base URL (overrides config and environment)")
    parser.add_argument(
        "--view",
        choices=[view.value for view in ViewName],
        help="View to open on startup",
    )
    parser.add_argument("--config", type=Path, help="Settings YAML file")
    parser.add_argument("--log-file", type=Path, default=Path("emuconsole.log"), help="Log file path")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    parser.add_argument(
        "--write-config",
        action="store_true",
        help="Write the effective settings to the config file and exit",
    )
    return parser


def configure_logging(log_file: Path, level: str) -> None:
    # The terminal belongs to the app, so logs go to a file
    logging.basicConfig(filename=str(log_file), level=getattr(logging, level), format=LOG_FORMAT)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def write_config(args: argparse.Namespace) -> int:
    try:
        settings = ConfigManager.load(args.config)
    except ConfigError as exc:
        print(f"Ignoring unreadable settings: {exc}", file=sys.stderr)
        settings = AppSettings()
    if args.base_url:
        settings.base_url = args.base_url
    if args.view:
        settings.initial_view = args.view
    try:
        path = ConfigManager.save(settings, args.config)
    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(f"Settings written to {path}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    if args.write_config:
        return write_config(args)

    from emuconsole.app import EmuConsoleApp

    app = EmuConsoleApp(
        base_url=args.base_url,
        view=ViewName(args.view) if args.view else None,
        config_path=args.config,
    )
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
