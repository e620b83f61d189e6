"""Main entry point for the telemetry-buffer CLI."""

import argparse
import logging
import sys

from telemetry_buffer.args_handler import (
    add_common_args,
    add_config_update_args,
    handle_config_show,
    handle_config_update,
    handle_purge_temp,
    handle_reset_budget,
    handle_status,
)
from telemetry_buffer.config_manager.config import ConfigLoadError
from telemetry_buffer.persistence.exceptions import DiskBufferingError


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="telemetry-buffer",
        description="Inspect and maintain the telemetry disk buffer",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    status_parser = subparsers.add_parser(
        "status", help="Show buffer directories and size limits."
    )
    add_common_args(status_parser)
    status_parser.set_defaults(handler=handle_status)

    purge_parser = subparsers.add_parser(
        "purge-temp", help="Delete leftover temporary files."
    )
    add_common_args(purge_parser)
    purge_parser.set_defaults(handler=handle_purge_temp)

    reset_parser = subparsers.add_parser(
        "reset-budget", help="Forget the persisted per-signal folder budget."
    )
    add_common_args(reset_parser)
    reset_parser.set_defaults(handler=handle_reset_budget)

    config_parser = subparsers.add_parser(
        "config", help="Manage buffering configuration."
    )
    config_subparsers = config_parser.add_subparsers(
        dest="config_command", required=True
    )

    show_parser = config_subparsers.add_parser(
        "show", help="Show the effective configuration."
    )
    add_common_args(show_parser)
    show_parser.set_defaults(handler=handle_config_show)

    update_parser = config_subparsers.add_parser(
        "update", help="Persist configuration changes."
    )
    add_common_args(update_parser)
    add_config_update_args(update_parser)
    update_parser.set_defaults(handler=handle_config_update)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the telemetry-buffer CLI.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        args.handler(args)
    except (DiskBufferingError, ConfigLoadError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
