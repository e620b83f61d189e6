"""Handlers for telemetry-buffer CLI commands."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

import yaml

from telemetry_buffer.config_manager.buffering_config import DiskBufferingConfig
from telemetry_buffer.config_manager.config import (
    BufferingConfigProvider,
    ConfigManager,
)
from telemetry_buffer.config_manager.helpers import parse_bytes
from telemetry_buffer.persistence.disk_manager import DiskManager
from telemetry_buffer.persistence.storage_usage import signal_folder_usage
from telemetry_buffer.services.cache_storage import FilesystemCacheStorage
from telemetry_buffer.services.preferences import SqlitePreferences


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Register location flags shared by every command.

    Args:
        parser: The argparse parser (or subparser) to attach arguments to.
    """
    parser.add_argument(
        "--cache-dir",
        "--cache_dir",
        dest="cache_dir",
        type=Path,
        help="Cache root holding the opentelemetry directories.",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        help="Buffering configuration YAML file.",
    )
    parser.add_argument(
        "--db",
        dest="db_path",
        type=Path,
        help="SQLite file backing durable preferences.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )


def add_config_update_args(parser: argparse.ArgumentParser) -> None:
    """Register buffering configuration flags on a parser.

    Args:
        parser: The argparse parser to attach configuration arguments to.
    """
    parser.add_argument(
        "--max-cache-size",
        "--max_cache_size",
        dest="max_cache_size",
        type=parse_bytes,
        help="Maximum bytes shared by all signal folders.",
    )
    parser.add_argument(
        "--max-cache-file-size",
        "--max_cache_file_size",
        dest="max_cache_file_size",
        type=parse_bytes,
        help="Maximum bytes of a single buffered file.",
    )
    parser.add_argument(
        "--enabled",
        dest="enabled",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Enable or disable disk buffering.",
    )


def _extract_config_updates(args: argparse.Namespace) -> dict[str, Any]:
    """Extract DiskBufferingConfig field values from parsed CLI arguments.

    Returns:
        Field names to values, excluding unknown keys and None values.
    """
    allowed = set(DiskBufferingConfig.model_fields.keys())
    return {k: v for k, v in vars(args).items() if k in allowed and v is not None}


def _build_disk_manager(
    args: argparse.Namespace,
) -> tuple[DiskManager, SqlitePreferences]:
    """Wire a DiskManager from the location flags.

    Returns:
        The manager and the preference store backing it, so callers can
        dispose of the store.
    """
    preferences = SqlitePreferences(args.db_path)
    disk_manager = DiskManager(
        FilesystemCacheStorage(args.cache_dir),
        preferences,
        BufferingConfigProvider(ConfigManager(args.config_path)),
    )
    return disk_manager, preferences


def handle_status(args: argparse.Namespace) -> None:
    """Print buffer locations, limits, and current usage."""
    disk_manager, preferences = _build_disk_manager(args)
    try:
        signals_dir = disk_manager.signals_buffer_dir
        print(f"signals_dir: {signals_dir}")
        for signal_type, used_bytes in signal_folder_usage(signals_dir).items():
            print(f"{signal_type.value}_used_bytes: {used_bytes}")
        print(f"temporary_dir: {disk_manager.temporary_path()}")
        print(f"max_cache_file_size: {disk_manager.max_cache_file_size}")
        print(f"max_folder_size: {disk_manager.max_folder_size}")
    finally:
        preferences.dispose()


def handle_purge_temp(args: argparse.Namespace) -> None:
    """Wipe the temp directory by requesting it from a fresh manager."""
    disk_manager, preferences = _build_disk_manager(args)
    try:
        print(f"Purged {disk_manager.temporary_dir}")
    finally:
        preferences.dispose()


def handle_reset_budget(args: argparse.Namespace) -> None:
    """Remove the persisted folder budget."""
    disk_manager, preferences = _build_disk_manager(args)
    try:
        disk_manager.reset_max_folder_size()
        print("Folder budget cleared; it is recomputed on next use.")
    finally:
        preferences.dispose()


def handle_config_show(args: argparse.Namespace) -> None:
    """Print the effective buffering configuration as YAML."""
    config = ConfigManager(args.config_path).resolve_effective_config()
    print(yaml.safe_dump(config.model_dump(), sort_keys=True), end="")


def handle_config_update(args: argparse.Namespace) -> None:
    """Persist configuration overrides to the YAML file."""
    updates = _extract_config_updates(args)
    if not updates:
        print("No configuration changes supplied.")
        return
    config = ConfigManager(args.config_path).save_config(updates)
    print(yaml.safe_dump(config.model_dump(), sort_keys=True), end="")
