"""Helpers for parsing byte sizes and resolving default locations."""

import os
from pathlib import Path

from telemetry_buffer.const import (
    CACHE_DIR_NAME,
    CONFIG_FILE,
    DEFAULT_BASE_DIR,
    PREFERENCES_DB_FILE,
)


def parse_bytes(value: int | str) -> int:
    """Parse a byte quantity from an integer or unit-suffixed string.

    Supported string units (case-insensitive):
        b, k, kb, m, mb, g, gb

    Args:
        value: Raw byte value as an ``int`` or string with an optional unit
            suffix.

    Returns:
        The parsed value in bytes.

    Raises:
        ValueError: If the input cannot be parsed or contains an unknown unit.
    """
    if isinstance(value, int):
        return value

    normalized_value = str(value).strip().lower()

    if normalized_value.isdigit():
        return int(normalized_value)

    numeric_part = normalized_value.rstrip("bkmg")
    unit_suffix = normalized_value[len(numeric_part) :]

    if not numeric_part.isdigit() or not unit_suffix:
        raise ValueError(f"Invalid byte value: {value!r}")

    multipliers = {
        "b": 1,
        "k": 1024,
        "kb": 1024,
        "m": 1024**2,
        "mb": 1024**2,
        "g": 1024**3,
        "gb": 1024**3,
    }
    if unit_suffix not in multipliers:
        raise ValueError(f"Unknown byte unit in value: {value!r}")

    return int(numeric_part) * multipliers[unit_suffix]


def get_cache_root_path() -> Path:
    """Return the cache root under which buffer directories are laid out.

    Overridden by TELEMETRY_BUFFER_CACHE_DIR, defaults to
    ~/.cache/telemetry_buffer/cache.
    """
    return Path(
        os.environ.get(
            "TELEMETRY_BUFFER_CACHE_DIR",
            str(DEFAULT_BASE_DIR / CACHE_DIR_NAME),
        )
    )


def get_preferences_db_path() -> Path:
    """Return the path of the SQLite file backing durable preferences.

    Overridden by TELEMETRY_BUFFER_PREFERENCES_DB.
    """
    return Path(
        os.environ.get(
            "TELEMETRY_BUFFER_PREFERENCES_DB",
            str(DEFAULT_BASE_DIR / PREFERENCES_DB_FILE),
        )
    )


def get_config_path() -> Path:
    """Return the path of the buffering configuration YAML file.

    Overridden by TELEMETRY_BUFFER_CONFIG.
    """
    return Path(
        os.environ.get(
            "TELEMETRY_BUFFER_CONFIG",
            str(DEFAULT_BASE_DIR / CONFIG_FILE),
        )
    )
