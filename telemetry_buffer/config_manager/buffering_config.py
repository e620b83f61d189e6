"""Pydantic models for disk buffering configuration."""

from pydantic import BaseModel, field_validator

from telemetry_buffer.const import (
    DEFAULT_MAX_CACHE_FILE_SIZE,
    DEFAULT_MAX_CACHE_SIZE,
    DEFAULT_MAX_FILE_AGE_FOR_READ_MS,
    DEFAULT_MAX_FILE_AGE_FOR_WRITE_MS,
    DEFAULT_MIN_FILE_AGE_FOR_READ_MS,
)


class DiskBufferingConfig(BaseModel):
    """Configuration options for telemetry disk buffering.

    ``DiskManager`` reads only ``max_cache_size`` and ``max_cache_file_size``.
    The remaining fields are passed through to the signal writer and reader,
    which own the on/off switch, file rotation by age and debug output.

    Attributes:
        enabled: whether signals are buffered to disk before export.
        max_cache_size: desired maximum bytes used by all signal folders.
        max_cache_file_size: maximum bytes of a single buffered file.
        max_file_age_for_write_ms: age after which a file stops accepting writes.
        min_file_age_for_read_ms: age before which a file is not read for export.
        max_file_age_for_read_ms: age after which a file is considered stale.
        debug_enabled: when true, the writer logs verbose buffering details.
    """

    enabled: bool = False
    max_cache_size: int = DEFAULT_MAX_CACHE_SIZE
    max_cache_file_size: int = DEFAULT_MAX_CACHE_FILE_SIZE
    max_file_age_for_write_ms: int = DEFAULT_MAX_FILE_AGE_FOR_WRITE_MS
    min_file_age_for_read_ms: int = DEFAULT_MIN_FILE_AGE_FOR_READ_MS
    max_file_age_for_read_ms: int = DEFAULT_MAX_FILE_AGE_FOR_READ_MS
    debug_enabled: bool = False

    @field_validator(
        "max_cache_size",
        "max_cache_file_size",
        "max_file_age_for_write_ms",
        "min_file_age_for_read_ms",
        "max_file_age_for_read_ms",
    )
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must be non-negative")
        return value
