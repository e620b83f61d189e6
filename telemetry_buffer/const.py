"""Constants for the telemetry disk buffer."""

from enum import Enum
from pathlib import Path

BYTES_PER_KIB = 1024
BYTES_PER_MIB = 1024 * BYTES_PER_KIB

# Layout under the platform cache root
ROOT_DIR_NAME = "opentelemetry"
SIGNALS_DIR_NAME = "signals"
TEMP_DIR_NAME = "temp"

# Durable preference key for the per-signal folder budget
MAX_FOLDER_SIZE_KEY = "max_signal_folder_size"
UNSET_PREFERENCE = -1


class SignalType(str, Enum):
    """Signal categories buffered on disk, one folder each."""

    SPANS = "spans"
    METRICS = "metrics"
    LOGS = "logs"


# Number of folders sharing the total cache budget. Changing this does not
# recompute a budget that is already persisted.
SIGNAL_FOLDER_COUNT = len(SignalType)

DEFAULT_MAX_CACHE_SIZE = 60 * BYTES_PER_MIB
DEFAULT_MAX_CACHE_FILE_SIZE = 1 * BYTES_PER_MIB
DEFAULT_MAX_FILE_AGE_FOR_WRITE_MS = 30 * 1000
DEFAULT_MIN_FILE_AGE_FOR_READ_MS = 33 * 1000
DEFAULT_MAX_FILE_AGE_FOR_READ_MS = 18 * 60 * 60 * 1000

DEFAULT_BASE_DIR = Path.home() / ".cache" / "telemetry_buffer"
CACHE_DIR_NAME = "cache"
PREFERENCES_DB_FILE = "preferences.db"
CONFIG_FILE = "config.yaml"
CONFIG_ENCODING = "utf-8"
