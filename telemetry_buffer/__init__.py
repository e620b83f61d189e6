from .config_manager.buffering_config import DiskBufferingConfig
from .persistence.disk_manager import DiskManager
from .persistence.exceptions import (
    CleanupFailure,
    DirectoryUnavailable,
    DiskBufferingError,
    PersistenceFailure,
)
from .services.cache_storage import CacheStorage, FilesystemCacheStorage
from .services.preferences import Preferences, SqlitePreferences

__version__ = "0.3.0"

__all__ = [
    "CacheStorage",
    "CleanupFailure",
    "DirectoryUnavailable",
    "DiskBufferingConfig",
    "DiskBufferingError",
    "DiskManager",
    "FilesystemCacheStorage",
    "PersistenceFailure",
    "Preferences",
    "SqlitePreferences",
]
