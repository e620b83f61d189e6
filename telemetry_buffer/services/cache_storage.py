"""Access to the platform cache root that hosts buffer directories."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from telemetry_buffer.config_manager.helpers import get_cache_root_path
from telemetry_buffer.persistence.storage_usage import get_free_bytes

logger = logging.getLogger(__name__)


class CacheStorage(Protocol):
    """Provider of the cache root directory and its capacity."""

    @property
    def cache_dir(self) -> Path:
        """Existing, writable cache root directory."""
        ...

    def available_bytes(self) -> int:
        """Return the bytes currently free for the cache root."""
        ...


class FilesystemCacheStorage(CacheStorage):
    """Cache root backed by a local directory."""

    def __init__(self, cache_dir: Path | None = None) -> None:
        """Initialise FilesystemCacheStorage.

        The directory is created if missing, standing in for the platform
        which normally owns it.

        Args:
            cache_dir: Root directory. Defaults to ``get_cache_root_path()``.
        """
        self._cache_dir = Path(cache_dir or get_cache_root_path())
        self._cache_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("Using cache root %s", self._cache_dir)

    @property
    def cache_dir(self) -> Path:
        """Return the cache root directory."""
        return self._cache_dir

    def available_bytes(self) -> int:
        """Return free bytes on the filesystem holding the cache root."""
        return get_free_bytes(self._cache_dir)
