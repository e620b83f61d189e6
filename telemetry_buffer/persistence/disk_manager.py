"""Resolves buffer directories and the per-signal disk budget."""

from __future__ import annotations

import logging
import shutil
import threading
from pathlib import Path
from typing import Protocol

from telemetry_buffer.const import (
    MAX_FOLDER_SIZE_KEY,
    ROOT_DIR_NAME,
    SIGNAL_FOLDER_COUNT,
    SIGNALS_DIR_NAME,
    TEMP_DIR_NAME,
    UNSET_PREFERENCE,
)
from telemetry_buffer.services.cache_storage import CacheStorage
from telemetry_buffer.services.preferences import Preferences

from .exceptions import CleanupFailure, DirectoryUnavailable, PersistenceFailure

logger = logging.getLogger(__name__)


class BufferingLimits(Protocol):
    """Read-only view of the configured buffering limits."""

    @property
    def max_cache_size(self) -> int: ...

    @property
    def max_cache_file_size(self) -> int: ...


def _ensure_dir(path: Path) -> Path:
    """Create a directory and its parents if missing.

    Raises:
        DirectoryUnavailable: If the directory cannot be created, including
            when a non-directory occupies the path.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryUnavailable(path, str(exc)) from exc
    return path


def _purge(path: Path) -> None:
    """Delete a path and everything beneath it.

    Raises:
        CleanupFailure: If any entry cannot be deleted.
    """
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink(missing_ok=True)
    except OSError as exc:
        raise CleanupFailure(path, str(exc)) from exc


class DiskManager:
    """Single authority for buffer directory layout and size budgeting.

    Directory properties have a side effect: they make sure the directory
    exists (and, for the temp directory, is purged once per instance) before
    returning it. ``signals_buffer_path`` and ``temporary_path`` return the
    same locations without touching the filesystem.

    The folder budget is read through the preference store on every access;
    the store is its only source of truth.
    """

    def __init__(
        self,
        cache_storage: CacheStorage,
        preferences: Preferences,
        disk_buffering_config: BufferingLimits,
    ) -> None:
        """Initialise DiskManager.

        Args:
            cache_storage: Provider of the platform cache root.
            preferences: Durable store holding the computed folder budget.
            disk_buffering_config: Source of the configured cache limits.
        """
        self._cache_storage = cache_storage
        self._preferences = preferences
        self._config = disk_buffering_config

        self._temp_lock = threading.Lock()
        self._temp_dir_cleaned = False
        self._folder_size_lock = threading.Lock()

    def _root_path(self) -> Path:
        return Path(self._cache_storage.cache_dir) / ROOT_DIR_NAME

    def signals_buffer_path(self) -> Path:
        """Return the signals buffer location without creating it."""
        return self._root_path() / SIGNALS_DIR_NAME

    def temporary_path(self) -> Path:
        """Return the temp location without creating or purging it."""
        return self._root_path() / TEMP_DIR_NAME

    @property
    def signals_buffer_dir(self) -> Path:
        """Directory holding one persistent buffer folder per signal type.

        Returns:
            ``<cache_root>/opentelemetry/signals``, created if absent.

        Raises:
            DirectoryUnavailable: If the directory cannot be created.
        """
        path = _ensure_dir(self.signals_buffer_path())
        logger.debug("Signals buffer dir: %s", path)
        return path

    @property
    def temporary_dir(self) -> Path:
        """Scratch directory for in-progress buffer files.

        The first access on an instance deletes whatever a previous process
        left behind and recreates the directory empty. Later accesses only
        recreate it if it went missing and keep its content.

        Returns:
            ``<cache_root>/opentelemetry/temp``, guaranteed to exist.

        Raises:
            CleanupFailure: If stale content cannot be deleted.
            DirectoryUnavailable: If the directory cannot be recreated.
        """
        path = self.temporary_path()
        with self._temp_lock:
            if self._temp_dir_cleaned:
                return _ensure_dir(path)

            if path.exists() or path.is_symlink():
                _purge(path)
                logger.info("Purged stale temp dir %s", path)
            _ensure_dir(path)
            self._temp_dir_cleaned = True
        return path

    @property
    def max_cache_file_size(self) -> int:
        """Configured maximum size of a single buffered file, in bytes."""
        return self._config.max_cache_file_size

    @property
    def max_folder_size(self) -> int:
        """Byte budget available to a single signal type's buffer folder.

        Computed from the configured cache size the first time, then persisted.
        Once a value is persisted neither the configuration nor the cache
        storage is consulted again.

        Returns:
            The persisted budget, or ``max_cache_size // SIGNAL_FOLDER_COUNT``.

        Raises:
            PersistenceFailure: If the persisted value cannot be read.
        """
        with self._folder_size_lock:
            stored_size = self._preferences.retrieve_int(
                MAX_FOLDER_SIZE_KEY, UNSET_PREFERENCE
            )
            if stored_size != UNSET_PREFERENCE:
                return stored_size

            requested_size = self._config.max_cache_size
            folder_size = requested_size // SIGNAL_FOLDER_COUNT
            self._check_capacity(requested_size, folder_size)

            try:
                self._preferences.store(MAX_FOLDER_SIZE_KEY, folder_size)
            except PersistenceFailure:
                logger.exception(
                    "Could not persist %s=%d; it will be recomputed on next read",
                    MAX_FOLDER_SIZE_KEY,
                    folder_size,
                )
            else:
                logger.info(
                    "Computed max folder size %d bytes from cache size %d",
                    folder_size,
                    requested_size,
                )
            return folder_size

    def _check_capacity(self, requested_size: int, folder_size: int) -> None:
        if folder_size == 0:
            logger.warning(
                "Max cache size %d is too small for %d signal folders; "
                "folder budget is 0",
                requested_size,
                SIGNAL_FOLDER_COUNT,
            )
        try:
            available = self._cache_storage.available_bytes()
        except OSError as exc:
            logger.warning("Skipping cache capacity check: %s", exc)
            return
        if requested_size > available:
            logger.warning(
                "Max cache size %d exceeds %d bytes available in the cache root",
                requested_size,
                available,
            )

    def reset_max_folder_size(self) -> None:
        """Forget the persisted folder budget so the next read recomputes it.

        Raises:
            PersistenceFailure: If the persisted value cannot be removed.
        """
        with self._folder_size_lock:
            self._preferences.remove(MAX_FOLDER_SIZE_KEY)
        logger.info("Cleared persisted %s", MAX_FOLDER_SIZE_KEY)
