"""Shared fixtures for telemetry buffer tests."""

from pathlib import Path
from unittest.mock import MagicMock, PropertyMock

import pytest

from telemetry_buffer.persistence.disk_manager import DiskManager


@pytest.fixture(autouse=True)
def isolated_locations(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep default locations and env overrides away from the real home."""
    monkeypatch.setenv("TELEMETRY_BUFFER_CACHE_DIR", str(tmp_path / "default_cache"))
    monkeypatch.setenv(
        "TELEMETRY_BUFFER_PREFERENCES_DB", str(tmp_path / "default_prefs.db")
    )
    monkeypatch.setenv("TELEMETRY_BUFFER_CONFIG", str(tmp_path / "default.yaml"))
    for name in (
        "TB_ENABLED",
        "TB_MAX_CACHE_SIZE",
        "TB_MAX_CACHE_FILE_SIZE",
        "TB_DEBUG_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "cache"
    directory.mkdir()
    return directory


@pytest.fixture
def cache_storage(cache_dir: Path) -> MagicMock:
    """Mock CacheStorage rooted at an isolated directory."""
    storage = MagicMock()
    type(storage).cache_dir = PropertyMock(return_value=cache_dir)
    storage.available_bytes.return_value = 10**12
    return storage


@pytest.fixture
def preferences() -> MagicMock:
    """Mock Preferences with nothing persisted."""
    prefs = MagicMock()
    prefs.retrieve_int.return_value = -1
    return prefs


@pytest.fixture
def disk_buffering_config() -> MagicMock:
    """Mock buffering config whose limits are observable PropertyMocks."""
    config = MagicMock()
    type(config).max_cache_size = PropertyMock(return_value=60 * 1024 * 1024)
    type(config).max_cache_file_size = PropertyMock(return_value=1024 * 1024)
    return config


@pytest.fixture
def disk_manager(
    cache_storage: MagicMock,
    preferences: MagicMock,
    disk_buffering_config: MagicMock,
) -> DiskManager:
    return DiskManager(cache_storage, preferences, disk_buffering_config)
