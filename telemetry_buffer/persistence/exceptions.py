"""Exception classes for disk buffering storage."""

from __future__ import annotations

from pathlib import Path


class DiskBufferingError(Exception):
    """Base error for disk buffering storage."""


class DirectoryUnavailable(DiskBufferingError):
    """Raised when a buffer directory cannot be created or accessed."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initialize DirectoryUnavailable.

        Args:
            path: Directory that could not be provided.
            reason: Description of the underlying failure.
        """
        super().__init__(f"Directory {str(path)!r} is unavailable: {reason}")
        self.path = path


class CleanupFailure(DiskBufferingError):
    """Raised when stale temporary content cannot be deleted."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initialize CleanupFailure.

        Args:
            path: Directory whose content could not be purged.
            reason: Description of the underlying failure.
        """
        super().__init__(f"Failed to clean {str(path)!r}: {reason}")
        self.path = path


class PersistenceFailure(DiskBufferingError):
    """Raised when the durable preference store cannot be read or written."""

    def __init__(self, key: str, reason: str) -> None:
        """Initialize PersistenceFailure.

        Args:
            key: Preference key involved in the failed operation.
            reason: Description of the underlying failure.
        """
        super().__init__(f"Preference store failed for {key!r}: {reason}")
        self.key = key
