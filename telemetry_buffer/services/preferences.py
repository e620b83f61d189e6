"""Durable integer preferences backed by SQLite."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from sqlalchemy import create_engine, delete, func, select, text
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from telemetry_buffer.config_manager.helpers import get_preferences_db_path
from telemetry_buffer.persistence.exceptions import PersistenceFailure

from .tables import metadata, preferences

logger = logging.getLogger(__name__)


class Preferences(Protocol):
    """Persistence interface for named integer values.

    Implementations raise ``PersistenceFailure`` when the backend fails.
    """

    def retrieve_int(self, key: str, default: int) -> int:
        """Return the stored value for key, or default when absent."""
        ...

    def store(self, key: str, value: int) -> None:
        """Insert or replace the value stored for key."""
        ...

    def remove(self, key: str) -> None:
        """Delete the value stored for key, if any."""
        ...


class SqlitePreferences(Preferences):
    """SQLite Preferences store, durable across process restarts."""

    def __init__(self, db_path: Path | None = None) -> None:
        """Initialize the SQLite engine and ensure schema.

        Args:
            db_path: Database file. Defaults to ``get_preferences_db_path()``.
        """
        db_path = Path(db_path or get_preferences_db_path())
        db_path.parent.mkdir(parents=True, exist_ok=True)

        self._engine: Engine = create_engine(f"sqlite:///{db_path}")
        self._apply_pragmas()
        self._ensure_schema()

    def _apply_pragmas(self) -> None:
        """Switch the journal to WAL so readers do not block the writer."""
        with self._engine.begin() as conn:
            conn.execute(text("PRAGMA journal_mode=WAL;"))
            conn.execute(text("PRAGMA synchronous=NORMAL;"))

    def _ensure_schema(self) -> None:
        with self._engine.begin() as conn:
            metadata.create_all(conn)

    def retrieve_int(self, key: str, default: int) -> int:
        """Return the integer stored under a key.

        Args:
            key: Preference key.
            default: Value returned when the key is absent.

        Returns:
            The stored value, or ``default``.

        Raises:
            PersistenceFailure: If the database cannot be read.
        """
        try:
            with self._engine.begin() as conn:
                value = conn.execute(
                    select(preferences.c.value).where(preferences.c.name == key)
                ).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise PersistenceFailure(key, str(exc)) from exc

        if value is None:
            return default
        return int(value)

    def store(self, key: str, value: int) -> None:
        """Insert or replace the integer stored under a key.

        Args:
            key: Preference key.
            value: Value to persist.

        Raises:
            PersistenceFailure: If the database cannot be written.
        """
        stmt = insert(preferences).values(name=key, value=int(value))
        stmt = stmt.on_conflict_do_update(
            index_elements=[preferences.c.name],
            set_={"value": stmt.excluded.value, "updated_at": func.now()},
        )
        try:
            with self._engine.begin() as conn:
                conn.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceFailure(key, str(exc)) from exc
        logger.debug("Stored preference %s=%d", key, value)

    def remove(self, key: str) -> None:
        """Delete the value stored under a key.

        Args:
            key: Preference key.

        Raises:
            PersistenceFailure: If the database cannot be written.
        """
        try:
            with self._engine.begin() as conn:
                conn.execute(delete(preferences).where(preferences.c.name == key))
        except SQLAlchemyError as exc:
            raise PersistenceFailure(key, str(exc)) from exc

    def dispose(self) -> None:
        """Release pooled database connections."""
        self._engine.dispose()
