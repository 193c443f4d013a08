"""Durable key/value preference store backed by SQLite."""

import logging
import sqlite3
from pathlib import Path

from weathernow.errors import PersistenceFailure
from weathernow.storage.database import connect, run_migrations

logger = logging.getLogger(__name__)


class PreferenceStore:
    """Exposes only ``load``/``save``; every storage error becomes PersistenceFailure."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    @classmethod
    def open(cls, db_path: str | Path) -> "PreferenceStore":
        try:
            conn = connect(db_path)
            run_migrations(conn)
        except (sqlite3.Error, OSError) as e:
            raise PersistenceFailure(f"Cannot open preference store {db_path}: {e}") from e
        return cls(conn)

    def load(self, key: str) -> str | None:
        try:
            row = self._conn.execute(
                "SELECT value FROM preferences WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise PersistenceFailure(f"Failed to read {key!r}: {e}") from e
        if row is None:
            return None
        return row[0]

    def save(self, key: str, value: str) -> None:
        self.save_many({key: value})

    def save_many(self, values: dict[str, str]) -> None:
        """Write all keys in one transaction; on failure none of them change."""
        try:
            with self._conn:
                self._conn.executemany(
                    "INSERT INTO preferences (key, value, updated_at) "
                    "VALUES (?, ?, CURRENT_TIMESTAMP) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value, "
                    "updated_at = CURRENT_TIMESTAMP",
                    list(values.items()),
                )
        except sqlite3.Error as e:
            raise PersistenceFailure(f"Failed to write {sorted(values)}: {e}") from e
        logger.debug("Saved preferences %s", ", ".join(values))

    def close(self) -> None:
        self._conn.close()
