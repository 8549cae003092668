"""SQLite-backed local store."""

from __future__ import annotations

import sqlite3
import time


class SQLiteLocalStore:
    """Key/value store persisted in a single SQLite table."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._db_path, check_same_thread=False)
        connection.row_factory = sqlite3.Row
        return connection

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS local_storage (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at INTEGER
                )
                """
            )

    async def get(self, key: str) -> str | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM local_storage WHERE key = ?",
                (key,),
            ).fetchone()
        return row["value"] if row else None

    async def set(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO local_storage (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, str(value), int(time.time())),
            )

    async def delete(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM local_storage WHERE key = ?", (key,))
