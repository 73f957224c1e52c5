"""
SQLite-backed prompt memory.

A durable key/value store so conversation history survives restarts.

Key properties:
- Implements exactly the same interface as VolatileMemory
- Can be swapped without changing any orchestrator code
- Namespaced: one database can hold many conversations
- Values are stored as JSON, so only JSON-serializable values are accepted

Failures are logged and raised as MemoryStoreError. The orchestrator turns
them into an "error" response instead of losing a history write silently.
"""

import json
import logging
import sqlite3
from typing import Any, Optional

from config import Config
from repairwave.memory.base import MemoryStoreError, PromptMemory

# Get logger for memory operations
logger = logging.getLogger(__name__)


class SQLiteMemory(PromptMemory):
    """
    SQLite-backed memory scoped to a single namespace.

    Design:
    - One table: prompt_memory
    - Columns: namespace, key, value (JSON), created_at, updated_at
    - Unique (namespace, key) for upserts and fast lookups
    - clear() only removes rows of this namespace
    """

    def __init__(self, db_path: Optional[str] = None, namespace: str = "default"):
        """
        Initialize SQLite memory.

        Args:
            db_path: Path to SQLite database file.
                    If None, uses Config.SQLITE_DB_PATH (default ':memory:').
            namespace: Conversation or tenant the keys belong to
        """
        self.db_path = db_path or Config.SQLITE_DB_PATH or ":memory:"
        self.namespace = namespace
        # Single connection: ':memory:' databases vanish when their connection closes
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._initialize_db()

    def _initialize_db(self) -> None:
        """
        Create schema if missing.

        Enables WAL mode for file-backed databases.
        """
        try:
            cursor = self._conn.cursor()

            if self.db_path != ":memory:":
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.execute("PRAGMA synchronous=FULL")

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS prompt_memory (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    namespace TEXT NOT NULL,
                    key TEXT NOT NULL,
                    value TEXT NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    UNIQUE(namespace, key)
                )
            """)
            self._conn.commit()

            logger.debug(f"SQLite memory initialized: {self.db_path} (namespace={self.namespace})")
        except sqlite3.Error as e:
            logger.error(f"Failed to initialize SQLite memory: {str(e)}")
            raise MemoryStoreError(f"Failed to initialize SQLite memory: {str(e)}") from e

    def has(self, key: str) -> bool:
        return self._fetch(key) is not None

    def get(self, key: str) -> Any:
        raw = self._fetch(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupted memory value: namespace={self.namespace}, key={key}, {str(e)}")
            raise MemoryStoreError(f"Corrupted memory value for '{key}': {str(e)}") from e

    def set(self, key: str, value: Any) -> None:
        try:
            value_json = json.dumps(value)
        except (TypeError, ValueError) as e:
            logger.error(f"Value not JSON-serializable: namespace={self.namespace}, key={key}, {str(e)}")
            raise MemoryStoreError(f"Value for '{key}' is not JSON-serializable: {str(e)}") from e

        self._execute(
            """
            INSERT INTO prompt_memory (namespace, key, value)
            VALUES (?, ?, ?)
            ON CONFLICT(namespace, key)
            DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP
            """,
            (self.namespace, key, value_json),
        )
        logger.debug(f"Memory write successful: namespace={self.namespace}, key={key}")

    def delete(self, key: str) -> None:
        self._execute(
            "DELETE FROM prompt_memory WHERE namespace = ? AND key = ?",
            (self.namespace, key),
        )

    def clear(self) -> None:
        self._execute(
            "DELETE FROM prompt_memory WHERE namespace = ?",
            (self.namespace,),
        )

    def close(self) -> None:
        """Close the underlying connection."""
        self._conn.close()

    def _fetch(self, key: str) -> Optional[str]:
        try:
            cursor = self._conn.cursor()
            cursor.execute(
                "SELECT value FROM prompt_memory WHERE namespace = ? AND key = ?",
                (self.namespace, key),
            )
            row = cursor.fetchone()
        except sqlite3.Error as e:
            # Database locked, file missing, corrupted, etc.
            logger.error(f"SQLite error during read: namespace={self.namespace}, key={key}, {str(e)}")
            raise MemoryStoreError(f"Memory unavailable: {str(e)}") from e
        return row[0] if row else None

    def _execute(self, sql: str, params: tuple) -> None:
        try:
            self._conn.execute(sql, params)
            # Explicit commit for durability
            self._conn.commit()
        except sqlite3.Error as e:
            logger.error(f"SQLite error during write: namespace={self.namespace}, {str(e)}")
            raise MemoryStoreError(f"Memory unavailable: {str(e)}") from e
