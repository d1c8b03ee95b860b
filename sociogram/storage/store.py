"""
SQLite Key-Value Store for Sociogram

This module persists the working relationship data between sessions.

Design Decisions:
    - SQLite for zero-config, file-based storage
    - One key-value table; the working dataset lives under a fixed key
    - Values are JSON so the stored form stays readable
    - The graph core never touches the store; only the CLI does

Schema:
    entries: key, JSON value, last update time
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

from sociogram.config import DEFAULT_DB_PATH
from sociogram.data import default_relationships
from sociogram.models import RelationshipMap


logger = logging.getLogger(__name__)

# Key under which the working dataset is saved
STORAGE_KEY = "sociogram-data"


class DataStore:
    """
    SQLite-backed store for the working relationship data.

    Handles:
    - Saving and loading the current RelationshipMap
    - Resetting back to the built-in dataset
    - Generic get/set/delete for other keys

    Usage:
        store = DataStore("./.sociogram/sociogram.db")
        store.save({"Ana": ["Ben"]})
        data = store.load_or_default()
    """

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH) -> None:
        """
        Initialize the database connection.

        Args:
            db_path: Path to the SQLite database file.
                     Parent directories will be created if needed.
        """
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    @property
    def path(self) -> Path:
        return self._db_path

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections."""
        conn = sqlite3.connect(str(self._db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize the database schema if not exists."""
        with self._connection() as conn:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS entries (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                );
            """)

    def get(self, key: str) -> Optional[str]:
        """
        Read the raw value stored under a key.

        Returns:
            The stored text, or None if the key is absent
        """
        with self._connection() as conn:
            row = conn.execute("SELECT value FROM entries WHERE key = ?", (key,)).fetchone()
            return None if row is None else row["value"]

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any existing one."""
        timestamp = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO entries (key, value, updated_at)
                VALUES (?, ?, ?)
                """,
                (key, value, timestamp),
            )

    def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if something was deleted
        """
        with self._connection() as conn:
            cursor = conn.execute("DELETE FROM entries WHERE key = ?", (key,))
            return cursor.rowcount > 0

    def save(self, relationships: RelationshipMap) -> None:
        """Persist the working dataset."""
        payload = {name: list(friends) for name, friends in relationships.items()}
        self.set(STORAGE_KEY, json.dumps(payload))
        logger.debug("Saved %d people to %s", len(payload), self._db_path)

    def load(self) -> Optional[dict[str, list[str]]]:
        """
        Load the working dataset.

        Returns:
            The saved mapping, or None if nothing usable is stored.
            A corrupt value is logged and treated as absent.
        """
        raw = self.get(STORAGE_KEY)
        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring unreadable saved data in %s: %s", self._db_path, e)
            return None

        if not isinstance(data, dict) or not all(
            isinstance(friends, list) for friends in data.values()
        ):
            logger.warning("Ignoring saved data in %s: not a name -> friends mapping", self._db_path)
            return None

        return {str(name): [str(friend) for friend in friends] for name, friends in data.items()}

    def load_or_default(self) -> dict[str, list[str]]:
        """Load the saved dataset, falling back to the built-in one."""
        saved = self.load()
        return saved if saved is not None else default_relationships()

    def is_custom(self) -> bool:
        """Check if custom data has been saved."""
        return self.get(STORAGE_KEY) is not None

    def reset(self) -> None:
        """Forget the saved dataset so the built-in one is used again."""
        self.delete(STORAGE_KEY)
