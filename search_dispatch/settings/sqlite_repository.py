"""
SQLite Settings Store (Infrastructure)

- Implements the SettingsStore interface to persist settings documents
  (provider selection and credentials) as JSON text under a logical key.
- No dependencies on presentation; pure infrastructure.
"""

from __future__ import annotations

import json
import sqlite3
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from .interfaces import SettingsStore


class SqliteSettingsStore(SettingsStore):
    """
    SQLite-backed implementation for settings persistence.

    Schema:
      - settings(key TEXT PRIMARY KEY, value TEXT)   value is a JSON document
    """

    def __init__(self, db_path: Optional[str] = None) -> None:
        # Default DB location: ./data/settings.db (creates directory)
        if db_path is None:
            from search_dispatch.config import Config
            db_path = Config.settings_db_path()
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self.db_path = db_path
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        if db_path != ":memory:":
            self._conn.execute("PRAGMA journal_mode=WAL;")
        self._conn.execute("PRAGMA synchronous=NORMAL;")
        self._ensure_schema()

    def _ensure_schema(self) -> None:
        cur = self._conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS settings (
              key   TEXT PRIMARY KEY,
              value TEXT
            )
            """
        )
        self._conn.commit()

    def exists(self, key: str) -> bool:
        with self._lock:
            cur = self._conn.cursor()
            cur.execute("SELECT 1 FROM settings WHERE key = ?", (key,))
            return cur.fetchone() is not None

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            cur = self._conn.cursor()
            cur.execute("SELECT value FROM settings WHERE key = ?", (key,))
            row = cur.fetchone()
        if not row or row[0] is None:
            return None
        return json.loads(row[0])

    def save(self, key: str, value: Dict[str, Any]) -> None:
        payload = json.dumps(value, sort_keys=True)
        with self._lock:
            cur = self._conn.cursor()
            cur.execute(
                "INSERT INTO settings(key, value) VALUES(?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, payload),
            )
            self._conn.commit()

    def close(self) -> None:
        with self._lock:
            self._conn.close()
