"""
Settings store factory (composition root helper)

The dispatch layer depends on SettingsStore (interfaces.py). This module
provides a small factory that lazily instantiates the chosen infrastructure
backend (SQLite by default) and returns a singleton instance.
"""

from __future__ import annotations

from typing import Optional

from .interfaces import SettingsStore  # re-exported contract
from .memory_repository import InMemorySettingsStore

_store_singleton: Optional[SettingsStore] = None


def get_settings_store(db_path: Optional[str] = None) -> SettingsStore:
    global _store_singleton
    if _store_singleton is None:
        # Lazy import to avoid touching the filesystem at import time
        from .sqlite_repository import SqliteSettingsStore
        _store_singleton = SqliteSettingsStore(db_path=db_path)
    return _store_singleton


__all__ = ["SettingsStore", "InMemorySettingsStore", "get_settings_store"]
