"""
Settings store abstractions

- The config resolver depends only on this contract, never on a concrete DB,
  the filesystem or any encryption layer.
- Infrastructure (sqlite, in-memory) implements it.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol


class SettingsStore(Protocol):
    """
    Key/value store for settings documents, keyed by a fixed logical name
    (e.g. "search"). Values are JSON-serializable dicts.
    """

    def exists(self, key: str) -> bool:
        ...

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        """Return the stored document, or None when absent."""
        ...

    def save(self, key: str, value: Dict[str, Any]) -> None:
        """Persist/replace the document stored under key."""
        ...
