"""
In-memory SettingsStore, for tests and embedding.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Optional

from .interfaces import SettingsStore


class InMemorySettingsStore(SettingsStore):
    def __init__(self, initial: Optional[Dict[str, Dict[str, Any]]] = None) -> None:
        self._data: Dict[str, Dict[str, Any]] = copy.deepcopy(initial or {})

    def exists(self, key: str) -> bool:
        return key in self._data

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        value = self._data.get(key)
        return copy.deepcopy(value) if value is not None else None

    def save(self, key: str, value: Dict[str, Any]) -> None:
        self._data[key] = copy.deepcopy(value)
