"""A thread-safe in-memory string key-value store."""

from __future__ import annotations

import threading
from typing import Dict, Optional


class KVStore:
    """Maps string keys to string values under a lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: Dict[str, str] = {}

    def set(self, key: str, value: str) -> bool:
        """Store ``value`` under ``key``; always succeeds."""
        with self._lock:
            self._data[key] = value
        return True

    def get(self, key: str) -> Optional[str]:
        """The value for ``key``, or None when it is absent."""
        with self._lock:
            return self._data.get(key)

    def delete(self, key: str) -> bool:
        """Remove ``key``; True if it was present."""
        with self._lock:
            return self._data.pop(key, None) is not None

    def exists(self, key: str) -> bool:
        """Whether ``key`` is present."""
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data