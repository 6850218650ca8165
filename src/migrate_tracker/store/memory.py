"""In-memory key-value store."""

import threading
from typing import Any

from migrate_tracker.store.base import LAST_IMPORTED_COLLECTION


class MemoryKeyValueStore:
    """Dict-backed store; contents are lost when the process exits."""

    def __init__(self, collection: str = LAST_IMPORTED_COLLECTION):
        self.collection = collection
        self._data: dict[str, Any] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def get_all(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._data)
