"""Key-value store interface."""

from typing import Any, Protocol, runtime_checkable

LAST_IMPORTED_COLLECTION = "migrate_last_imported"


@runtime_checkable
class KeyValueStore(Protocol):
    """A flat mapping of string keys to JSON-compatible values.

    Each store instance is bound to one collection.
    """

    collection: str

    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...

    def get_all(self) -> dict[str, Any]: ...
