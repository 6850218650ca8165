"""
SQLAlchemy-backed key-value store.

Values survive between runs, which is what lets ``migrate-tracker status``
report when each migration last finished importing.
"""

from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError

from migrate_tracker.exceptions import StateError
from migrate_tracker.store.base import LAST_IMPORTED_COLLECTION
from migrate_tracker.store.database import init_database, normalize_database_url, session_scope
from migrate_tracker.store.models import KeyValueEntry
from migrate_tracker.utils.logging import get_logger

logger = get_logger(__name__)


class DatabaseKeyValueStore:
    """
    Key-value store persisted in a SQL database (SQLite or PostgreSQL).

    Usage:
        store = DatabaseKeyValueStore("./migration_state.db")
        store.set("users", 1700000000000)
        store.get("users")  # -> 1700000000000
    """

    def __init__(self, database_url: str, collection: str = LAST_IMPORTED_COLLECTION):
        """
        Initialize the store, creating its table if needed.

        Args:
            database_url: Database URL or SQLite file path
            collection: Namespace for the keys handled by this instance

        Raises:
            StateError: If the database cannot be initialized
        """
        self.database_url = normalize_database_url(database_url)
        self.collection = collection

        try:
            self._session_factory = init_database(self.database_url)
        except Exception as e:
            logger.error("key_value_store_init_failed", error=str(e))
            raise StateError(f"Failed to initialize key-value store: {e}") from e

        logger.debug(
            "key_value_store_initialized",
            database_url=self.database_url,
            collection=collection,
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under key, or default."""
        with session_scope(self._session_factory) as session:
            entry = session.scalar(self._select(key))
            return default if entry is None else entry.value

    def set(self, key: str, value: Any) -> None:
        """Store value under key, replacing any existing value.

        Safe against concurrent writers creating the same key: the losing
        insert falls back to an update instead of failing on the unique
        constraint.
        """
        with session_scope(self._session_factory) as session:
            if not session.execute(self._update(key, value)).rowcount:
                try:
                    with session.begin_nested():
                        session.add(
                            KeyValueEntry(collection=self.collection, name=key, value=value)
                        )
                except IntegrityError:
                    # Another writer created the key after our update missed it
                    session.execute(self._update(key, value))

        logger.debug("key_value_set", collection=self.collection, key=key)

    def delete(self, key: str) -> None:
        """Remove key. Missing keys are ignored."""
        with session_scope(self._session_factory) as session:
            session.execute(
                delete(KeyValueEntry).where(
                    KeyValueEntry.collection == self.collection,
                    KeyValueEntry.name == key,
                )
            )

    def get_all(self) -> dict[str, Any]:
        """Return every key and value in this collection."""
        with session_scope(self._session_factory) as session:
            entries = session.scalars(
                select(KeyValueEntry)
                .where(KeyValueEntry.collection == self.collection)
                .order_by(KeyValueEntry.name)
            ).all()
            return {entry.name: entry.value for entry in entries}

    def _update(self, key: str, value: Any):
        return (
            update(KeyValueEntry)
            .where(
                KeyValueEntry.collection == self.collection,
                KeyValueEntry.name == key,
            )
            .values(value=value)
            .execution_options(synchronize_session=False)
        )

    def _select(self, key: str):
        return select(KeyValueEntry).where(
            KeyValueEntry.collection == self.collection,
            KeyValueEntry.name == key,
        )
