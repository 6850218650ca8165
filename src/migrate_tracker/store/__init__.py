"""
Key-value stores for state that outlives a single migration run.
"""

from migrate_tracker.store.base import LAST_IMPORTED_COLLECTION, KeyValueStore
from migrate_tracker.store.database import (
    create_database_engine,
    init_database,
    normalize_database_url,
    session_scope,
)
from migrate_tracker.store.memory import MemoryKeyValueStore
from migrate_tracker.store.models import Base, KeyValueEntry
from migrate_tracker.store.sql import DatabaseKeyValueStore

__all__ = [
    # Interface
    "KeyValueStore",
    "LAST_IMPORTED_COLLECTION",
    # Implementations
    "MemoryKeyValueStore",
    "DatabaseKeyValueStore",
    # Database utilities
    "Base",
    "KeyValueEntry",
    "create_database_engine",
    "init_database",
    "normalize_database_url",
    "session_scope",
]
