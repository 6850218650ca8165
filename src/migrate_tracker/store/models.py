"""
SQLAlchemy models for the persistent key-value store.

This module defines the database schema used to keep small pieces of
per-migration state (such as the last-imported timestamp) between runs.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class KeyValueEntry(Base):
    """
    One value stored under (collection, name).

    Collections namespace the keys, e.g. ``migrate_last_imported`` holds one
    entry per migration name.
    """

    __tablename__ = "key_value"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    collection: Mapped[str] = mapped_column(
        String(128), nullable=False, index=True, comment="Namespace for the key"
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, comment="Key within collection")
    value: Mapped[Any] = mapped_column(JSON, nullable=True, comment="JSON-encoded value")

    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
        comment="When the value was last written",
    )

    __table_args__ = (UniqueConstraint("collection", "name", name="uq_key_value_collection_name"),)

    def __repr__(self) -> str:
        return (
            f"<KeyValueEntry(collection='{self.collection}', name='{self.name}', "
            f"value={self.value!r})>"
        )
