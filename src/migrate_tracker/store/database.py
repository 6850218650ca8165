"""
Database initialization and session management utilities.

This module provides functions for creating the store database engine,
creating its tables and opening sessions that commit or roll back as a
unit.
"""

from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import Engine, create_engine, pool
from sqlalchemy.orm import Session, sessionmaker

from migrate_tracker.exceptions import ConfigurationError, StateError
from migrate_tracker.store.models import Base
from migrate_tracker.utils.logging import get_logger

logger = get_logger(__name__)


def normalize_database_url(db_path: str) -> str:
    """Turn a plain file path into a SQLite URL; leave full URLs alone.

    Args:
        db_path: Database URL or SQLite file path

    Returns:
        SQLAlchemy database URL
    """
    if "://" in db_path:
        return db_path
    return f"sqlite:///{db_path}"


def create_database_engine(
    database_url: str,
    echo: bool = False,
    pool_size: int = 5,
    max_overflow: int = 10,
) -> Engine:
    """
    Create a SQLAlchemy engine with appropriate settings.

    Args:
        database_url: Database connection URL (sqlite:/// or postgresql://)
        echo: Whether to log SQL statements
        pool_size: Number of connections to maintain in the pool
        max_overflow: Maximum connections beyond pool_size

    Returns:
        SQLAlchemy Engine instance

    Raises:
        ConfigurationError: If database URL is invalid
    """
    if not database_url:
        raise ConfigurationError("Database URL cannot be empty")

    is_sqlite = database_url.startswith("sqlite")

    try:
        if is_sqlite:
            db_file = database_url.split(":///", 1)[1] if ":///" in database_url else ""
            in_memory = db_file in ("", ":memory:")

            if not in_memory:
                Path(db_file).parent.mkdir(parents=True, exist_ok=True)

            engine = create_engine(
                database_url,
                echo=echo,
                # An in-memory database only lives as long as its one connection
                poolclass=pool.StaticPool if in_memory else pool.NullPool,
                connect_args={"check_same_thread": False},
            )
        else:
            engine = create_engine(
                database_url,
                echo=echo,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=True,
            )

        logger.debug(
            "database_engine_created",
            database_type="sqlite" if is_sqlite else engine.dialect.name,
        )
        return engine

    except Exception as e:
        logger.error("database_engine_failed", error=str(e), database_url=database_url)
        raise ConfigurationError(f"Failed to create database engine: {e}") from e


def init_database(database_url: str, echo: bool = False) -> sessionmaker:
    """
    Initialize the store database.

    Creates all tables if they don't exist. This is idempotent and safe
    to call multiple times.

    Args:
        database_url: Database connection URL
        echo: Whether to log SQL statements

    Returns:
        Session factory bound to the new engine

    Raises:
        ConfigurationError: If database initialization fails
    """
    engine = create_database_engine(database_url, echo=echo)

    try:
        Base.metadata.create_all(engine)
    except Exception as e:
        logger.error("database_init_failed", error=str(e), database_url=database_url)
        raise ConfigurationError(f"Failed to initialize database: {e}") from e

    logger.debug("database_initialized", tables=len(Base.metadata.tables))
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def session_scope(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Commits on success and rolls back on exception. Always closes the
    session when done.

    Args:
        session_factory: Factory returned by init_database()

    Yields:
        SQLAlchemy Session instance

    Raises:
        StateError: If database operation fails
    """
    session = session_factory()

    try:
        yield session
        session.commit()

    except Exception as e:
        session.rollback()
        logger.error("database_session_rolled_back", error=str(e))
        raise StateError(f"Database operation failed: {e}") from e

    finally:
        session.close()
