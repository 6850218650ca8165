"""
CLI context for Migrate Tracker.

This module provides the context object that is passed to all CLI commands,
containing configuration and the key-value store.
"""

from dataclasses import dataclass, field
from pathlib import Path

from migrate_tracker.config import TrackerSettings, load_config_from_yaml
from migrate_tracker.exceptions import ConfigurationError
from migrate_tracker.store import DatabaseKeyValueStore
from migrate_tracker.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


@dataclass
class TrackerContext:
    """
    Context object for CLI commands.

    Attributes:
        config_path: Path to configuration file (optional; defaults and
            environment variables are used without one)
        log_level: Console logging level
        log_file: Log file given on the command line
        config: Loaded configuration
        store: Persistent key-value store for last-imported timestamps
    """

    config_path: Path | None = None
    log_level: str = "WARNING"
    log_file: Path | None = None

    # Lazy-loaded attributes
    _config: TrackerSettings | None = field(default=None, init=False, repr=False)
    _store: DatabaseKeyValueStore | None = field(default=None, init=False, repr=False)

    @property
    def config(self) -> TrackerSettings:
        """Get or load configuration."""
        if self._config is None:
            try:
                if self.config_path is None:
                    logger.debug("No configuration file, using defaults and environment")
                    self._config = TrackerSettings()
                else:
                    logger.debug("Loading configuration", config_path=str(self.config_path))
                    self._config = load_config_from_yaml(self.config_path)
            except (OSError, ValueError) as e:
                # pydantic's ValidationError is a ValueError
                raise ConfigurationError(f"Invalid configuration: {e}") from e

            # A log file from the config applies unless one was given on the command line
            if self.log_file is None and self._config.logging.file:
                configure_logging(
                    level=self.log_level,
                    log_format=self._config.logging.format,
                    log_file=self._config.logging.file,
                    file_level=self._config.logging.file_level,
                )

        return self._config

    @property
    def store(self) -> DatabaseKeyValueStore:
        """Get or open the key-value store."""
        if self._store is None:
            state = self.config.state
            logger.debug("Opening key-value store", db_path=state.db_path)
            self._store = DatabaseKeyValueStore(state.db_path, collection=state.collection)

        return self._store
