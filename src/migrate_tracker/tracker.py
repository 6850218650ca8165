"""Progress tracking for migration runs.

This module provides :class:`ProgressTracker`, which listens to the events a
migration engine fires while it imports or rolls back rows, keeps per-status
counters, and reports progress to a message sink.
"""

import threading
import time
from collections.abc import Callable
from typing import Any

from migrate_tracker.events import (
    EventDispatcher,
    ImportEvent,
    MapDeleteEvent,
    MapSaveEvent,
    MigrateEvents,
    PostRowSaveEvent,
    RowStatus,
)
from migrate_tracker.exceptions import ConfigurationError, EventError, InvalidRowStatusError
from migrate_tracker.reporting.formatting import format_progress_message
from migrate_tracker.reporting.messages import MigrateMessage
from migrate_tracker.store.base import KeyValueStore
from migrate_tracker.store.memory import MemoryKeyValueStore
from migrate_tracker.utils.logging import get_logger, log_progress

logger = get_logger(__name__)


def current_time_ms() -> int:
    """Milliseconds since the Unix epoch."""
    return round(time.time() * 1000)


class ProgressTracker:
    """Counts row outcomes for one migration run and reports progress.

    The tracker is created at the start of a run and attached to the
    engine's dispatcher. Events must arrive in row order: the map save or
    delete events for a row come before that row's post-row-save event, and
    every row event comes before post-import.

    Usage:
        tracker = ProgressTracker("users", ConsoleMessage(), feedback=100)
        tracker.attach(dispatcher)
        ...  # engine runs and fires events
        tracker.detach(dispatcher)
    """

    def __init__(
        self,
        migration_name: str,
        message: MigrateMessage,
        feedback: int = 0,
        store: KeyValueStore | None = None,
        clock: Callable[[], int] | None = None,
    ):
        """Initialize progress tracker.

        Args:
            migration_name: Migration identifier, used in messages and as the
                last-imported store key
            message: Sink that receives progress messages
            feedback: Emit intermediate progress every this many rows (0 = never)
            store: Where the last-imported timestamp is written
            clock: Returns the current time in epoch milliseconds

        Raises:
            ConfigurationError: If feedback is negative or migration_name is empty
        """
        if not migration_name:
            raise ConfigurationError("Migration name cannot be empty")
        if feedback < 0:
            raise ConfigurationError(f"Feedback interval must be >= 0, got {feedback}")

        self.migration_name = migration_name
        self.message = message
        self.feedback = feedback
        self.store = store if store is not None else MemoryKeyValueStore()
        self.clock = clock or current_time_ms

        self.save_counters: dict[RowStatus, int] = {status: 0 for status in RowStatus}
        self.delete_counter = 0
        # Rows processed since the tracker was created; drives feedback cadence
        self.counter = 0

        self._lock = threading.RLock()
        self._attached: list[EventDispatcher] = []

    def _listeners(self) -> list[tuple[MigrateEvents, Callable[[Any], None]]]:
        return [
            (MigrateEvents.MAP_SAVE, self.on_map_save),
            (MigrateEvents.MAP_DELETE, self.on_map_delete),
            (MigrateEvents.POST_IMPORT, self.on_post_import),
            (MigrateEvents.POST_ROW_SAVE, self.on_post_row_save),
        ]

    def attach(self, dispatcher: EventDispatcher) -> "ProgressTracker":
        """Subscribe to the dispatcher's migration events.

        Attaching to a dispatcher the tracker is already attached to does
        nothing.
        """
        if any(d is dispatcher for d in self._attached):
            return self

        for event_name, listener in self._listeners():
            dispatcher.add_listener(event_name, listener)
        self._attached.append(dispatcher)

        logger.debug(
            "progress_tracker_attached", migration=self.migration_name, feedback=self.feedback
        )
        return self

    def detach(self, dispatcher: EventDispatcher) -> "ProgressTracker":
        """Unsubscribe from the dispatcher. No-op if not attached."""
        if not any(d is dispatcher for d in self._attached):
            return self

        for event_name, listener in self._listeners():
            dispatcher.remove_listener(event_name, listener)
        self._attached = [d for d in self._attached if d is not dispatcher]

        logger.debug("progress_tracker_detached", migration=self.migration_name)
        return self

    def on_map_save(self, event: MapSaveEvent) -> None:
        """Count a row outcome saved to the ID map.

        Raises:
            EventError: If the event carries no source_row_status
            InvalidRowStatusError: If the status is not a known RowStatus
        """
        try:
            status = event.fields["source_row_status"]
        except (AttributeError, KeyError):
            raise EventError(
                "Map save event has no source_row_status", MigrateEvents.MAP_SAVE.value
            ) from None
        try:
            self.record_save(status)
        except InvalidRowStatusError as e:
            raise InvalidRowStatusError(e.status, MigrateEvents.MAP_SAVE.value) from None

    def record_save(self, status: RowStatus | int | str) -> None:
        """Increment the counter for one row status."""
        row_status = RowStatus.parse(status)
        with self._lock:
            self.save_counters[row_status] += 1

    def on_map_delete(self, event: MapDeleteEvent | None = None) -> None:
        """Count a rolled-back row."""
        with self._lock:
            self.delete_counter += 1

    def on_post_row_save(self, event: PostRowSaveEvent | None = None) -> None:
        """React to a row finishing processing.

        Every ``feedback`` rows an intermediate message is shown and the
        counters restart, so each message covers only the rows since the
        previous one. The check runs before this row is counted.
        """
        with self._lock:
            if self.feedback and self.counter and self.counter % self.feedback == 0:
                self.progress_message(done=False)
                self.reset_counters()
            self.counter += 1

    def on_post_import(self, event: ImportEvent | None = None) -> None:
        """Record the completion time and show the final summary."""
        now = self.clock()
        self.store.set(self.migration_name, now)
        logger.info(
            "last_imported_recorded",
            migration=self.migration_name,
            migration_id=getattr(event, "migration_id", None),
            timestamp_ms=now,
        )
        self.progress_message(done=True)

    def progress_message(self, done: bool = True) -> None:
        """Show what has been processed since the last feedback (or the start).

        Args:
            done: True for the final summary, False for intermediate feedback
        """
        with self._lock:
            stats = self.get_stats()

        text = format_progress_message(
            processed=stats["processed"],
            imported=stats["imported"],
            failed=stats["failed"],
            ignored=stats["ignored"],
            name=self.migration_name,
            done=done,
        )
        self.message.display(text)
        log_progress(logger, self.migration_name, stats, done)

    def imported_count(self) -> int:
        return self.save_counters[RowStatus.IMPORTED]

    def ignored_count(self) -> int:
        return self.save_counters[RowStatus.IGNORED]

    def failed_count(self) -> int:
        return self.save_counters[RowStatus.FAILED]

    def needs_update_count(self) -> int:
        return self.save_counters[RowStatus.NEEDS_UPDATE]

    def processed_count(self) -> int:
        """Total rows processed.

        NEEDS_UPDATE is not counted: it is set on stubs created as side
        effects of other rows, not on the rows being imported.
        """
        return (
            self.save_counters[RowStatus.IMPORTED]
            + self.save_counters[RowStatus.IGNORED]
            + self.save_counters[RowStatus.FAILED]
        )

    def rollback_count(self) -> int:
        return self.delete_counter

    def get_stats(self) -> dict[str, int]:
        """Get current counter values.

        Returns:
            Dictionary with current statistics
        """
        return {
            "processed": self.processed_count(),
            "imported": self.imported_count(),
            "failed": self.failed_count(),
            "ignored": self.ignored_count(),
            "needs_update": self.needs_update_count(),
            "rolled_back": self.rollback_count(),
        }

    def reset_counters(self) -> None:
        """Reset all the per-status counters to 0."""
        with self._lock:
            for status in self.save_counters:
                self.save_counters[status] = 0
            self.delete_counter = 0
