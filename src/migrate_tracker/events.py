"""Migration lifecycle events and a synchronous in-process dispatcher.

The migration engine announces what it does through named events. Listeners
subscribe to event names on an :class:`EventDispatcher` and are called in
registration order, on the dispatching thread.
"""

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

from migrate_tracker.exceptions import InvalidRowStatusError
from migrate_tracker.utils.logging import get_logger

logger = get_logger(__name__)

Listener = Callable[[Any], None]


class MigrateEvents(str, Enum):
    """Names of the events fired during a migration run."""

    # Row written to (or removed from) the ID map
    MAP_SAVE = "migrate.map_save"
    MAP_DELETE = "migrate.map_delete"

    # Whole-run boundaries
    PRE_IMPORT = "migrate.pre_import"
    POST_IMPORT = "migrate.post_import"

    # Per-row boundaries
    PRE_ROW_SAVE = "migrate.pre_row_save"
    POST_ROW_SAVE = "migrate.post_row_save"


class RowStatus(IntEnum):
    """Outcome recorded in the ID map for a source row.

    Values match the status codes stored by the migration engine.
    """

    IMPORTED = 0
    NEEDS_UPDATE = 1
    IGNORED = 2
    FAILED = 3

    @classmethod
    def parse(cls, value: Any) -> "RowStatus":
        """Coerce a status code, member or name into a RowStatus.

        Args:
            value: RowStatus member, integer code or case-insensitive name

        Returns:
            The matching RowStatus

        Raises:
            InvalidRowStatusError: If value does not name a known status
        """
        if isinstance(value, cls):
            return value
        # bool is an int subclass, but True/False are never status codes
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise InvalidRowStatusError(value) from None
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise InvalidRowStatusError(value) from None
        raise InvalidRowStatusError(value)


@dataclass
class MapSaveEvent:
    """A row's outcome was saved to the ID map.

    Attributes:
        fields: Saved map fields; ``source_row_status`` holds the outcome
    """

    fields: dict[str, Any] = field(default_factory=dict)


@dataclass
class MapDeleteEvent:
    """A row's ID map entry was removed (rollback)."""

    source_id: Any = None


@dataclass
class PostRowSaveEvent:
    """All processing for one source row has finished."""

    row: dict[str, Any] = field(default_factory=dict)
    destination_ids: list[Any] = field(default_factory=list)


@dataclass
class ImportEvent:
    """A migration run started or finished importing."""

    migration_id: str


class EventDispatcher:
    """Synchronous event dispatcher.

    Listeners are plain callables taking the event object. Exceptions raised
    by a listener propagate out of :meth:`dispatch`; remaining listeners for
    that event are not called.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def add_listener(self, event_name: MigrateEvents | str, listener: Listener) -> None:
        """Register a listener for an event.

        Args:
            event_name: Event to listen for
            listener: Callable invoked with the event object
        """
        self._listeners[_event_key(event_name)].append(listener)
        logger.debug("listener_added", event_name=_event_key(event_name))

    def remove_listener(self, event_name: MigrateEvents | str, listener: Listener) -> None:
        """Unregister a listener. Unknown listeners are ignored."""
        key = _event_key(event_name)
        listeners = self._listeners.get(key)
        if listeners and listener in listeners:
            listeners.remove(listener)
            logger.debug("listener_removed", event_name=key)
            if not listeners:
                del self._listeners[key]

    def get_listeners(self, event_name: MigrateEvents | str) -> list[Listener]:
        """Return a copy of the listeners registered for an event."""
        return list(self._listeners.get(_event_key(event_name), []))

    def has_listeners(self, event_name: MigrateEvents | str | None = None) -> bool:
        """Check whether an event (or any event, if None) has listeners."""
        if event_name is None:
            return any(self._listeners.values())
        return bool(self._listeners.get(_event_key(event_name)))

    def dispatch(self, event_name: MigrateEvents | str, event: Any = None) -> Any:
        """Call every listener registered for event_name with event.

        Args:
            event_name: Event being fired
            event: Event payload passed to each listener

        Returns:
            The event object, for chaining
        """
        for listener in self.get_listeners(event_name):
            listener(event)
        return event


def _event_key(event_name: MigrateEvents | str) -> str:
    if isinstance(event_name, MigrateEvents):
        return event_name.value
    return event_name
