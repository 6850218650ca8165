"""Replay a recorded event log through a dispatcher.

Event logs are JSON lines, one event per line::

    {"event": "map_save", "status": "imported"}
    {"event": "map_delete", "source_id": 12}
    {"event": "post_row_save"}
    {"event": "post_import", "migration_id": "users"}

``status`` accepts a status name or its integer code.
"""

import json
from collections.abc import Iterable
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
from migrate_tracker.exceptions import EventError, InvalidRowStatusError
from migrate_tracker.utils.logging import get_logger

logger = get_logger(__name__)


def _map_save(record: dict[str, Any], line: int) -> MapSaveEvent:
    if "status" not in record:
        raise EventError("map_save requires a status", "map_save", line)
    try:
        status = RowStatus.parse(record["status"])
    except InvalidRowStatusError as e:
        raise InvalidRowStatusError(e.status, "map_save", line) from None
    return MapSaveEvent(fields={"source_row_status": status})


def _map_delete(record: dict[str, Any], line: int) -> MapDeleteEvent:
    return MapDeleteEvent(source_id=record.get("source_id"))


def _post_row_save(record: dict[str, Any], line: int) -> PostRowSaveEvent:
    return PostRowSaveEvent(
        row=record.get("row") or {},
        destination_ids=record.get("destination_ids") or [],
    )


def _post_import(record: dict[str, Any], line: int) -> ImportEvent:
    migration_id = record.get("migration_id")
    if not migration_id:
        raise EventError("post_import requires a migration_id", "post_import", line)
    return ImportEvent(migration_id=str(migration_id))


EVENT_BUILDERS = {
    "map_save": (MigrateEvents.MAP_SAVE, _map_save),
    "map_delete": (MigrateEvents.MAP_DELETE, _map_delete),
    "post_row_save": (MigrateEvents.POST_ROW_SAVE, _post_row_save),
    "post_import": (MigrateEvents.POST_IMPORT, _post_import),
}


def parse_event_line(text: str, line: int) -> tuple[MigrateEvents, Any]:
    """Parse one event-log line into an event name and payload.

    Args:
        text: JSON text of the line
        line: 1-based line number, used in error messages

    Returns:
        (event name, event object)

    Raises:
        EventError: If the line is not a valid event
    """
    try:
        record = json.loads(text)
    except json.JSONDecodeError as e:
        raise EventError(f"Invalid JSON: {e.msg}", line=line) from e

    if not isinstance(record, dict):
        raise EventError("Event must be a JSON object", line=line)

    kind = record.get("event")
    if kind not in EVENT_BUILDERS:
        raise EventError(f"Unknown event type {kind!r}", line=line)

    event_name, build = EVENT_BUILDERS[kind]
    return event_name, build(record, line)


def replay_events(lines: Iterable[str], dispatcher: EventDispatcher) -> int:
    """Dispatch every event in an event log.

    Blank lines are skipped. Events are dispatched as they are parsed, so a
    bad line stops the replay with earlier events already delivered.

    Args:
        lines: Lines of a JSON-lines event log
        dispatcher: Dispatcher to fire events on

    Returns:
        Number of events dispatched

    Raises:
        EventError: On the first malformed line
    """
    count = 0
    for line_number, text in enumerate(lines, start=1):
        if not text.strip():
            continue
        event_name, event = parse_event_line(text, line_number)
        dispatcher.dispatch(event_name, event)
        count += 1

    logger.info("events_replayed", count=count)
    return count
