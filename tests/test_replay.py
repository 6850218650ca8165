import json

import pytest

from migrate_tracker.events import MapSaveEvent, MigrateEvents, RowStatus
from migrate_tracker.exceptions import EventError, InvalidRowStatusError
from migrate_tracker.replay import parse_event_line, replay_events


def lines(*records):
    return [json.dumps(record) for record in records]


def test_parse_map_save():
    event_name, event = parse_event_line('{"event": "map_save", "status": "ignored"}', 1)
    assert event_name is MigrateEvents.MAP_SAVE
    assert isinstance(event, MapSaveEvent)
    assert event.fields["source_row_status"] is RowStatus.IGNORED


def test_parse_map_save_numeric_status():
    _, event = parse_event_line('{"event": "map_save", "status": 3}', 1)
    assert event.fields["source_row_status"] is RowStatus.FAILED


def test_replay_matches_direct_calls(make_tracker, dispatcher, messages, store):
    tracker = make_tracker(name="users", feedback=2).attach(dispatcher)

    count = replay_events(
        lines(
            {"event": "map_save", "status": "imported"},
            {"event": "post_row_save"},
            {"event": "map_save", "status": "failed"},
            {"event": "map_save", "status": "needs_update"},
            {"event": "post_row_save"},
            {"event": "map_save", "status": "imported"},
            {"event": "post_row_save"},
            {"event": "map_delete", "source_id": 7},
            {"event": "post_import", "migration_id": "users"},
        ),
        dispatcher,
    )

    assert count == 9
    assert messages.texts == [
        "Processed 3 items (2 successfully, 1 failed, 0 ignored) - continuing with 'users'",
        "Processed 0 items (0 successfully, 0 failed, 0 ignored) - done with 'users'",
    ]
    assert tracker.rollback_count() == 1
    assert "users" in store.get_all()


def test_blank_lines_skipped(dispatcher):
    assert replay_events(["", "   ", '{"event": "post_row_save"}', "\n"], dispatcher) == 1


@pytest.mark.parametrize(
    "text,fragment",
    [
        ("not json", "Invalid JSON"),
        ("[1, 2]", "JSON object"),
        ('{"event": "explode"}', "Unknown event type"),
        ('{"event": "map_save"}', "requires a status"),
        ('{"event": "post_import"}', "requires a migration_id"),
    ],
)
def test_malformed_lines(dispatcher, text, fragment):
    with pytest.raises(EventError) as exc_info:
        replay_events(['{"event": "post_row_save"}', text], dispatcher)
    assert fragment in str(exc_info.value)
    assert exc_info.value.line == 2


def test_invalid_status_reports_line(dispatcher):
    with pytest.raises(InvalidRowStatusError) as exc_info:
        replay_events(['{"event": "map_save", "status": "lost"}'], dispatcher)
    assert exc_info.value.line == 1
    assert str(exc_info.value).startswith("line 1:")
    assert exc_info.value.event_name == "map_save"


def test_events_before_bad_line_are_delivered(make_tracker, dispatcher):
    tracker = make_tracker().attach(dispatcher)
    with pytest.raises(EventError):
        replay_events(
            ['{"event": "map_save", "status": "imported"}', "{broken"],
            dispatcher,
        )
    assert tracker.imported_count() == 1
