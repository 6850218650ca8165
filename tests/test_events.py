import logging

import pytest
import structlog

from migrate_tracker import events
from migrate_tracker.events import EventDispatcher, MigrateEvents, RowStatus
from migrate_tracker.exceptions import EventError, InvalidRowStatusError


class TestRowStatus:
    def test_status_codes(self):
        assert RowStatus.IMPORTED == 0
        assert RowStatus.NEEDS_UPDATE == 1
        assert RowStatus.IGNORED == 2
        assert RowStatus.FAILED == 3

    @pytest.mark.parametrize(
        "value,expected",
        [
            (RowStatus.FAILED, RowStatus.FAILED),
            (0, RowStatus.IMPORTED),
            (2, RowStatus.IGNORED),
            ("imported", RowStatus.IMPORTED),
            ("Needs_Update", RowStatus.NEEDS_UPDATE),
            (" failed ", RowStatus.FAILED),
        ],
    )
    def test_parse(self, value, expected):
        assert RowStatus.parse(value) is expected

    @pytest.mark.parametrize("value", [4, -1, "done", None, True, 1.0])
    def test_parse_rejects_unknown(self, value):
        with pytest.raises(InvalidRowStatusError) as exc_info:
            RowStatus.parse(value)
        assert exc_info.value.status == value

    def test_invalid_status_is_value_error_and_event_error(self):
        error = InvalidRowStatusError(9)
        assert isinstance(error, ValueError)
        assert isinstance(error, EventError)
        assert "9" in str(error)


class TestEventDispatcher:
    def test_listeners_called_in_registration_order(self):
        dispatcher = EventDispatcher()
        calls = []
        dispatcher.add_listener(MigrateEvents.MAP_SAVE, lambda e: calls.append(("a", e)))
        dispatcher.add_listener(MigrateEvents.MAP_SAVE, lambda e: calls.append(("b", e)))

        result = dispatcher.dispatch(MigrateEvents.MAP_SAVE, "payload")

        assert calls == [("a", "payload"), ("b", "payload")]
        assert result == "payload"

    def test_enum_and_string_names_are_equivalent(self):
        dispatcher = EventDispatcher()
        calls = []
        dispatcher.add_listener("migrate.post_import", calls.append)
        dispatcher.dispatch(MigrateEvents.POST_IMPORT, 1)
        assert calls == [1]

    def test_dispatch_without_listeners(self):
        dispatcher = EventDispatcher()
        assert dispatcher.dispatch(MigrateEvents.PRE_IMPORT, "x") == "x"

    def test_remove_listener(self):
        dispatcher = EventDispatcher()
        calls = []
        dispatcher.add_listener(MigrateEvents.MAP_DELETE, calls.append)
        dispatcher.remove_listener(MigrateEvents.MAP_DELETE, calls.append)
        dispatcher.dispatch(MigrateEvents.MAP_DELETE, 1)

        assert calls == []
        assert not dispatcher.has_listeners(MigrateEvents.MAP_DELETE)

    def test_remove_unknown_listener_is_ignored(self):
        dispatcher = EventDispatcher()
        dispatcher.remove_listener(MigrateEvents.MAP_DELETE, print)
        assert not dispatcher.has_listeners()

    def test_listener_errors_propagate(self):
        dispatcher = EventDispatcher()
        later = []

        def boom(event):
            raise RuntimeError("listener failed")

        dispatcher.add_listener(MigrateEvents.MAP_SAVE, boom)
        dispatcher.add_listener(MigrateEvents.MAP_SAVE, later.append)

        with pytest.raises(RuntimeError, match="listener failed"):
            dispatcher.dispatch(MigrateEvents.MAP_SAVE, 1)
        assert later == []

    def test_listener_changes_are_logged_at_debug(self, monkeypatch):
        capture = structlog.testing.CapturingLogger()
        debug_logger = structlog.wrap_logger(
            capture,
            wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
            processors=[],
        )
        monkeypatch.setattr(events, "logger", debug_logger)

        dispatcher = EventDispatcher()
        dispatcher.add_listener(MigrateEvents.MAP_SAVE, print)
        dispatcher.remove_listener(MigrateEvents.MAP_SAVE, print)

        logged = [(call.kwargs["event"], call.kwargs["event_name"]) for call in capture.calls]
        assert logged == [
            ("listener_added", "migrate.map_save"),
            ("listener_removed", "migrate.map_save"),
        ]
