import json
import logging

import pytest

from migrate_tracker import __version__
from migrate_tracker.utils.logging import JSONFileFormatter, configure_logging, get_logger


@pytest.fixture
def restore_logging():
    yield
    configure_logging(level="ERROR")


def test_json_file_formatter_strips_ansi():
    record = logging.LogRecord(
        "migrate_tracker.tracker", logging.INFO, __file__, 1, "\x1b[1mfeedback\x1b[0m", None, None
    )
    entry = json.loads(JSONFileFormatter().format(record))

    assert entry["event"] == "feedback"
    assert entry["level"] == "info"
    assert entry["app"] == "migrate-tracker"
    assert entry["version"] == __version__


def test_file_logging_writes_json_lines(tmp_path, restore_logging):
    log_file = tmp_path / "logs" / "tracker.log"
    configure_logging(level="ERROR", log_file=str(log_file), file_level="INFO")

    get_logger("migrate_tracker.test").info("tracker_file_event", migration="users")

    lines = log_file.read_text().splitlines()
    entries = [json.loads(line) for line in lines]
    assert any("tracker_file_event" in entry["event"] for entry in entries)
