"""Progress message formatting and output for Migrate Tracker."""

from migrate_tracker.reporting.colors import MigrationColors
from migrate_tracker.reporting.formatting import format_plural, format_progress_message
from migrate_tracker.reporting.messages import (
    ConsoleMessage,
    LogMessage,
    MemoryMessage,
    MigrateMessage,
)

__all__ = [
    "MigrationColors",
    "format_plural",
    "format_progress_message",
    "MigrateMessage",
    "ConsoleMessage",
    "LogMessage",
    "MemoryMessage",
]
