"""Custom exceptions for Migrate Tracker.

This module defines exception classes for the error conditions that can
occur while tracking a migration run: bad configuration, malformed events
and failures of the key-value store.
"""


class MigrateTrackerError(Exception):
    """Base exception for all migrate tracker errors."""

    pass


class ConfigurationError(MigrateTrackerError):
    """Raised when configuration is invalid or missing."""

    pass


class EventError(MigrateTrackerError):
    """Raised when an event cannot be interpreted."""

    def __init__(self, message: str, event_name: str | None = None, line: int | None = None):
        """Initialize event error.

        Args:
            message: Error message
            event_name: Name of the offending event, if known
            line: Line number in a replayed event log, if applicable
        """
        self.message = message
        self.event_name = event_name
        self.line = line
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with event name and line number."""
        msg = self.message
        if self.event_name:
            msg = f"{msg} (event: {self.event_name})"
        if self.line is not None:
            msg = f"line {self.line}: {msg}"
        return msg


class InvalidRowStatusError(EventError, ValueError):
    """Raised when a row status is not one of the known status codes."""

    def __init__(
        self, status: object, event_name: str | None = None, line: int | None = None
    ):
        """Initialize invalid status error.

        Args:
            status: The status value that could not be parsed
            event_name: Name of the event that carried the status, if known
            line: Line number in a replayed event log, if applicable
        """
        self.status = status
        super().__init__(f"Invalid row status: {status!r}", event_name=event_name, line=line)


class StateError(MigrateTrackerError):
    """Raised when key-value store operations fail."""

    pass
