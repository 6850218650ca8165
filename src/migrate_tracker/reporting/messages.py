"""Message sinks for user-facing migration output.

A message sink receives the plain-text progress summaries produced by the
tracker. Sinks only need a ``display(message, type)`` method, so anything
from a Rich console to a test buffer can be plugged in.
"""

from typing import Protocol, runtime_checkable

from rich.console import Console
from rich.text import Text

from migrate_tracker.reporting.colors import MigrationColors
from migrate_tracker.utils.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class MigrateMessage(Protocol):
    """Anything that can show a message to the operator."""

    def display(self, message: str, type: str = "status") -> None:
        """Show a message.

        Args:
            message: Text to show
            type: One of "status", "warning" or "error"
        """
        ...


class ConsoleMessage:
    """Prints messages to a Rich console, colored by message type."""

    def __init__(self, console: Console | None = None):
        """Initialize console sink.

        Args:
            console: Console to print to (defaults to a stdout console)
        """
        self.console = console or Console()

    def display(self, message: str, type: str = "status") -> None:
        # Text() keeps square brackets in names from being read as markup
        self.console.print(
            Text(message, style=MigrationColors.for_message_type(type)), soft_wrap=True
        )


class LogMessage:
    """Routes messages to the structured logger."""

    def __init__(self, name: str = "migrate_tracker.messages"):
        self.logger = get_logger(name)

    def display(self, message: str, type: str = "status") -> None:
        if type == "error":
            self.logger.error("migrate_message", message=message)
        elif type == "warning":
            self.logger.warning("migrate_message", message=message)
        else:
            self.logger.info("migrate_message", message=message)


class MemoryMessage:
    """Collects messages in memory.

    Useful for embedding the tracker where output is rendered later, and
    for tests.
    """

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def display(self, message: str, type: str = "status") -> None:
        self.messages.append((type, message))

    @property
    def texts(self) -> list[str]:
        """Message texts in the order they were displayed."""
        return [text for _, text in self.messages]

    def clear(self) -> None:
        self.messages.clear()
