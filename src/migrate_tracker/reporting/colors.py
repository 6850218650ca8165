"""Color definitions for console output.

This module provides the Rich color names used for progress messages and
CLI tables.
"""


class MigrationColors:
    """Centralized color palette for Migrate Tracker console output.

    Uses Rich library color names; all are terminal-safe in both light and
    dark terminals.

    Reference: https://rich.readthedocs.io/en/stable/appendix/colors.html
    """

    # Message types
    STATUS = "cyan"
    WARNING = "yellow"
    ERROR = "red"

    # Counters
    IMPORTED = "green"
    FAILED = "red"
    IGNORED = "dark_orange"
    ROLLED_BACK = "magenta"

    # Data colors
    NAME = "bold bright_white"
    TIME = "bright_magenta"

    # UI elements
    BORDER = "blue"
    HEADER = "bold bright_white"

    @classmethod
    def for_message_type(cls, message_type: str) -> str:
        """Return the style for a message sink type (status, warning, error)."""
        return {
            "warning": cls.WARNING,
            "error": cls.ERROR,
        }.get(message_type, cls.STATUS)

    @classmethod
    def for_counter(cls, counter: str) -> str | None:
        """Return the style for a get_stats() counter, or None to leave it plain."""
        return {
            "imported": cls.IMPORTED,
            "failed": cls.FAILED,
            "ignored": cls.IGNORED,
            "rolled_back": cls.ROLLED_BACK,
        }.get(counter)
