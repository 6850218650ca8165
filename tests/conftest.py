import pytest

from migrate_tracker.events import EventDispatcher
from migrate_tracker.reporting.messages import MemoryMessage
from migrate_tracker.store import MemoryKeyValueStore
from migrate_tracker.tracker import ProgressTracker
from migrate_tracker.utils.logging import configure_logging

FIXED_NOW_MS = 1_700_000_000_000


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Keep structlog output off the console during tests."""
    configure_logging(level="ERROR")


@pytest.fixture
def messages():
    return MemoryMessage()


@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def dispatcher():
    return EventDispatcher()


@pytest.fixture
def clock():
    """Controllable clock returning epoch milliseconds."""

    class Clock:
        now = FIXED_NOW_MS

        def __call__(self) -> int:
            return self.now

    return Clock()


@pytest.fixture
def make_tracker(messages, store, clock):
    """Build a tracker wired to in-memory collaborators."""

    def _make(name: str = "users", feedback: int = 0) -> ProgressTracker:
        return ProgressTracker(name, messages, feedback=feedback, store=store, clock=clock)

    return _make
