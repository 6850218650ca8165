"""
Replay command.

Feeds a recorded JSON-lines event log through a ProgressTracker so the
progress output and last-imported timestamp can be reproduced offline.
"""

from pathlib import Path

import click

from migrate_tracker.cli.context import TrackerContext
from migrate_tracker.cli.decorators import handle_errors, pass_context
from migrate_tracker.cli.utils import echo_info, print_table
from migrate_tracker.events import EventDispatcher
from migrate_tracker.reporting.messages import ConsoleMessage
from migrate_tracker.reporting.colors import MigrationColors
from migrate_tracker.replay import replay_events
from migrate_tracker.store import MemoryKeyValueStore
from migrate_tracker.tracker import ProgressTracker
from migrate_tracker.utils.logging import get_logger

logger = get_logger(__name__)


@click.command(name="replay")
@click.argument("events_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--name", "-n", help="Migration name (defaults to tracker.migration_name)")
@click.option(
    "--feedback",
    "-f",
    type=click.IntRange(min=0),
    help="Report progress every N processed rows (defaults to tracker.feedback)",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Do not write the last-imported timestamp to the store",
)
@click.option("--stats", "show_stats", is_flag=True, help="Print final counters as a table")
@pass_context
@handle_errors
def replay(
    ctx: TrackerContext,
    events_file: Path,
    name: str | None,
    feedback: int | None,
    dry_run: bool,
    show_stats: bool,
) -> None:
    """Replay an event log and report progress.

    Each line of EVENTS_FILE is a JSON object such as
    {"event": "map_save", "status": "imported"}.

    Examples:

        migrate-tracker replay events.jsonl --name users --feedback 100
    """
    tracker_config = ctx.config.tracker
    migration_name = name or tracker_config.migration_name
    if not migration_name:
        raise click.UsageError("Migration name required: use --name or set tracker.migration_name")

    store = MemoryKeyValueStore(ctx.config.state.collection) if dry_run else ctx.store

    tracker = ProgressTracker(
        migration_name,
        ConsoleMessage(),
        feedback=tracker_config.feedback if feedback is None else feedback,
        store=store,
    )
    dispatcher = EventDispatcher()
    tracker.attach(dispatcher)

    try:
        with open(events_file, encoding="utf-8") as f:
            count = replay_events(f, dispatcher)
    finally:
        tracker.detach(dispatcher)

    logger.info("replay_completed", migration=migration_name, events=count, dry_run=dry_run)
    echo_info(f"Replayed {count} events from {events_file.name}")

    if show_stats:
        stats = tracker.get_stats()
        print_table(
            f"Counters: {migration_name}",
            ["Counter", "Value"],
            [[key, value] for key, value in stats.items()],
            row_styles=[MigrationColors.for_counter(key) for key in stats],
        )
