"""
Status commands.

This module provides commands for viewing and clearing the last-imported
timestamps recorded for each migration.
"""

import click

from migrate_tracker.cli.context import TrackerContext
from migrate_tracker.cli.decorators import confirm_action, handle_errors, pass_context
from migrate_tracker.cli.utils import echo_info, echo_success, format_timestamp_ms, print_table
from migrate_tracker.reporting.colors import MigrationColors
from migrate_tracker.utils.logging import get_logger

logger = get_logger(__name__)


@click.command(name="status")
@click.argument("names", nargs=-1)
@pass_context
@handle_errors
def status(ctx: TrackerContext, names: tuple[str, ...]) -> None:
    """Show when each migration last finished importing.

    With NAMES, only those migrations are shown; migrations that never
    finished are listed as N/A.

    Examples:

        migrate-tracker status

        migrate-tracker status users articles
    """
    store = ctx.store

    if names:
        entries = {name: store.get(name) for name in names}
    else:
        entries = store.get_all()

    if not entries:
        echo_info("No migrations have been recorded yet")
        return

    print_table(
        "Last Imported",
        ["Migration", "Last Imported", "Epoch (ms)"],
        [
            [name, format_timestamp_ms(value), "N/A" if value is None else value]
            for name, value in sorted(entries.items())
        ],
        column_styles=[MigrationColors.NAME, MigrationColors.TIME, None],
    )


@click.command(name="forget")
@click.argument("name")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@pass_context
@handle_errors
@confirm_action("This removes the last-imported timestamp. Continue?")
def forget(ctx: TrackerContext, name: str, yes: bool) -> None:
    """Remove the last-imported timestamp recorded for NAME."""
    ctx.store.delete(name)
    logger.info("last_imported_forgotten", migration=name)
    echo_success(f"Forgot last-imported timestamp for '{name}'")
