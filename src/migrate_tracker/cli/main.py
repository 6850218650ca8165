"""
Main CLI entry point for Migrate Tracker.

This module provides the command-line interface for replaying migration
event logs and inspecting recorded run state.
"""

import sys
from pathlib import Path

import click
from dotenv import load_dotenv

from migrate_tracker import __version__
from migrate_tracker.cli.commands import config as config_commands
from migrate_tracker.cli.commands import replay as replay_commands
from migrate_tracker.cli.commands import status as status_commands
from migrate_tracker.cli.context import TrackerContext
from migrate_tracker.utils.logging import configure_logging, get_logger

# Load environment variables from .env file
load_dotenv()

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="migrate-tracker")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
    envvar="MIGRATE_TRACKER_CONFIG",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Set console logging level",
    envvar="MIGRATE_TRACKER_LOG_LEVEL",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    help="Also write logs to this file",
    envvar="MIGRATE_TRACKER_LOG_FILE",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    log_level: str,
    log_file: Path | None,
) -> None:
    """Migrate Tracker - progress reporting for migration runs.

    Examples:

        # Replay an event log with feedback every 100 rows
        migrate-tracker replay events.jsonl --name users --feedback 100

        # Show when each migration last finished
        migrate-tracker status
    """
    configure_logging(level=log_level, log_file=str(log_file) if log_file else None)

    ctx.obj = TrackerContext(
        config_path=config,
        log_level=log_level,
        log_file=log_file,
    )

    logger.debug(
        "CLI initialized",
        config=str(config) if config else None,
        log_level=log_level,
    )


cli.add_command(config_commands.config)
cli.add_command(replay_commands.replay)
cli.add_command(status_commands.status)
cli.add_command(status_commands.forget)


def main() -> int:
    """Main entry point for CLI."""
    try:
        # Non-standalone mode returns the exit code of click.exceptions.Exit
        rv = cli(standalone_mode=False)
        return rv if isinstance(rv, int) else 0
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except Exception as e:
        logger.error("Unexpected error", error=str(e), exc_info=True)
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
