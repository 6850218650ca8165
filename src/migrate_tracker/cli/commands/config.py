"""
Configuration commands.

This module provides commands for inspecting the effective configuration.
"""

import click
import yaml

from migrate_tracker.cli.context import TrackerContext
from migrate_tracker.cli.decorators import handle_errors, pass_context
from migrate_tracker.cli.utils import echo_success, print_table
from migrate_tracker.config import save_config_to_yaml
from migrate_tracker.utils.logging import get_logger

logger = get_logger(__name__)


@click.group(name="config")
def config() -> None:
    """Configuration commands."""
    pass


@config.command(name="show")
@pass_context
@handle_errors
def show(ctx: TrackerContext) -> None:
    """Print the effective configuration as YAML."""
    click.echo(yaml.dump(ctx.config.model_dump(), default_flow_style=False, sort_keys=False))


@config.command(name="validate")
@pass_context
@handle_errors
def validate(ctx: TrackerContext) -> None:
    """Validate the configuration and summarize it."""
    settings = ctx.config

    print_table(
        "Configuration Summary",
        ["Setting", "Value"],
        [
            ["Migration Name", settings.tracker.migration_name or "N/A"],
            ["Feedback Interval", settings.tracker.feedback or "disabled"],
            ["State DB Path", settings.state.db_path],
            ["Log Level", settings.logging.level],
        ],
    )
    echo_success("Configuration is valid!")


@config.command(name="init")
@click.argument("output", type=click.Path(dir_okay=False))
@pass_context
@handle_errors
def init(ctx: TrackerContext, output: str) -> None:
    """Write the effective configuration to OUTPUT as a starting point."""
    save_config_to_yaml(ctx.config, output)
    logger.info("config_written", output=output)
    echo_success(f"Configuration written to {output}")
