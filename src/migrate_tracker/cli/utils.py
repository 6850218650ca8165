"""
Utility functions for CLI commands.

This module provides helpers for colored output and tables.
"""

from datetime import UTC, datetime
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from migrate_tracker.reporting.colors import MigrationColors

console = Console()


def echo_success(message: str) -> None:
    """Print success message in green."""
    click.secho(f"✓ {message}", fg="green")


def echo_info(message: str) -> None:
    """Print info message in blue."""
    click.secho(f"ℹ {message}", fg="blue")


def format_timestamp_ms(value: Any) -> str:
    """Render epoch milliseconds as a UTC timestamp; anything else as-is."""
    if isinstance(value, int) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    return "N/A" if value is None else str(value)


def print_table(
    title: str,
    columns: list[str],
    rows: list[list[Any]],
    show_header: bool = True,
    column_styles: list[str | None] | None = None,
    row_styles: list[str | None] | None = None,
) -> None:
    """
    Print a formatted table using rich.

    Args:
        title: Table title
        columns: Column headers
        rows: List of row data
        show_header: Whether to show header row
        column_styles: Optional style per column
        row_styles: Optional style per row
    """
    table = Table(
        title=title,
        show_header=show_header,
        header_style=MigrationColors.HEADER,
        border_style=MigrationColors.BORDER,
    )

    column_styles = column_styles or [None] * len(columns)
    for col, style in zip(columns, column_styles, strict=True):
        table.add_column(col, style=style)

    row_styles = row_styles or [None] * len(rows)
    for row, style in zip(rows, row_styles, strict=True):
        table.add_row(*[str(cell) for cell in row], style=style)

    console.print(table)
