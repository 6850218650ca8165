"""Progress message formatting."""

from typing import Any

PROGRESS_SINGULAR = (
    "Processed 1 item ({imported} successfully, {failed} failed, {ignored} ignored)"
    " - {action} '{name}'"
)
PROGRESS_PLURAL = (
    "Processed {count} items ({imported} successfully, {failed} failed, {ignored} ignored)"
    " - {action} '{name}'"
)

ACTION_DONE = "done with"
ACTION_CONTINUING = "continuing with"


def format_plural(count: int, singular: str, plural: str, **fields: Any) -> str:
    """Pick the singular or plural template for count and fill it in.

    ``{count}`` is always available to the templates.

    Args:
        count: Number that decides between singular and plural
        singular: Template used when count is exactly 1
        plural: Template used otherwise (including 0)
        **fields: Values substituted into the template

    Returns:
        The formatted string
    """
    template = singular if count == 1 else plural
    return template.format(count=count, **fields)


def format_progress_message(
    processed: int,
    imported: int,
    failed: int,
    ignored: int,
    name: str,
    done: bool,
) -> str:
    """Build the human-readable progress summary for a migration.

    Args:
        processed: Rows processed (imported + failed + ignored)
        imported: Rows imported successfully
        failed: Rows that failed
        ignored: Rows that were ignored
        name: Migration name
        done: True for the final summary, False for intermediate feedback

    Returns:
        The progress message
    """
    return format_plural(
        processed,
        PROGRESS_SINGULAR,
        PROGRESS_PLURAL,
        imported=imported,
        failed=failed,
        ignored=ignored,
        action=ACTION_DONE if done else ACTION_CONTINUING,
        name=name,
    )
