from migrate_tracker.reporting.formatting import format_plural, format_progress_message


def test_format_plural_singular_only_for_one():
    assert format_plural(1, "{count} row", "{count} rows") == "1 row"
    assert format_plural(0, "{count} row", "{count} rows") == "0 rows"
    assert format_plural(2, "{count} row", "{count} rows") == "2 rows"


def test_format_plural_substitutes_fields():
    assert format_plural(3, "one {what}", "{count} {what}s", what="item") == "3 items"


def test_singular_progress_message():
    text = format_progress_message(
        processed=1, imported=1, failed=0, ignored=0, name="users", done=True
    )
    assert text == "Processed 1 item (1 successfully, 0 failed, 0 ignored) - done with 'users'"


def test_plural_progress_message():
    text = format_progress_message(
        processed=2, imported=2, failed=0, ignored=0, name="users", done=True
    )
    assert text.startswith("Processed 2 items")


def test_zero_is_plural():
    text = format_progress_message(
        processed=0, imported=0, failed=0, ignored=0, name="users", done=True
    )
    assert text.startswith("Processed 0 items")


def test_intermediate_phrasing():
    text = format_progress_message(
        processed=5, imported=3, failed=1, ignored=1, name="nodes", done=False
    )
    assert text == (
        "Processed 5 items (3 successfully, 1 failed, 1 ignored) - continuing with 'nodes'"
    )


def test_braces_in_name_are_kept_literally():
    text = format_progress_message(
        processed=2, imported=2, failed=0, ignored=0, name="d7_{node}", done=True
    )
    assert text.endswith("done with 'd7_{node}'")
