"""stash done — mark an entry done (or not done)."""

from __future__ import annotations

import click


@click.command()
@click.argument("line_index", type=int)
@click.option("--undo", is_flag=True, help="Clear the done marker instead of setting it.")
@click.option("--date", "day", default=None, help="Completion date as dd/MM/yyyy (default: today).")
@click.pass_obj
def done(obj: dict, line_index: int, undo: bool, day: str | None) -> None:
    """Toggle the done marker on the entry at LINE_INDEX (see 'stash show')."""
    from stash.core.cli.common import open_journal, parse_day_option
    from stash.core.exceptions import EntryNotFoundError, JournalWriteError

    journal = open_journal(obj["settings"])
    try:
        journal.set_done(line_index, not undo, parse_day_option(day))
    except EntryNotFoundError as e:
        raise click.ClickException(str(e))
    except JournalWriteError as e:
        raise click.ClickException(str(e))

    click.echo(f"Line {line_index} marked {'not done' if undo else 'done'}.")
