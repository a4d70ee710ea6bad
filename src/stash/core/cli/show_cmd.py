"""stash show — print journal blocks with their line indexes."""

from __future__ import annotations

from datetime import date

import click


@click.command()
@click.option("--date", "day", default=None, help="Show a single day (dd/MM/yyyy). Defaults to today.")
@click.option("--from", "start", default=None, help="Range start (dd/MM/yyyy), inclusive.")
@click.option("--to", "end", default=None, help="Range end (dd/MM/yyyy), inclusive. Defaults to today.")
@click.option("--all", "show_all", is_flag=True, help="Show every block in the journal.")
@click.pass_obj
def show(obj: dict, day: str | None, start: str | None, end: str | None, show_all: bool) -> None:
    """Show journal entries for a day or a date range."""
    from stash.core.cli.common import open_journal, parse_day_option
    from stash.journal.codec import format_day, format_stamp
    from stash.journal.models import Period

    journal = open_journal(obj["settings"])

    if show_all:
        blocks = journal.read_blocks()
    elif start is not None:
        period = Period.between(parse_day_option(start), parse_day_option(end) or date.today())
        blocks = journal.select(period)
    else:
        blocks = journal.select(Period.day(parse_day_option(day) or date.today()))

    if not blocks:
        click.echo("No entries.")
        return

    for block in blocks:
        click.echo(format_day(block.date))
        for entry in block.entries:
            mark = "x" if entry.is_done else " "
            line = f"  [{mark}] {entry.line_index:>4}  {entry.icon} {entry.text}"
            if entry.reminder_date is not None:
                line += f"  (due {format_stamp(entry.reminder_date)})"
            if entry.done_date is not None:
                line += f"  (done {format_day(entry.done_date)})"
            click.echo(line)
