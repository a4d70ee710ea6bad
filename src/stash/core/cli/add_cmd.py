"""stash add — append an entry to today's block."""

from __future__ import annotations

import click

from stash.journal.models import EntryIcon


@click.command()
@click.argument("text", nargs=-1, required=True)
@click.option(
    "-i",
    "--icon",
    type=click.Choice([icon.label for icon in EntryIcon]),
    default=EntryIcon.TASK.label,
    show_default=True,
    help="Entry category. 'reminder' extracts a due date with the configured AI provider.",
)
@click.pass_obj
def add(obj: dict, text: tuple[str, ...], icon: str) -> None:
    """Add TEXT to today's block in the journal."""
    from stash.core.cli.common import load_secrets, open_journal
    from stash.core.exceptions import JournalWriteError
    from stash.journal.codec import format_stamp
    from stash.reminders.models import SaveStatus
    from stash.reminders.workflow import save_entry_sync

    settings = obj["settings"]
    journal = open_journal(settings)
    entry_icon = EntryIcon.from_label(icon)
    secrets = load_secrets(settings) if entry_icon is EntryIcon.REMINDER else None

    try:
        outcome = save_entry_sync(journal, entry_icon, " ".join(text), settings, secrets)
    except JournalWriteError as e:
        raise click.ClickException(str(e))

    if outcome.status is SaveStatus.SKIPPED:
        click.echo("Nothing to save.")
        return

    click.echo(outcome.line.strip())
    if entry_icon is EntryIcon.REMINDER:
        if outcome.due_date is not None:
            click.echo(f"Due {format_stamp(outcome.due_date)}")
        elif not outcome.extracted:
            click.echo("No due date extracted; saved as typed.")
