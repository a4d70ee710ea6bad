"""Save workflow: write the entry first, then enrich reminders best-effort.

Plain entries go straight to the journal.  Reminder entries are first
run through extraction, written with the extracted title (and ⏰ due
instant, when one came back), and only then handed to the external
reminder collaborator.  A collaborator failure never rolls back the
journal line.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Protocol, runtime_checkable

from loguru import logger

from stash.core.config_schema import StashSettings
from stash.core.secrets import SecretProvider
from stash.journal.models import EntryIcon
from stash.journal.store import JournalStore

from .extractor import extract_reminder
from .models import SaveOutcome, SaveStatus
from .sync import blocking


@runtime_checkable
class ReminderSink(Protocol):
    """External reminder/calendar integration.

    Implementations may block (e.g. waiting on a permission prompt); the
    workflow bounds each call with ``settings.reminders.timeout``.
    """

    def create_reminder(self, title: str, due_date: datetime | None) -> bool:
        """Create a reminder; return True on success."""
        ...


async def create_reminder_with_timeout(
    sink: ReminderSink,
    title: str,
    due_date: datetime | None,
    timeout: float,
) -> bool:
    """Run ``sink.create_reminder`` on a worker thread, giving up after *timeout* seconds."""
    try:
        return bool(await asyncio.wait_for(asyncio.to_thread(sink.create_reminder, title, due_date), timeout=timeout))
    except TimeoutError:
        logger.warning(f"Reminder collaborator did not answer within {timeout}s")
        return False
    except Exception as e:
        logger.warning(f"Reminder collaborator failed: {e}")
        return False


async def save_entry(
    journal: JournalStore,
    icon: EntryIcon | str,
    text: str,
    settings: StashSettings,
    secrets: SecretProvider,
    sink: ReminderSink | None = None,
    *,
    now: datetime | None = None,
) -> SaveOutcome:
    """Save one stash entry.

    Args:
        journal: Where the entry line is written.
        icon: Category of the entry; :attr:`EntryIcon.REMINDER` triggers extraction.
        text: What the user typed.
        settings: Configuration snapshot for this call.
        secrets: API key lookup for the extraction provider.
        sink: Optional reminder collaborator; skipped when None.
        now: Reference instant. Defaults to the current local time.

    Returns:
        A :class:`SaveOutcome` describing what was written and created.

    Raises:
        JournalWriteError: If the journal cannot be written.
    """
    text = text.strip()
    if not text:
        return SaveOutcome(status=SaveStatus.SKIPPED)

    now = now or datetime.now().astimezone()
    today = now.date()

    if str(icon) != EntryIcon.REMINDER.value:
        line = journal.append_entry(str(icon), text, today=today)
        return SaveOutcome(status=SaveStatus.SAVED, line=line, title=text)

    parsed = await extract_reminder(
        text,
        settings.provider_config(),
        secrets,
        language=settings.language_tag(),
        now=now,
        timezone_name=settings.ai.timezone,
    )
    title = parsed.title if parsed else text
    due_date = parsed.due_date if parsed else None

    line = journal.append_entry(EntryIcon.REMINDER.value, title, reminder_date=due_date, today=today)

    if sink is None:
        return SaveOutcome(
            status=SaveStatus.SAVED, line=line, title=title, due_date=due_date, extracted=parsed is not None
        )

    created = await create_reminder_with_timeout(sink, title, due_date, settings.reminders.timeout)
    if not created:
        status = SaveStatus.REMINDER_FAILED
    elif due_date is not None:
        status = SaveStatus.REMINDER_CREATED_WITH_DATE
    elif parsed is not None:
        status = SaveStatus.REMINDER_CREATED
    else:
        status = SaveStatus.REMINDER_CREATED_NO_DATE

    logger.info(f"Saved reminder {title!r} ({status.value})")
    return SaveOutcome(status=status, line=line, title=title, due_date=due_date, extracted=parsed is not None)


save_entry_sync = blocking(save_entry)
