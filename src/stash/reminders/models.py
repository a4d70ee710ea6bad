"""Reminder extraction result and save-workflow outcome types."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


@dataclass(frozen=True)
class ParsedReminder:
    """Title and optional due instant recovered from free text."""

    title: str
    due_date: datetime | None = None


class SaveStatus(StrEnum):
    SKIPPED = "skipped"
    SAVED = "saved"
    REMINDER_CREATED = "reminder_created"
    REMINDER_CREATED_WITH_DATE = "reminder_created_with_date"
    REMINDER_CREATED_NO_DATE = "reminder_created_no_date"
    REMINDER_FAILED = "reminder_failed"


@dataclass(frozen=True)
class SaveOutcome:
    """What happened to one saved entry.

    Attributes:
        status: Overall result, see :class:`SaveStatus`.
        line: The journal line written, or None when nothing was written.
        title: Text written for the entry (the extracted title for reminders).
        due_date: Extracted due instant, if any.
        extracted: Whether the AI provider returned usable data.
    """

    status: SaveStatus
    line: str | None = None
    title: str = ""
    due_date: datetime | None = None
    extracted: bool = False

    @property
    def ok(self) -> bool:
        return self.status is not SaveStatus.REMINDER_FAILED
