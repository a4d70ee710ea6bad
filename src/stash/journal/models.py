"""Core data models for the stash journal.

A journal is a sequence of day blocks; each block holds the entries
written on that day.  These values are transient: they are rebuilt from
the file on every read and thrown away after each write.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum

HEADER_GLYPH = "📅"
DONE_MARKER = "✅"
REMINDER_MARKER = "⏰"
ENTRY_INDENT = "    "


class EntryIcon(StrEnum):
    """Category glyphs an entry line can start with."""

    TASK = "📥"
    QUESTION = "❓"
    GOAL = "🎯"
    REMINDER = "🔔"

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> EntryIcon:
        """Look up an icon by its lowercase name (``"task"``) or by the glyph itself."""
        value = label.strip()
        for icon in cls:
            if value.lower() == icon.label or value == icon.value:
                return icon
        raise ValueError(f"Unknown entry icon: {label!r}")


@dataclass
class Entry:
    """A single line of a day block.

    Attributes:
        line_index: Zero-based line offset in the raw file at parse time.
            Only valid until the next write.
        icon: The leading glyph (one grapheme).
        text: Entry text with the ⏰ and ✅ suffixes removed.
        done_date: Day the entry was marked done, if it was.
        reminder_date: Due instant for reminder entries.
    """

    line_index: int
    icon: str
    text: str
    done_date: date | None = None
    reminder_date: datetime | None = None

    @property
    def is_done(self) -> bool:
        return self.done_date is not None

    @property
    def is_reminder(self) -> bool:
        return self.icon == EntryIcon.REMINDER.value

    def __repr__(self) -> str:
        preview = self.text[:40] + "..." if len(self.text) > 40 else self.text
        return f"Entry(line={self.line_index}, icon='{self.icon}', text='{preview}', done={self.is_done})"


@dataclass
class DayBlock:
    """All entries written under one day header, in file order."""

    date: date
    entries: list[Entry] = field(default_factory=list)


@dataclass(frozen=True)
class Period:
    """A single day (``end`` is None) or an inclusive day range.

    Datetimes are truncated to their calendar day.
    """

    start: date
    end: date | None = None

    def __post_init__(self):
        object.__setattr__(self, "start", _as_day(self.start))
        if self.end is not None:
            object.__setattr__(self, "end", _as_day(self.end))

    @classmethod
    def day(cls, value: date) -> Period:
        return cls(start=value)

    @classmethod
    def between(cls, start: date, end: date) -> Period:
        return cls(start=start, end=end)

    @property
    def is_single_day(self) -> bool:
        return self.end is None

    def contains(self, value: date) -> bool:
        value = _as_day(value)
        if self.end is None:
            return value == self.start
        return self.start <= value <= self.end


def _as_day(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value
