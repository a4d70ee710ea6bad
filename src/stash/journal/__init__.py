"""Stash journal: a single text file of day-grouped entries.

Provides the entry/day-block models, the line-format codec, and the
file-backed store that performs whole-file read-modify-write mutations.
"""

from .codec import format_entry_line, insert_entry, parse, select_blocks, serialize, toggle_done
from .models import DayBlock, Entry, EntryIcon, Period
from .store import JournalStore, StashJournal

__all__ = [
    "DayBlock",
    "Entry",
    "EntryIcon",
    "JournalStore",
    "Period",
    "StashJournal",
    "format_entry_line",
    "insert_entry",
    "parse",
    "select_blocks",
    "serialize",
    "toggle_done",
]
