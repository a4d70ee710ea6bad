"""Journal stores — the file-backed owner of all journal writes.

``StashJournal`` wraps the codec with a whole-file read-modify-write:
every mutation re-reads the file, applies one change, and atomically
replaces it.  There is no locking; if another process edits the file
between the read and the write, the last writer wins.
"""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Protocol, runtime_checkable

from loguru import logger

from stash.core.exceptions import JournalWriteError
from stash.core.utils.file_io import read_text_or_empty, safe_write

from . import codec
from .models import DayBlock, Period


@runtime_checkable
class JournalStore(Protocol):
    """Protocol for a day-grouped entry journal."""

    def read_blocks(self) -> list[DayBlock]:
        """Parse the whole journal into day blocks, in file order."""
        ...

    def append_entry(
        self,
        icon: str,
        text: str,
        reminder_date: datetime | None = None,
        today: date | None = None,
    ) -> str:
        """Add an entry as the last line of today's block and return the written line."""
        ...

    def set_done(self, line_index: int, completed: bool, day: date | None = None) -> None:
        """Mark the entry at *line_index* done (or not done) as of *day*."""
        ...


class StashJournal:
    """A single UTF-8 text file holding every stash entry.

    Line indexes handed out by :meth:`read_blocks` are only valid until the
    next write; re-read before mutating again.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def __repr__(self) -> str:
        return f"StashJournal(path='{self.path}')"

    def read_text(self) -> str:
        """Raw file content; a missing file reads as empty."""
        return read_text_or_empty(self.path)

    def read_blocks(self) -> list[DayBlock]:
        return codec.parse(self.read_text())

    def select(self, period: Period) -> list[DayBlock]:
        """Blocks in *period* (see :func:`codec.select_blocks`)."""
        return codec.select_blocks(period, self.read_blocks())

    def append_entry(
        self,
        icon: str,
        text: str,
        reminder_date: datetime | None = None,
        today: date | None = None,
    ) -> str:
        """Format and insert one entry line.

        Args:
            icon: Category glyph, e.g. ``EntryIcon.TASK``.
            text: Entry text. Line breaks are folded into spaces.
            reminder_date: Optional due instant, written as a ⏰ suffix.
            today: Day block to append to. Defaults to the local date.

        Returns:
            The line as written (including the indent).

        Raises:
            ValueError: If *text* is blank.
            JournalWriteError: If the file cannot be written.
        """
        clean = " ".join(part.strip() for part in str(text).splitlines()).strip()
        if not clean:
            raise ValueError("Entry text must not be empty")

        line = codec.format_entry_line(str(icon), clean, reminder_date=reminder_date)
        content = codec.insert_entry(self.read_text(), line, today or date.today())
        self._write(content)
        logger.debug(f"Appended entry to {self.path}: {line.strip()!r}")
        return line

    def set_done(self, line_index: int, completed: bool, day: date | None = None) -> None:
        """Toggle the ✅ suffix on one line.

        Raises:
            EntryNotFoundError: If *line_index* does not address an entry line.
            JournalWriteError: If the file cannot be written.
        """
        content = codec.toggle_done(line_index, completed, day or date.today(), self.read_text())
        self._write(content)
        logger.debug(f"Set done={completed} on line {line_index} of {self.path}")

    def _write(self, content: str) -> None:
        try:
            safe_write(self.path, content)
        except OSError as e:
            raise JournalWriteError(f"Could not write journal {self.path}: {e}") from e
