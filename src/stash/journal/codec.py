"""Reader and writer for the line-oriented stash journal format.

The file groups entries under day headers, newest day first::

    📅 30/03/2026
        📥 buy milk
        🔔 pay rent ⏰ 01/04/2026 10:00 ✅ 30/03/2026

    📅 29/03/2026
        ❓ why is the build slow

Dates are always ``dd/MM/yyyy`` (and ``dd/MM/yyyy HH:mm`` for reminder
instants) regardless of the machine's locale, so a journal reads the same
everywhere.  Mutations work on raw lines and leave every other line
untouched, which keeps hand-edited files intact.
"""

from __future__ import annotations

from datetime import date, datetime

import regex
from loguru import logger

from stash.core.exceptions import EntryNotFoundError

from .models import (
    DONE_MARKER,
    ENTRY_INDENT,
    HEADER_GLYPH,
    REMINDER_MARKER,
    DayBlock,
    Entry,
    Period,
)

DATE_FORMAT = "%d/%m/%Y"
DATETIME_FORMAT = "%d/%m/%Y %H:%M"

_GRAPHEME_RE = regex.compile(r"\X")
_DAY_SHAPE = regex.compile(r"[0-9]{2}/[0-9]{2}/[0-9]{4}")
_STAMP_SHAPE = regex.compile(r"[0-9]{2}/[0-9]{2}/[0-9]{4} [0-9]{2}:[0-9]{2}")


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


def format_day(value: date) -> str:
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def format_stamp(value: datetime) -> str:
    """Format a due instant as ``dd/MM/yyyy HH:mm`` in local time."""
    if value.tzinfo is not None:
        value = value.astimezone()
    return f"{format_day(value)} {value.hour:02d}:{value.minute:02d}"


def parse_day(text: str) -> date | None:
    """Parse a zero-padded ``dd/MM/yyyy`` day; anything else returns None."""
    text = text.strip()
    if not _DAY_SHAPE.fullmatch(text):
        return None
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        return None


def parse_stamp(text: str) -> datetime | None:
    text = text.strip()
    if not _STAMP_SHAPE.fullmatch(text):
        return None
    try:
        return datetime.strptime(text, DATETIME_FORMAT)
    except ValueError:
        return None


def format_header(day: date) -> str:
    return f"{HEADER_GLYPH} {format_day(day)}"


def format_entry_line(
    icon: str,
    text: str,
    reminder_date: datetime | None = None,
    done_date: date | None = None,
) -> str:
    """Build one indented entry line; ⏰ precedes ✅ and ✅ is always last."""
    line = f"{ENTRY_INDENT}{icon} {text}"
    if reminder_date is not None:
        line += f" {REMINDER_MARKER} {format_stamp(reminder_date)}"
    if done_date is not None:
        line += f" {DONE_MARKER} {format_day(done_date)}"
    return line


# ---------------------------------------------------------------------------
# Suffix handling
# ---------------------------------------------------------------------------


def _split_suffix(text: str, marker: str, parse_value):
    """Split ``<head> <marker> <value>`` at the last *marker* if *value* parses.

    Returns ``(head, value)``; when the suffix is absent or does not parse,
    returns ``(text, None)`` unchanged.
    """
    idx = text.rfind(marker)
    if idx < 0:
        return text, None
    value = parse_value(text[idx + len(marker) :])
    if value is None:
        return text, None
    return text[:idx].rstrip(), value


def _first_grapheme(text: str) -> str:
    match = _GRAPHEME_RE.match(text)
    return match.group(0) if match else ""


def decode_entry(line: str, line_index: int) -> Entry | None:
    """Decode an indented entry line, or return None if nothing usable remains."""
    body = line[len(ENTRY_INDENT) :].strip()
    icon = _first_grapheme(body)
    if not icon:
        return None
    rest = body[len(icon) :].strip()
    rest, done_date = _split_suffix(rest, DONE_MARKER, parse_day)
    rest, reminder_date = _split_suffix(rest, REMINDER_MARKER, parse_stamp)
    text = rest.strip()
    if not text:
        return None
    return Entry(
        line_index=line_index,
        icon=icon,
        text=text,
        done_date=done_date,
        reminder_date=reminder_date,
    )


# ---------------------------------------------------------------------------
# Parse / serialize
# ---------------------------------------------------------------------------


def parse(raw_text: str) -> list[DayBlock]:
    """Parse journal text into day blocks, in file order.

    Malformed headers, orphan lines and entries with no text are skipped;
    a damaged journal still yields everything that can be read.
    """
    blocks: list[DayBlock] = []
    current: DayBlock | None = None

    for index, line in enumerate(raw_text.split("\n")):
        if line.startswith(HEADER_GLYPH):
            if current is not None:
                blocks.append(current)
                current = None
            day = parse_day(line[len(HEADER_GLYPH) :])
            if day is None:
                logger.debug(f"Skipping malformed day header at line {index}: {line!r}")
                continue
            current = DayBlock(date=day)
            continue

        if current is None or not line.startswith(ENTRY_INDENT):
            continue

        entry = decode_entry(line, index)
        if entry is None:
            logger.debug(f"Skipping empty entry at line {index}")
            continue
        current.entries.append(entry)

    if current is not None:
        blocks.append(current)
    return blocks


def serialize(blocks: list[DayBlock]) -> str:
    """Render blocks back to journal text, one blank line between blocks."""
    chunks = []
    for block in blocks:
        lines = [format_header(block.date)]
        lines.extend(
            format_entry_line(entry.icon, entry.text, entry.reminder_date, entry.done_date) for entry in block.entries
        )
        chunks.append("\n".join(lines))
    return "\n\n".join(chunks) + "\n" if chunks else ""


def select_blocks(period: Period, blocks: list[DayBlock]) -> list[DayBlock]:
    """Blocks falling in *period*; ranges come back newest-first."""
    if period.is_single_day:
        return [block for block in blocks if block.date == period.start]
    selected = [block for block in blocks if period.contains(block.date)]
    return sorted(selected, key=lambda block: block.date, reverse=True)


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


def insert_entry(raw_text: str, formatted_line: str, today: date) -> str:
    """Append *formatted_line* to today's block, creating the block at the top if needed.

    A journal that uses CRLF line endings keeps them for the new lines.
    """
    header = format_header(today)
    crlf = "\r\n" in raw_text
    lines = raw_text.split("\n")

    header_idx = None
    if header in raw_text:
        header_idx = next((i for i, line in enumerate(lines) if line.startswith(header)), None)

    if header_idx is None:
        newline = "\r\n" if crlf else "\n"
        separator = newline if raw_text else ""
        return f"{header}{newline}{formatted_line}{newline}{separator}{raw_text}"

    eol = "\r" if crlf else ""
    insert_idx = header_idx + 1
    while insert_idx < len(lines):
        line = lines[insert_idx]
        if not line.strip() or line.startswith(HEADER_GLYPH):
            break
        insert_idx += 1

    if insert_idx < len(lines):
        lines.insert(insert_idx, formatted_line + eol)
    else:
        # last line had no terminator
        lines[-1] += eol
        lines.append(formatted_line)
    return "\n".join(lines)


def toggle_done(line_index: int, completed: bool, day: date, raw_text: str) -> str:
    """Set or clear the ✅ suffix on one entry line.

    Any existing valid ✅ suffix is removed first, so applying the same
    call twice gives the same line.  All other lines are kept byte-for-byte.

    Raises:
        EntryNotFoundError: If *line_index* does not address an entry line.
    """
    lines = raw_text.split("\n")
    if not 0 <= line_index < len(lines):
        raise EntryNotFoundError(f"Line {line_index} is out of range (journal has {len(lines)} lines)")

    line = lines[line_index]
    eol = "\r" if line.endswith("\r") else ""
    core = line[: len(line) - len(eol)]
    if not core.startswith(ENTRY_INDENT) or not core.strip():
        raise EntryNotFoundError(f"Line {line_index} is not an entry line")

    stripped, _ = _split_suffix(core, DONE_MARKER, parse_day)
    if completed:
        stripped = f"{stripped.rstrip()} {DONE_MARKER} {format_day(day)}"

    lines[line_index] = stripped + eol
    return "\n".join(lines)
