"""Normalization of the JSON payload a provider returns.

Models wrap JSON in code fences, leave titles blank, or hand back dates
in slightly different RFC3339 shapes.  Everything here degrades field by
field: a bad date drops the date, a blank title falls back to the
user's own text, and only an unreadable payload yields None.
"""

from __future__ import annotations

import json
from datetime import datetime

from loguru import logger

from .models import ParsedReminder

_FENCE = "```"
_RFC3339_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
)


def strip_code_fence(text: str) -> str:
    """Remove fence lines (```` ``` ```` / ```` ```json ````) around a fenced payload."""
    trimmed = text.strip()
    if not trimmed.startswith(_FENCE):
        return trimmed
    lines = [line for line in trimmed.split("\n") if not line.strip().startswith(_FENCE)]
    return "\n".join(lines).strip()


def parse_iso_datetime(value: str) -> datetime | None:
    """Parse an RFC3339 timestamp, trying fractional seconds first.

    A timezone offset (or ``Z``) is required; anything else returns None.
    """
    raw = value.strip()
    for fmt in _RFC3339_FORMATS:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    return None


def parse_json_payload(text: str, fallback_title: str) -> ParsedReminder | None:
    """Turn a provider's text reply into a :class:`ParsedReminder`.

    Args:
        text: Raw text field from the provider response.
        fallback_title: The user's original text, used when ``title`` is
            missing or blank.

    Returns:
        The parsed reminder, or None if *text* is not a JSON object.
    """
    normalized = strip_code_fence(text)
    try:
        parsed = json.loads(normalized)
    except json.JSONDecodeError as e:
        logger.warning(f"Reminder payload is not valid JSON: {e}")
        return None
    if not isinstance(parsed, dict):
        logger.warning(f"Reminder payload is not a JSON object: {type(parsed).__name__}")
        return None

    title = parsed.get("title")
    title = title.strip() if isinstance(title, str) else ""
    chosen_title = title or fallback_title

    due_date = None
    date_text = parsed.get("datetime_iso8601")
    if isinstance(date_text, str) and date_text.strip():
        due_date = parse_iso_datetime(date_text)
        if due_date is None:
            logger.debug(f"Ignoring unparseable datetime_iso8601: {date_text!r}")

    return ParsedReminder(title=chosen_title, due_date=due_date)
