"""Prompt template for reminder extraction."""

from __future__ import annotations

import os
from datetime import UTC, datetime
from pathlib import Path

SYSTEM_PROMPT = "You extract reminder title and datetime from user text. Return only strict JSON."

PROMPT_TEMPLATE = """Extract reminder intent from user text and return JSON only.

Rules:
- Output ONLY valid JSON with keys: title, datetime_iso8601, confidence.
- title: concise action text without date words.
- datetime_iso8601: RFC3339 date-time with timezone offset when present, or null if unknown.
- confidence: number from 0 to 1.

Context:
- now: {now}
- timezone: {timezone}
- language: {language}

User text:
{text}"""


def local_timezone_name() -> str:
    """IANA name of the local time zone (``Europe/Lisbon``), best effort."""
    tz = os.environ.get("TZ", "").strip().lstrip(":")
    if tz:
        return tz
    localtime = Path("/etc/localtime")
    try:
        target = str(localtime.resolve())
    except OSError:
        target = ""
    if "zoneinfo/" in target:
        return target.split("zoneinfo/", 1)[1]
    return datetime.now().astimezone().tzname() or "UTC"


def format_now(now: datetime) -> str:
    """ISO-8601 instant in UTC, second precision (``2026-03-30T09:15:00Z``)."""
    if now.tzinfo is None:
        now = now.astimezone()
    return now.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def build_prompt(
    text: str,
    *,
    now: datetime | None = None,
    timezone_name: str | None = None,
    language: str = "en-US",
) -> str:
    """Fill the extraction template with the current context and the user's text."""
    return PROMPT_TEMPLATE.format(
        now=format_now(now or datetime.now().astimezone()),
        timezone=timezone_name or local_timezone_name(),
        language=language,
        text=text,
    )
