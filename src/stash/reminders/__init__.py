"""Reminder extraction service and the entry save workflow.

Turns free text such as "call mom tomorrow at 3pm" into a title and an
optional due instant using one of the configured AI providers, and
wires the result into the journal and an external reminder integration.
"""

from .extractor import extract_reminder, extract_reminder_sync, resolve_api_key
from .models import ParsedReminder, SaveOutcome, SaveStatus
from .parser import parse_iso_datetime, parse_json_payload, strip_code_fence
from .prompt import SYSTEM_PROMPT, build_prompt
from .workflow import ReminderSink, create_reminder_with_timeout, save_entry, save_entry_sync

__all__ = [
    "SYSTEM_PROMPT",
    "ParsedReminder",
    "ReminderSink",
    "SaveOutcome",
    "SaveStatus",
    "build_prompt",
    "create_reminder_with_timeout",
    "extract_reminder",
    "extract_reminder_sync",
    "parse_iso_datetime",
    "parse_json_payload",
    "resolve_api_key",
    "save_entry",
    "save_entry_sync",
    "strip_code_fence",
]
