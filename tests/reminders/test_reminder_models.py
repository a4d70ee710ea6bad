"""Tests for stash.reminders.models."""

from dataclasses import FrozenInstanceError

import pytest

from stash.reminders.models import ParsedReminder, SaveOutcome, SaveStatus


def test_parsed_reminder_frozen():
    parsed = ParsedReminder(title="x")
    assert parsed.due_date is None
    with pytest.raises(FrozenInstanceError):
        parsed.title = "y"


def test_outcome_ok():
    assert SaveOutcome(status=SaveStatus.SAVED).ok
    assert SaveOutcome(status=SaveStatus.SKIPPED).ok
    assert not SaveOutcome(status=SaveStatus.REMINDER_FAILED).ok


def test_status_values():
    assert SaveStatus("reminder_created_no_date") is SaveStatus.REMINDER_CREATED_NO_DATE
