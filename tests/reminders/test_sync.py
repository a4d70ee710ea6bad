"""Tests for stash.reminders.sync."""

import asyncio
import threading

import pytest

from stash.reminders import extract_reminder_sync, save_entry_sync
from stash.reminders.sync import blocking


async def _double(value, *, delay=0.0):
    """Double *value*."""
    await asyncio.sleep(delay)
    return value * 2, threading.current_thread().name


double_sync = blocking(_double)


def test_runs_without_a_loop():
    result, thread_name = double_sync(21)
    assert result == 42
    assert thread_name == threading.current_thread().name


@pytest.mark.asyncio
async def test_runs_inside_a_running_loop():
    result, thread_name = double_sync(4, delay=0.01)
    assert result == 8
    assert thread_name.startswith("_double-sync")


def test_errors_propagate():
    async def boom():
        raise ValueError("nope")

    with pytest.raises(ValueError, match="nope"):
        blocking(boom)()


def test_names():
    assert double_sync.__name__ == "_double_sync"
    assert save_entry_sync.__name__ == "save_entry_sync"
    assert extract_reminder_sync.__name__ == "extract_reminder_sync"
    assert "save_entry" in save_entry_sync.__doc__
