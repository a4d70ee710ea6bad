"""Stash — quick day-grouped notes with AI-assisted reminders."""

__version__ = "0.1.0"
