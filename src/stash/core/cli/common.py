"""Shared setup logic for CLI commands."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import click

from stash.core.exceptions import ConfigurationError

STASH_DIR = Path.home() / ".stash"
CONFIG_PATH = STASH_DIR / "config.yaml"


def load_config(config_path: str | None = None):
    """Load config from *config_path*, or ~/.stash/config.yaml when it exists."""
    from stash.core.config import Config

    try:
        return Config(config_file=config_path or str(CONFIG_PATH))
    except ConfigurationError as e:
        raise click.ClickException(str(e))


def setup_cli_logging(config, verbose: bool):
    """Validate the config and configure loguru; returns the settings snapshot."""
    from stash.core.utils.logging import setup_logging

    try:
        settings = config.validated()
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    setup_logging(settings.logging, verbose=verbose)
    return settings


def open_journal(settings):
    from stash.journal.store import StashJournal

    return StashJournal(settings.journal.path)


def load_secrets(settings):
    from stash.core.secrets import build_secrets

    return build_secrets(settings.secrets.keyring_service, settings.secrets.file)


def parse_day_option(value: str | None) -> date | None:
    """Parse a ``dd/MM/yyyy`` option value, raising a usage error if malformed."""
    from stash.journal.codec import parse_day

    if value is None:
        return None
    day = parse_day(value)
    if day is None:
        raise click.BadParameter(f"expected dd/MM/yyyy, got {value!r}")
    return day
