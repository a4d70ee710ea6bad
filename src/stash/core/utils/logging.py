"""
Logging setup for the stash CLI.

Library code only calls ``loguru.logger``; the CLI configures sinks once
from the ``logging`` section of the settings snapshot.
"""

from __future__ import annotations

import sys

from loguru import logger

from stash.core.config_schema import LoggingSettings

CONSOLE_FORMAT = "<level>{level: <8}</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message}"


def setup_logging(settings: LoggingSettings | None = None, *, verbose: bool = False) -> None:
    """
    Replace loguru's sinks with stderr plus the optional log file.

    Args:
        settings: The ``logging`` section of :class:`StashSettings`.
        verbose: Lower both sinks to DEBUG regardless of ``settings.level``.
    """
    settings = settings or LoggingSettings()
    level = "DEBUG" if verbose else settings.level

    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    if settings.file is not None:
        settings.file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(settings.file),
            level=level,
            format=FILE_FORMAT,
            rotation=settings.rotation,
            retention=settings.retention,
            encoding="utf-8",
        )
        logger.debug(f"Logging to {settings.file}")
