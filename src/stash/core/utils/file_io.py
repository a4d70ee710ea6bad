"""
File I/O utilities: tolerant reads and atomic whole-file writes.

All functions operate on explicit paths — no implicit directory lookups.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from loguru import logger


def read_text_or_empty(filepath: str | Path, encoding: str = "utf-8") -> str:
    """Return the file's text, or an empty string when it does not exist yet."""
    try:
        with open(filepath, encoding=encoding, newline="") as f:
            return f.read()
    except FileNotFoundError:
        logger.debug(f"{filepath} does not exist yet; treating as empty")
        return ""


def safe_write(filepath: str | Path, content: str, encoding: str = "utf-8") -> None:
    """Atomically replace *filepath* with *content*, creating parent directories as needed.

    The text is written to a temporary file in the same directory and
    renamed over the target, so readers see either the old or the new file.
    """
    target = Path(filepath)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=str(target.parent), prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(content)
        os.replace(tmp_path, target)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
