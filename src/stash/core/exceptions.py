"""
Stash exception hierarchy.

All stash exceptions inherit from StashError, making it easy for callers
to catch library-level errors while still distinguishing specific failure modes.
"""


class StashError(Exception):
    """Base exception class for all stash errors."""


class ConfigurationError(StashError):
    """Raised for configuration errors (missing keys, invalid values)."""


class APIError(StashError):
    """Raised for API communication errors."""


class LLMError(APIError):
    """Raised for LLM provider errors (bad status, unusable response body)."""


class FileIOError(StashError):
    """Raised for file I/O errors."""


class JournalWriteError(FileIOError):
    """Raised when the journal file cannot be rewritten."""


class EntryNotFoundError(StashError, IndexError):
    """Raised when a line index does not address a line in the journal."""

