"""
Exception hierarchy for the Bookmark Interchange package.

Parsing and importing never raise for bad data; they collect messages in
their result objects instead. The exceptions below cover the places where
failure is surfaced as an exception: configuration loading, reading input
files, record store writes, and export file output.
"""

from typing import Optional


# ============================================================================
# Unified Exception Hierarchy for Bookmark Interchange
# ============================================================================
# Import these exceptions from bookmark_interchange.utils.error_handler
# ============================================================================


class InterchangeError(Exception):
    """Base exception for all bookmark interchange errors."""

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(InterchangeError):
    """Configuration-related errors."""

    pass


# ============================================================================
# Input Errors
# ============================================================================


class BookmarkFileError(InterchangeError):
    """Raised when a bookmark file cannot be read or decoded."""

    pass


# ============================================================================
# Record Store Errors
# ============================================================================


class StoreError(InterchangeError):
    """
    Raised by a record store when a read or write fails.

    Attributes:
        store_name: Name of the store (e.g. "bookmarks", "folders")
        record_id: Identifier of the record involved, if any
    """

    def __init__(
        self,
        message: str,
        store_name: Optional[str] = None,
        record_id: Optional[str] = None,
    ):
        self.message = message
        self.store_name = store_name
        self.record_id = record_id
        super().__init__(message)


class DuplicateRecordError(StoreError):
    """Raised when adding a record whose id already exists."""

    pass


class RecordNotFoundError(StoreError):
    """Raised when a record lookup by id fails."""

    pass


def describe_error(error: BaseException) -> str:
    """
    Render an exception as a short reason string for result error lists.

    Args:
        error: The exception to describe

    Returns:
        The exception message, or "Unknown error" when it has none
    """
    message = str(error).strip()
    return message or "Unknown error"
