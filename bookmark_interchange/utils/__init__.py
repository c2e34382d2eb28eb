"""
Utility modules for bookmark interchange.

This package contains the exception hierarchy, logging setup, and the
string escaping helpers used by the exporters.
"""

from .error_handler import (
    BookmarkFileError,
    ConfigurationError,
    DuplicateRecordError,
    InterchangeError,
    RecordNotFoundError,
    StoreError,
)
from .escaping import escape_csv, escape_html, join_csv_row
from .logging_setup import setup_logging

__all__ = [
    "InterchangeError",
    "ConfigurationError",
    "BookmarkFileError",
    "StoreError",
    "DuplicateRecordError",
    "RecordNotFoundError",
    "escape_csv",
    "escape_html",
    "join_csv_row",
    "setup_logging",
]
