"""
Quick structural check for Netscape bookmark files.

This is a cheap sniff run before the full parse, not a grammar check: any
text that carries the Netscape doctype or an ``<html`` tag is let through
and the parser deals with whatever is inside.
"""

import re

from .data_models import FormatValidation

DOCTYPE_PATTERN = re.compile(r"<!DOCTYPE\s+NETSCAPE-Bookmark-file-1>", re.IGNORECASE)
HTML_TAG_PATTERN = re.compile(r"<html", re.IGNORECASE)

EMPTY_FILE_ERROR = "File is empty"
NOT_BOOKMARK_FILE_ERROR = "File does not appear to be a valid bookmark HTML file"


def validate_bookmark_html(content: str) -> FormatValidation:
    """
    Validate that a string looks like a Netscape bookmark HTML file.

    Args:
        content: Raw file content

    Returns:
        FormatValidation with is_valid and, when invalid, an error message
    """
    if not content or not content.strip():
        return FormatValidation(is_valid=False, error=EMPTY_FILE_ERROR)

    has_doctype = DOCTYPE_PATTERN.search(content) is not None
    has_html = HTML_TAG_PATTERN.search(content) is not None

    if not has_doctype and not has_html:
        return FormatValidation(is_valid=False, error=NOT_BOOKMARK_FILE_ERROR)

    return FormatValidation(is_valid=True)
