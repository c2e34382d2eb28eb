"""
Low-level string escaping shared by the exporters.
"""

import csv
import io
from typing import Iterable, Optional

CSV_LINE_TERMINATOR = "\r\n"


def escape_html(text: str) -> str:
    """
    Escape HTML special characters.

    Covers the five standard entities so that exported text can never open
    a tag or break out of an attribute value.

    Args:
        text: Text to escape

    Returns:
        HTML-escaped text
    """
    if not text:
        return ""

    # Ampersand must go first
    text = text.replace("&", "&amp;")
    text = text.replace("<", "&lt;")
    text = text.replace(">", "&gt;")
    text = text.replace('"', "&quot;")
    text = text.replace("'", "&#39;")

    return text


def join_csv_row(fields: Iterable[Optional[str]]) -> str:
    """
    Join field values into one CSV line, without a line terminator.

    A field is quoted only when it contains a comma, double quote, or line
    break; internal double quotes are doubled. None is written as an empty
    field.

    Args:
        fields: Raw field values

    Returns:
        CSV line
    """
    buffer = io.StringIO()
    # "\r\n" as terminator makes the writer quote fields holding either character
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator=CSV_LINE_TERMINATOR)
    writer.writerow(fields)
    return buffer.getvalue()[: -len(CSV_LINE_TERMINATOR)]


def escape_csv(field: Optional[str]) -> str:
    """
    Quote a single CSV field when it contains a comma, double quote, or
    line break. Fields without special characters are returned unchanged.

    Args:
        field: Raw field value

    Returns:
        CSV-safe field value
    """
    if not field:
        return ""

    return join_csv_row([field])
