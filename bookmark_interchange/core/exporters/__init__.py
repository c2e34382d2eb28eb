"""
Bookmark exporters: Netscape HTML, JSON and CSV.
"""

from typing import Dict, Type

from .base import BookmarkExporter, ExportError, ExportResult
from .csv_exporter import CSVExporter, export_bookmarks_to_csv
from .html_exporter import HTMLExporter, export_bookmarks_to_html
from .json_exporter import JSONExporter, export_bookmarks_to_json

__all__ = [
    "BookmarkExporter",
    "ExportResult",
    "ExportError",
    "HTMLExporter",
    "JSONExporter",
    "CSVExporter",
    "export_bookmarks_to_html",
    "export_bookmarks_to_json",
    "export_bookmarks_to_csv",
    "EXPORTERS",
    "get_exporter",
]


# "netscape" is accepted as an alias for the HTML dialect
EXPORTERS: Dict[str, Type[BookmarkExporter]] = {
    "html": HTMLExporter,
    "netscape": HTMLExporter,
    "json": JSONExporter,
    "csv": CSVExporter,
}


def get_exporter(format_name: str) -> Type[BookmarkExporter]:
    """
    Look up an exporter class by format name (case-insensitive).

    Raises:
        ValueError: If no exporter handles the format
    """
    try:
        return EXPORTERS[format_name.lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported export format: {format_name}. "
            f"Supported formats: csv, html, json"
        ) from None
