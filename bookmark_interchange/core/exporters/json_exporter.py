"""
JSON bookmark exporter.

Exports bookmarks and folders to JSON with every field preserved. This is
the only export format that keeps tags, notes, favicon and Open Graph image
URLs for every record.
"""

import json
from typing import Any, Callable, Dict, List, Optional

from ..data_models import Bookmark, Folder, current_timestamp_ms
from .base import BookmarkExporter

EXPORT_FORMAT_VERSION = "1.0"


class JSONExporter(BookmarkExporter):
    """
    Export bookmarks to JSON format.

    Output is the envelope ``{version, exportedAt, bookmarks, folders}``,
    pretty-printed so exports diff cleanly.

    Example:
        >>> exporter = JSONExporter(indent=2)
        >>> text = exporter.render(bookmarks, folders)
    """

    def __init__(
        self,
        indent: Optional[int] = 2,
        ensure_ascii: bool = False,
        clock: Optional[Callable[[], int]] = None,
    ):
        """
        Initialize the JSON exporter.

        Args:
            indent: Number of spaces for indentation (None for one line)
            ensure_ascii: Whether to escape non-ASCII characters
            clock: Callable returning "now" in epoch milliseconds
        """
        super().__init__()
        self.indent = indent
        self.ensure_ascii = ensure_ascii
        self.clock = clock or current_timestamp_ms

    @property
    def format_name(self) -> str:
        return "JSON"

    @property
    def file_extension(self) -> str:
        return "json"

    def render(self, bookmarks: List[Bookmark], folders: List[Folder]) -> str:
        return json.dumps(
            self._build_export_data(bookmarks, folders),
            indent=self.indent,
            ensure_ascii=self.ensure_ascii,
        )

    def _build_export_data(
        self, bookmarks: List[Bookmark], folders: List[Folder]
    ) -> Dict[str, Any]:
        """
        Build the export data structure.

        Args:
            bookmarks: List of bookmarks
            folders: List of folders

        Returns:
            Dictionary with export data
        """
        return {
            "version": EXPORT_FORMAT_VERSION,
            "exportedAt": self.clock(),
            "bookmarks": [b.to_dict() for b in bookmarks],
            "folders": [f.to_dict() for f in folders],
        }


def export_bookmarks_to_json(bookmarks: List[Bookmark], folders: List[Folder]) -> str:
    """
    Export bookmarks to JSON with full data including tags, folders, and metadata.

    Args:
        bookmarks: Bookmarks to export
        folders: Folders to export

    Returns:
        JSON string with complete bookmark data
    """
    return JSONExporter().render(bookmarks, folders)
