"""
CSV bookmark exporter.

Exports one row per bookmark with its folder rendered as a slash-joined
path. Quoting follows the usual CSV rules: a field is wrapped in double
quotes only when it contains a comma, double quote, or line break.
"""

from typing import Dict, List, Optional

from ...utils.escaping import join_csv_row
from ..data_models import Bookmark, Folder, Tag, ms_to_iso
from .base import BookmarkExporter

CSV_HEADER = ("URL", "Title", "Folder", "Tags", "Description", "Notes", "Created At")


class CSVExporter(BookmarkExporter):
    """
    Export bookmarks to CSV.

    Tags are written as raw tag ids unless a tag list is supplied, in which
    case ids are resolved to tag names.

    Example:
        >>> exporter = CSVExporter(tags=all_tags)
        >>> text = exporter.render(bookmarks, folders)
    """

    def __init__(self, tags: Optional[List[Tag]] = None):
        """
        Initialize the CSV exporter.

        Args:
            tags: Optional tags used to turn tag ids into names
        """
        super().__init__()
        self.tag_names: Dict[str, str] = {t.id: t.name for t in tags or []}

    @property
    def format_name(self) -> str:
        return "CSV"

    @property
    def file_extension(self) -> str:
        return "csv"

    def render(self, bookmarks: List[Bookmark], folders: List[Folder]) -> str:
        folder_map = {folder.id: folder for folder in folders}
        rows = [join_csv_row(CSV_HEADER)]

        for bookmark in bookmarks:
            rows.append(join_csv_row(self._row_fields(bookmark, folder_map)))

        return "\n".join(rows)

    def _row_fields(self, bookmark: Bookmark, folder_map: Dict[str, Folder]) -> List[str]:
        """Unescaped field values for one bookmark, in header order."""
        return [
            bookmark.url,
            bookmark.title,
            "/".join(self.folder_path(bookmark.folder_id, folder_map)),
            ", ".join(self.tag_names.get(tag, tag) for tag in bookmark.tags),
            bookmark.description or "",
            bookmark.notes or "",
            ms_to_iso(bookmark.created_at),
        ]


def export_bookmarks_to_csv(
    bookmarks: List[Bookmark],
    folders: List[Folder],
    tags: Optional[List[Tag]] = None,
) -> str:
    """
    Export bookmarks to CSV.

    Args:
        bookmarks: Bookmarks to export
        folders: Folders used to build each bookmark's folder path
        tags: Optional tags for resolving tag ids to names

    Returns:
        CSV string with a header row and one row per bookmark
    """
    return CSVExporter(tags=tags).render(bookmarks, folders)
