"""
Netscape HTML bookmark exporter.

Generates bookmark files in the Netscape-Bookmark-file-1 format that every
major browser imports, and that ``NetscapeBookmarkParser`` reads back.
"""

from collections import defaultdict
from typing import Dict, List, Optional, Set

from ...utils.escaping import escape_html
from ..data_models import Bookmark, Folder, ms_to_seconds
from ..netscape_parser import NOTES_PREFIX
from .base import BookmarkExporter, ExportError

INDENT = "    "


class HTMLExporter(BookmarkExporter):
    """
    Export bookmarks to Netscape bookmark HTML.

    At every level the folder's bookmarks are written first, then its child
    folders as ``<H3>`` headings each followed by a nested ``<DL>``. With
    ``include_folders=False`` all bookmarks are written flat at the root.

    Example:
        >>> exporter = HTMLExporter(title="My Bookmarks")
        >>> html = exporter.render(bookmarks, folders)
    """

    def __init__(self, title: str = "Bookmarks", include_folders: bool = True):
        """
        Initialize the HTML exporter.

        Args:
            title: Document title and top-level heading
            include_folders: Whether to reproduce the folder hierarchy
        """
        super().__init__()
        self.title = title
        self.include_folders = include_folders

    @property
    def format_name(self) -> str:
        return "HTML"

    @property
    def file_extension(self) -> str:
        return "html"

    def render(self, bookmarks: List[Bookmark], folders: List[Folder]) -> str:
        """
        Generate the complete HTML document.

        Args:
            bookmarks: Bookmarks to export
            folders: Folders to export

        Returns:
            HTML string in Netscape bookmark format

        Raises:
            ExportError: If the folder hierarchy contains a cycle
        """
        html_parts = [
            "<!DOCTYPE NETSCAPE-Bookmark-file-1>",
            "<!-- This is an automatically generated file.",
            "     It will be read and overwritten.",
            "     DO NOT EDIT! -->",
            '<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">',
            f"<TITLE>{escape_html(self.title)}</TITLE>",
            f"<H1>{escape_html(self.title)}</H1>",
            "<DL><p>",
        ]

        if self.include_folders:
            children = self._group_folders(folders)
            by_folder = self._group_bookmarks(bookmarks)
            visited: Set[str] = set()

            html_parts.extend(
                self._render_level(None, INDENT, children, by_folder, visited)
            )
            self._warn_unreachable(bookmarks, folders, visited)
        else:
            for bookmark in bookmarks:
                html_parts.extend(self._render_bookmark(bookmark, INDENT))

        html_parts.append("</DL><p>")

        return "\n".join(html_parts) + "\n"

    def _group_folders(self, folders: List[Folder]) -> Dict[Optional[str], List[Folder]]:
        """Parent id to child folders, in input order."""
        children: Dict[Optional[str], List[Folder]] = defaultdict(list)
        for folder in folders:
            children[folder.parent_id or None].append(folder)
        return children

    def _group_bookmarks(
        self, bookmarks: List[Bookmark]
    ) -> Dict[Optional[str], List[Bookmark]]:
        """Folder id to bookmarks, with root bookmarks under None."""
        by_folder: Dict[Optional[str], List[Bookmark]] = defaultdict(list)
        for bookmark in bookmarks:
            by_folder[bookmark.folder_id or None].append(bookmark)
        return by_folder

    def _render_level(
        self,
        folder_id: Optional[str],
        indent: str,
        children: Dict[Optional[str], List[Folder]],
        by_folder: Dict[Optional[str], List[Bookmark]],
        visited: Set[str],
    ) -> List[str]:
        """
        Render one folder's bookmarks followed by its child folders.

        Args:
            folder_id: Folder being rendered, None for the root
            indent: Indentation for this level
            children: Parent id to child folders
            by_folder: Folder id to bookmarks
            visited: Folder ids already rendered

        Returns:
            List of HTML lines
        """
        html_lines = []

        for bookmark in by_folder.get(folder_id, []):
            html_lines.extend(self._render_bookmark(bookmark, indent))

        for folder in children.get(folder_id, []):
            if folder.id in visited:
                raise ExportError(
                    f"Folder hierarchy contains a cycle at folder {folder.name!r}",
                    format_name=self.format_name,
                )
            visited.add(folder.id)

            timestamp = ms_to_seconds(folder.created_at)
            html_lines.append(
                f'{indent}<DT><H3 ADD_DATE="{timestamp}">{escape_html(folder.name)}</H3>'
            )
            html_lines.append(f"{indent}<DL><p>")
            html_lines.extend(
                self._render_level(folder.id, indent + INDENT, children, by_folder, visited)
            )
            html_lines.append(f"{indent}</DL><p>")

        return html_lines

    def _render_bookmark(self, bookmark: Bookmark, indent: str) -> List[str]:
        """
        Generate HTML for a single bookmark.

        Args:
            bookmark: Bookmark to generate HTML for
            indent: Indentation for this level

        Returns:
            The anchor line plus optional description and notes lines
        """
        attrs = [
            f'HREF="{escape_html(bookmark.url)}"',
            f'ADD_DATE="{ms_to_seconds(bookmark.created_at)}"',
        ]
        if bookmark.favicon_url:
            attrs.append(f'ICON="{escape_html(bookmark.favicon_url)}"')

        lines = [f"{indent}<DT><A {' '.join(attrs)}>{escape_html(bookmark.title)}</A>"]

        if bookmark.description:
            lines.append(f"{indent}<DD>{escape_html(bookmark.description)}")
        if bookmark.notes:
            lines.append(f"{indent}<DD>{NOTES_PREFIX}{escape_html(bookmark.notes)}")

        return lines

    def _warn_unreachable(
        self, bookmarks: List[Bookmark], folders: List[Folder], visited: Set[str]
    ) -> None:
        """Log folders and bookmarks left out because their parent is unknown."""
        orphan_folders = [f for f in folders if f.id not in visited]
        orphan_bookmarks = [
            b for b in bookmarks if b.folder_id and b.folder_id not in visited
        ]

        if orphan_folders or orphan_bookmarks:
            self.logger.warning(
                f"{len(orphan_folders)} folders and {len(orphan_bookmarks)} bookmarks "
                f"are not reachable from the root and were not exported"
            )


def export_bookmarks_to_html(
    bookmarks: List[Bookmark],
    folders: List[Folder],
    title: str = "Bookmarks",
    include_folders: bool = True,
) -> str:
    """
    Export bookmarks to Netscape bookmark HTML.

    Args:
        bookmarks: Bookmarks to export
        folders: Folders to export
        title: Title for the bookmark file
        include_folders: Include folder structure

    Returns:
        HTML string in Netscape bookmark format
    """
    return HTMLExporter(title=title, include_folders=include_folders).render(
        bookmarks, folders
    )
