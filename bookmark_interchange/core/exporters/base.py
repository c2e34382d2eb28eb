"""
Shared exporter machinery.

Every exporter turns a bookmark list and a folder list into one document
string. Rendering is kept free of I/O; writing the document to disk, and
the folder-path lookup used by the flat formats, live on the base class.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

from ...utils.error_handler import InterchangeError
from ..data_models import Bookmark, Folder


@dataclass
class ExportResult:
    """
    Summary of a document written to disk.

    Attributes:
        path: File that was written
        bookmark_count: Bookmarks passed to the exporter
        folder_count: Folders passed to the exporter
        format_name: Exporter format label ("HTML", "JSON", "CSV")
        bytes_written: Size of the file after writing
    """

    path: Path
    bookmark_count: int
    folder_count: int
    format_name: str
    bytes_written: int = 0


class ExportError(InterchangeError):
    """
    Raised when a bookmark set cannot be rendered or written.

    Attributes:
        format_name: Exporter format label, if known
        path: Output file, if the failure happened while writing
        cause: Underlying exception, if any
    """

    def __init__(
        self,
        message: str,
        format_name: Optional[str] = None,
        path: Optional[Path] = None,
        cause: Optional[BaseException] = None,
    ):
        self.message = message
        self.format_name = format_name
        self.path = path
        self.cause = cause

        text = f"{format_name} export: {message}" if format_name else message
        if cause is not None:
            text += f" ({type(cause).__name__}: {cause})"
        super().__init__(text)


class BookmarkExporter(ABC):
    """
    Base class for the HTML, JSON and CSV exporters.

    Subclasses provide ``render()``, ``format_name`` and ``file_extension``.

    Example:
        >>> text = CSVExporter().render(bookmarks, folders)
        >>> CSVExporter().export(bookmarks, folders, "bookmarks.csv")
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{type(self).__name__}")

    @abstractmethod
    def render(self, bookmarks: List[Bookmark], folders: List[Folder]) -> str:
        """
        Serialize bookmarks and folders to one document.

        Raises:
            ExportError: If the folder graph cannot be serialized
        """

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Label used in log lines and error messages."""

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Conventional extension, without the dot."""

    def export(
        self,
        bookmarks: List[Bookmark],
        folders: List[Folder],
        output_path: Union[str, Path],
    ) -> ExportResult:
        """
        Render and write the document as UTF-8.

        Line endings are written exactly as rendered. Missing parent
        directories are created.

        Args:
            bookmarks: Bookmarks to export
            folders: Folders the bookmarks reference
            output_path: Destination file

        Returns:
            ExportResult describing the written file

        Raises:
            ExportError: If rendering fails or the file cannot be written
        """
        path = Path(output_path)
        document = self.render(bookmarks, folders)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(document)
        except OSError as e:
            raise ExportError(
                f"cannot write {path}", format_name=self.format_name, path=path, cause=e
            ) from e

        self.logger.info(
            f"Wrote {len(bookmarks)} bookmarks and {len(folders)} folders to {path}"
        )

        return ExportResult(
            path=path,
            bookmark_count=len(bookmarks),
            folder_count=len(folders),
            format_name=self.format_name,
            bytes_written=path.stat().st_size,
        )

    def folder_path(self, folder_id: Optional[str], folder_map: Dict[str, Folder]) -> List[str]:
        """
        Names of the folders from the root down to ``folder_id``.

        An id that does not resolve ends the walk, so a dangling reference
        yields an empty path.

        Args:
            folder_id: Folder to resolve
            folder_map: All folders keyed by id

        Returns:
            Folder names, outermost first

        Raises:
            ExportError: If the parent chain loops back on itself
        """
        names: List[str] = []
        seen = set()
        current_id = folder_id

        while current_id:
            folder = folder_map.get(current_id)
            if folder is None:
                break
            if current_id in seen:
                raise ExportError(
                    f"Folder hierarchy contains a cycle at folder {folder.name!r}",
                    format_name=self.format_name,
                )
            seen.add(current_id)
            names.append(folder.name)
            current_id = folder.parent_id

        names.reverse()
        return names
