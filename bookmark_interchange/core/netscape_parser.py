"""
Netscape bookmark file parser module.

This module parses the Netscape bookmark file format (the HTML export shared
by Chrome, Firefox, Edge and Safari) into the normalized folder/bookmark
model. The format encodes its tree implicitly: ``<DT><H3>`` entries open a
folder whose contents are the next ``<DL>`` list, ``<DT><A>`` entries are
bookmarks, and ``<DD>`` entries after an anchor carry its description and
notes. The parser turns that into explicit ``parent_id``/``folder_id`` links
in a single top-down walk.
"""

import logging
from pathlib import Path
from typing import IO, Callable, List, Optional, Tuple, Union

import chardet
from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import Comment, Tag

from ..utils.error_handler import BookmarkFileError, describe_error
from .data_models import (
    Bookmark,
    Folder,
    ParseResult,
    current_timestamp_ms,
    generate_id,
    seconds_to_ms,
)

BookmarkSource = Union[str, Path, IO[str], IO[bytes]]

NOTES_PREFIX = "Notes: "
ENTRY_TAGS = ("dt", "dd", "dl")
ALLOWED_URL_PREFIXES = ("http://", "https://")

DEFAULT_FOLDER_NAME = "Unnamed Folder"
DEFAULT_BOOKMARK_TITLE = "Untitled"

NO_LIST_ERROR = "Invalid bookmark file: No bookmark list found"
INVALID_HTML_ERROR = "Failed to parse HTML: Invalid HTML structure"


def decode_bookmark_bytes(data: bytes) -> str:
    """
    Decode raw bookmark file bytes to text.

    UTF-8 is tried first (most common); other encodings are detected
    with chardet.

    Args:
        data: Raw file content

    Returns:
        Decoded text

    Raises:
        BookmarkFileError: If the content cannot be decoded
    """
    logger = logging.getLogger(__name__)

    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    result = chardet.detect(data[:65536])
    encoding = result.get("encoding")
    confidence = result.get("confidence") or 0.0

    if not encoding:
        raise BookmarkFileError("Unable to detect file encoding")

    logger.debug(f"Detected encoding: {encoding} (confidence: {confidence:.2f})")

    try:
        return data.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise BookmarkFileError(
            f"Unable to decode file as {encoding}: {describe_error(e)}"
        ) from e


def read_bookmark_source(source: BookmarkSource) -> str:
    """
    Read bookmark file text from a path or an open file handle.

    Args:
        source: Filesystem path, text handle, or binary handle

    Returns:
        File content as text

    Raises:
        BookmarkFileError: If the source cannot be read or decoded
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise BookmarkFileError(f"Error reading {path}: {describe_error(e)}") from e
        return decode_bookmark_bytes(data)

    try:
        content = source.read()
    except (OSError, ValueError) as e:
        raise BookmarkFileError(describe_error(e)) from e

    if isinstance(content, bytes):
        return decode_bookmark_bytes(content)
    if isinstance(content, str):
        return content

    raise BookmarkFileError(
        f"Unsupported file content type: {type(content).__name__}"
    )


class NetscapeBookmarkParser:
    """
    Parser for Netscape bookmark HTML files.

    Produces flat bookmark and folder lists linked by parent ids. Bad entries
    are reported in ``ParseResult.errors`` instead of raising, and whatever
    was parsed before an unexpected failure is still returned.
    """

    FOLDER_MARKER = "h3"
    BOOKMARK_MARKER = "a"

    def __init__(
        self,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        """
        Initialize the parser.

        Args:
            id_factory: Callable issuing ids for new records (UUID4 by default)
            clock: Callable returning "now" in epoch milliseconds, used when an
                entry has no ADD_DATE
        """
        self.logger = logging.getLogger(__name__)
        self.id_factory = id_factory or generate_id
        self.clock = clock or current_timestamp_ms

    def parse(self, html: str) -> ParseResult:
        """
        Parse Netscape bookmark HTML.

        Args:
            html: The HTML content of the bookmark file

        Returns:
            ParseResult with bookmarks, folders, and any errors
        """
        result = ParseResult()

        try:
            soup = BeautifulSoup(html, "lxml")
        except ParserRejectedMarkup as e:
            self.logger.error(f"HTML parsing failed: {e}")
            result.errors.append(INVALID_HTML_ERROR)
            return result

        root_list = soup.find("dl")
        if root_list is None:
            result.errors.append(NO_LIST_ERROR)
            return result

        try:
            self._walk_list(root_list, None, result)
        except Exception as e:
            self.logger.exception("Unexpected error while walking bookmark list")
            result.errors.append(
                f"Unexpected error during parsing: {describe_error(e)}"
            )

        self.logger.info(
            f"Parsed {len(result.bookmarks)} bookmarks and "
            f"{len(result.folders)} folders ({len(result.errors)} errors)"
        )
        return result

    def parse_file(self, source: BookmarkSource) -> ParseResult:
        """
        Read and parse a bookmark file.

        Args:
            source: Path or open file handle

        Returns:
            ParseResult; a read failure is reported as its single error
        """
        try:
            html = read_bookmark_source(source)
        except BookmarkFileError as e:
            self.logger.error(f"Error reading bookmark file: {e}")
            return ParseResult(errors=[f"Failed to read file: {describe_error(e)}"])

        return self.parse(html)

    def _walk_list(
        self, list_element: Tag, parent_id: Optional[str], result: ParseResult
    ) -> None:
        """
        Walk one ``<DL>`` list in document order.

        Args:
            list_element: The list to walk
            parent_id: Folder id owning this list, None at the root
            result: ParseResult to append to
        """
        entries = self._list_entries(list_element)
        index = 0

        while index < len(entries):
            entry = entries[index]
            index += 1

            if entry.name != "dt":
                continue

            marker = entry.find(True, recursive=False)
            if marker is None:
                continue

            if marker.name == self.FOLDER_MARKER:
                folder = self._parse_folder(marker, parent_id)
                result.folders.append(folder)

                # Folder descriptions are not kept
                while index < len(entries) and entries[index].name == "dd":
                    index += 1

                if index < len(entries) and entries[index].name == "dl":
                    contents = entries[index]
                    index += 1
                    self._walk_list(contents, folder.id, result)

            elif marker.name == self.BOOKMARK_MARKER:
                bookmark = self._parse_bookmark(marker, parent_id, result)

                annotations = []
                while index < len(entries) and entries[index].name == "dd":
                    annotations.append(entries[index])
                    index += 1

                if bookmark is None:
                    continue

                description, notes = self._collect_annotations(annotations)
                bookmark.description = description
                bookmark.notes = notes
                result.bookmarks.append(bookmark)

    def _list_entries(self, list_element: Tag) -> List[Tag]:
        """
        Entries owned by a list, in document order.

        ``<DT>`` and ``<DD>`` have no end tags in this format, so depending on
        the tree builder a later entry may end up nested inside an earlier
        one, or inside a stray ``<p>``. An entry belongs to the list that is
        its nearest ``<DL>`` ancestor, wherever it sits below it.

        Args:
            list_element: The list element

        Returns:
            ``<DT>``, ``<DD>`` and ``<DL>`` elements of this list
        """
        return [
            element
            for element in list_element.find_all(ENTRY_TAGS)
            if element.find_parent("dl") is list_element
        ]

    def _entry_text(self, element: Tag) -> str:
        """Text of an entry, leaving out any entries nested inside it."""
        parts = []
        for child in element.children:
            if isinstance(child, Tag):
                if child.name not in ENTRY_TAGS:
                    parts.append(self._entry_text(child))
            elif not isinstance(child, Comment):
                parts.append(str(child))
        return "".join(parts)

    def _parse_folder(self, heading: Tag, parent_id: Optional[str]) -> Folder:
        """
        Build a Folder from its ``<H3>`` heading.

        Args:
            heading: The heading element
            parent_id: Enclosing folder id, None at the root

        Returns:
            Folder object
        """
        name = heading.get_text().strip() or DEFAULT_FOLDER_NAME
        created_at = self._parse_timestamp(heading.get("add_date"))

        return Folder(
            id=self.id_factory(),
            name=name,
            parent_id=parent_id,
            created_at=created_at if created_at is not None else self.clock(),
        )

    def _parse_bookmark(
        self, anchor: Tag, folder_id: Optional[str], result: ParseResult
    ) -> Optional[Bookmark]:
        """
        Build a Bookmark from its ``<A>`` element.

        Args:
            anchor: The anchor element
            folder_id: Enclosing folder id, None at the root
            result: ParseResult receiving the error for rejected entries

        Returns:
            Bookmark object, or None when the URL is not http(s)
        """
        url = anchor.get("href") or ""
        title = anchor.get_text().strip() or DEFAULT_BOOKMARK_TITLE

        if not url.startswith(ALLOWED_URL_PREFIXES):
            self.logger.warning(f"Skipping bookmark with invalid URL: {url[:80]!r}")
            result.errors.append(f"Skipped bookmark with invalid URL: {title}")
            return None

        created_at = self._parse_timestamp(anchor.get("add_date"))
        if created_at is None:
            created_at = self.clock()

        return Bookmark(
            id=self.id_factory(),
            url=url,
            title=title,
            folder_id=folder_id,
            tags=[],
            created_at=created_at,
            updated_at=created_at,
            favicon_url=anchor.get("icon") or None,
        )

    def _collect_annotations(
        self, annotations: List[Tag]
    ) -> Tuple[Optional[str], Optional[str]]:
        """
        Read the ``<DD>`` entries attached to a bookmark.

        The first ``<DD>`` without the notes prefix is the description; the
        first one with it (prefix stripped) is the notes. Later matches are
        ignored.

        Args:
            annotations: ``<DD>`` elements in document order

        Returns:
            Tuple of (description, notes)
        """
        description = None
        notes = None

        for annotation in annotations:
            text = self._entry_text(annotation).strip()
            if not text:
                continue

            if text.startswith(NOTES_PREFIX):
                if notes is None:
                    notes = text[len(NOTES_PREFIX):]
            elif description is None:
                description = text

        return description, notes

    def _parse_timestamp(self, value: Optional[str]) -> Optional[int]:
        """
        Parse an ADD_DATE attribute (epoch seconds) to epoch milliseconds.

        Args:
            value: Attribute value

        Returns:
            Epoch milliseconds, or None when absent or malformed
        """
        if value is None or not str(value).strip():
            return None

        try:
            return seconds_to_ms(int(str(value).strip()))
        except ValueError:
            self.logger.warning(f"Invalid timestamp format: {value!r}")
            return None


def parse_netscape_bookmarks(html: str) -> ParseResult:
    """
    Parse Netscape bookmark HTML with a default parser.

    Args:
        html: The HTML content of the bookmark file

    Returns:
        ParseResult with bookmarks, folders, and any errors
    """
    return NetscapeBookmarkParser().parse(html)
