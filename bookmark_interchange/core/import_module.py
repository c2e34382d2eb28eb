"""
Bookmark import module.

This module provides the high-level API for importing Netscape bookmark files
into a pair of record stores (folders and bookmarks). Import is best-effort:
each folder or bookmark that fails to persist is recorded in the result and
the run carries on.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Union

from ..utils.error_handler import BookmarkFileError, describe_error
from .data_models import DuplicateHandling, ImportResult
from .duplicate_classifier import (
    DuplicateAction,
    DuplicateClassifier,
    coerce_duplicate_handling,
)
from .format_validator import validate_bookmark_html
from .netscape_parser import BookmarkSource, NetscapeBookmarkParser, read_bookmark_source
from .record_store import RecordStore

ProgressCallback = Callable[[int, int], None]

NOTHING_TO_IMPORT_ERROR = "No bookmarks or folders found in file"


@dataclass
class ImportOptions:
    """Configuration options for bookmark import."""

    duplicate_handling: Union[DuplicateHandling, str] = DuplicateHandling.SKIP
    on_progress: Optional[ProgressCallback] = None  # (current, total)

    def __post_init__(self):
        self.duplicate_handling = coerce_duplicate_handling(self.duplicate_handling)


class BookmarkImporter:
    """
    Imports Netscape bookmark files into record stores.

    Folders are written before bookmarks so that every ``folder_id`` a
    bookmark carries already exists in the target store. Writes are issued
    one at a time, in parse order.
    """

    def __init__(
        self,
        folder_store: RecordStore,
        bookmark_store: RecordStore,
        options: Optional[ImportOptions] = None,
        parser: Optional[NetscapeBookmarkParser] = None,
    ):
        """
        Initialize the bookmark importer.

        Args:
            folder_store: Store receiving parsed folders
            bookmark_store: Store receiving parsed bookmarks and holding the
                records checked for duplicates
            options: Default import options
            parser: Parser to use (a default parser if omitted)
        """
        self.folder_store = folder_store
        self.bookmark_store = bookmark_store
        self.options = options or ImportOptions()
        self.parser = parser or NetscapeBookmarkParser()
        self.logger = logging.getLogger(__name__)

    def import_html(
        self, html: str, options: Optional[ImportOptions] = None
    ) -> ImportResult:
        """
        Import bookmarks from HTML with folder structure preservation.

        Args:
            html: The HTML content to import
            options: Override default import options

        Returns:
            ImportResult with counts and errors
        """
        import_options = options or self.options
        start_time = time.time()
        result = ImportResult()

        validation = validate_bookmark_html(html)
        if not validation.is_valid:
            self.logger.warning(f"Rejected bookmark file: {validation.error}")
            result.errors.append(validation.error or "Invalid bookmark file")
            return result

        parse_result = self.parser.parse(html)
        result.errors.extend(parse_result.errors)

        if parse_result.is_empty:
            result.errors.append(NOTHING_TO_IMPORT_ERROR)
            return result

        total = len(parse_result.folders) + len(parse_result.bookmarks)
        progress = import_options.on_progress

        self.logger.info(
            f"Importing {len(parse_result.folders)} folders and "
            f"{len(parse_result.bookmarks)} bookmarks "
            f"(duplicates: {import_options.duplicate_handling.value})"
        )

        # Phase 1: folders, so bookmark folder ids resolve
        for index, folder in enumerate(parse_result.folders, start=1):
            try:
                self.folder_store.add(folder)
                result.folders_imported += 1
            except Exception as e:
                self.logger.warning(f"Failed to import folder {folder.name!r}: {e}")
                result.errors.append(
                    f'Failed to import folder "{folder.name}": {describe_error(e)}'
                )

            if progress:
                progress(index, total)

        # Phase 2: bookmarks, checked against the pre-import snapshot
        try:
            classifier = DuplicateClassifier(self.bookmark_store.get_all())
        except Exception as e:
            self.logger.error(f"Failed to read existing bookmarks: {e}")
            result.errors.append(f"Failed to read existing bookmarks: {describe_error(e)}")
            return result

        folder_count = len(parse_result.folders)
        for index, bookmark in enumerate(parse_result.bookmarks, start=1):
            decision = classifier.classify(bookmark, import_options.duplicate_handling)

            try:
                if decision.action is DuplicateAction.SKIP:
                    result.bookmarks_skipped += 1
                elif decision.action is DuplicateAction.REPLACE:
                    replacement = decision.replacement()
                    if replacement is not None:
                        self.bookmark_store.update(replacement)
                        result.bookmarks_replaced += 1
                else:
                    # ADD and KEEP both write a new record
                    self.bookmark_store.add(bookmark)
                    result.bookmarks_imported += 1
            except Exception as e:
                self.logger.warning(f"Failed to import bookmark {bookmark.title!r}: {e}")
                result.errors.append(
                    f'Failed to import bookmark "{bookmark.title}": {describe_error(e)}'
                )

            if progress:
                progress(folder_count + index, total)

        self.logger.info(
            f"Import completed in {time.time() - start_time:.2f}s: {result}"
        )
        return result

    def import_file(
        self, source: BookmarkSource, options: Optional[ImportOptions] = None
    ) -> ImportResult:
        """
        Import bookmarks from a file path or open file handle.

        Args:
            source: Path, text handle, or binary handle
            options: Override default import options

        Returns:
            Import result with counts and errors
        """
        try:
            html = read_bookmark_source(source)
        except BookmarkFileError as e:
            self.logger.error(f"Failed to read bookmark file: {e}")
            return ImportResult(errors=[f"Failed to read file: {describe_error(e)}"])

        return self.import_html(html, options)


def import_bookmarks_from_html(
    html: str,
    folder_store: RecordStore,
    bookmark_store: RecordStore,
    duplicate_handling: Union[DuplicateHandling, str] = DuplicateHandling.SKIP,
    on_progress: Optional[ProgressCallback] = None,
) -> ImportResult:
    """
    Import bookmarks from HTML into the given stores.

    Args:
        html: The HTML content to import
        folder_store: Store receiving folders
        bookmark_store: Store receiving bookmarks
        duplicate_handling: 'skip', 'replace' or 'keep'
        on_progress: Optional callback receiving (current, total)

    Returns:
        Import result with counts and errors
    """
    options = ImportOptions(duplicate_handling=duplicate_handling, on_progress=on_progress)
    return BookmarkImporter(folder_store, bookmark_store, options).import_html(html)


def import_bookmarks_from_file(
    source: BookmarkSource,
    folder_store: RecordStore,
    bookmark_store: RecordStore,
    duplicate_handling: Union[DuplicateHandling, str] = DuplicateHandling.SKIP,
    on_progress: Optional[ProgressCallback] = None,
) -> ImportResult:
    """
    Import bookmarks from a file path or handle into the given stores.

    Returns:
        Import result with counts and errors
    """
    options = ImportOptions(duplicate_handling=duplicate_handling, on_progress=on_progress)
    return BookmarkImporter(folder_store, bookmark_store, options).import_file(source)
