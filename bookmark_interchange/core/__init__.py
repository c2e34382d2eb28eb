"""
Core bookmark interchange modules.

This package contains the data model, the Netscape bookmark file parser,
duplicate classification, the import orchestrator, record stores, and the
HTML/JSON/CSV exporters.
"""

from .data_models import (
    Bookmark,
    DuplicateHandling,
    Folder,
    FormatValidation,
    ImportResult,
    ParseResult,
    Tag,
)
from .database import BookmarkDatabase
from .duplicate_classifier import DuplicateAction, DuplicateClassifier, DuplicateDecision
from .exporters import (
    CSVExporter,
    ExportError,
    HTMLExporter,
    JSONExporter,
    export_bookmarks_to_csv,
    export_bookmarks_to_html,
    export_bookmarks_to_json,
    get_exporter,
)
from .format_validator import validate_bookmark_html
from .import_module import (
    BookmarkImporter,
    ImportOptions,
    import_bookmarks_from_file,
    import_bookmarks_from_html,
)
from .netscape_parser import NetscapeBookmarkParser, parse_netscape_bookmarks
from .record_store import InMemoryRecordStore, RecordStore

__all__ = [
    'Bookmark',
    'Folder',
    'Tag',
    'ParseResult',
    'ImportResult',
    'FormatValidation',
    'DuplicateHandling',
    'validate_bookmark_html',
    'NetscapeBookmarkParser',
    'parse_netscape_bookmarks',
    'DuplicateAction',
    'DuplicateClassifier',
    'DuplicateDecision',
    'BookmarkImporter',
    'ImportOptions',
    'import_bookmarks_from_html',
    'import_bookmarks_from_file',
    'RecordStore',
    'InMemoryRecordStore',
    'BookmarkDatabase',
    'HTMLExporter',
    'JSONExporter',
    'CSVExporter',
    'ExportError',
    'export_bookmarks_to_html',
    'export_bookmarks_to_json',
    'export_bookmarks_to_csv',
    'get_exporter',
]
