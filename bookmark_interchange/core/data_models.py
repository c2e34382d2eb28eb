"""
Data models for Bookmark Interchange.

This module defines the normalized folder/bookmark graph that every parser,
importer, and exporter in the package works on, plus the result objects
returned by parsing and importing.

Timestamps are integer epoch milliseconds throughout. Dictionaries produced
by ``to_dict()`` use the camelCase keys of the JSON interchange format.
"""

import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


def current_timestamp_ms() -> int:
    """Return the current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def generate_id() -> str:
    """Return a fresh random identifier for a new record."""
    return str(uuid.uuid4())


def seconds_to_ms(seconds: int) -> int:
    """Convert epoch seconds (the Netscape ADD_DATE unit) to milliseconds."""
    return seconds * 1000


def ms_to_seconds(timestamp_ms: int) -> int:
    """Convert epoch milliseconds to whole epoch seconds, rounding down."""
    return int(timestamp_ms // 1000)


def ms_to_iso(timestamp_ms: int) -> str:
    """
    Format epoch milliseconds as an ISO-8601 UTC string.

    Uses millisecond precision and a trailing ``Z``, e.g.
    ``2024-01-15T10:30:00.000Z``.
    """
    seconds, millis = divmod(int(timestamp_ms), 1000)
    moment = datetime.fromtimestamp(seconds, tz=timezone.utc) + timedelta(milliseconds=millis)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class DuplicateHandling(str, Enum):
    """How an import reconciles a bookmark whose URL already exists."""

    SKIP = "skip"  # Leave the existing record alone
    REPLACE = "replace"  # Overwrite the existing record, keeping its id
    KEEP = "keep"  # Add the new record alongside the existing one


@dataclass
class Tag:
    """Tag applied to bookmarks for flexible categorization."""

    id: str
    name: str
    color: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"id": self.id, "name": self.name}
        if self.color is not None:
            data["color"] = self.color
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tag":
        return cls(id=data["id"], name=data["name"], color=data.get("color"))


@dataclass
class Folder:
    """
    Folder in the bookmark hierarchy.

    Folders form a forest: ``parent_id`` is None for a root folder, otherwise
    the id of the enclosing folder.
    """

    id: str
    name: str
    parent_id: Optional[str] = None
    created_at: int = field(default_factory=current_timestamp_ms)

    @property
    def is_root(self) -> bool:
        return not self.parent_id

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert folder to its interchange dictionary.

        Returns:
            Dictionary with ``id``, ``name``, ``parentId`` and ``createdAt``
        """
        return {
            "id": self.id,
            "name": self.name,
            "parentId": self.parent_id,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Folder":
        """
        Create a folder from an interchange dictionary.

        Args:
            data: Dictionary using the keys produced by ``to_dict()``

        Returns:
            Folder object
        """
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            parent_id=data.get("parentId"),
            created_at=int(data.get("createdAt") or current_timestamp_ms()),
        )


@dataclass
class Bookmark:
    """
    A saved URL with its metadata.

    ``url`` is the natural key used for duplicate detection. ``folder_id`` is
    None for bookmarks at the root level. ``tags`` holds tag identifiers, not
    names.
    """

    id: str
    url: str
    title: str
    description: Optional[str] = None
    notes: Optional[str] = None
    folder_id: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    created_at: int = field(default_factory=current_timestamp_ms)
    updated_at: Optional[int] = None
    favicon_url: Optional[str] = None
    og_image: Optional[str] = None

    def __post_init__(self):
        """Default the update time to the creation time."""
        if self.updated_at is None:
            self.updated_at = self.created_at

    def copy(self, **changes) -> "Bookmark":
        """Create a copy of this bookmark, optionally overriding fields"""
        values = {
            "id": self.id,
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "notes": self.notes,
            "folder_id": self.folder_id,
            "tags": self.tags.copy(),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "favicon_url": self.favicon_url,
            "og_image": self.og_image,
        }
        values.update(changes)
        return Bookmark(**values)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert bookmark to its interchange dictionary.

        Optional text fields that are unset are left out; ``folderId`` is
        always present so root-level bookmarks carry an explicit null.

        Returns:
            Dictionary representation of bookmark
        """
        data: Dict[str, Any] = {
            "id": self.id,
            "url": self.url,
            "title": self.title,
        }
        if self.description is not None:
            data["description"] = self.description
        if self.notes is not None:
            data["notes"] = self.notes
        data["folderId"] = self.folder_id
        data["tags"] = list(self.tags)
        data["createdAt"] = self.created_at
        data["updatedAt"] = self.updated_at
        if self.favicon_url is not None:
            data["faviconUrl"] = self.favicon_url
        if self.og_image is not None:
            data["ogImage"] = self.og_image
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bookmark":
        """
        Create a bookmark from an interchange dictionary.

        Args:
            data: Dictionary using the keys produced by ``to_dict()``

        Returns:
            Bookmark object
        """
        created_at = int(data.get("createdAt") or current_timestamp_ms())
        updated_at = data.get("updatedAt")

        return cls(
            id=data["id"],
            url=data.get("url", ""),
            title=data.get("title", ""),
            description=data.get("description"),
            notes=data.get("notes"),
            folder_id=data.get("folderId"),
            tags=list(data.get("tags") or []),
            created_at=created_at,
            updated_at=int(updated_at) if updated_at is not None else None,
            favicon_url=data.get("faviconUrl"),
            og_image=data.get("ogImage"),
        )


@dataclass
class FormatValidation:
    """Outcome of the quick bookmark-file format check."""

    is_valid: bool
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.is_valid


@dataclass
class ParseResult:
    """
    Container for the output of a bookmark file parse.

    A parse always fills all three fields; malformed entries show up in
    ``errors`` rather than as exceptions.
    """

    bookmarks: List[Bookmark] = field(default_factory=list)
    folders: List[Folder] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.bookmarks and not self.folders

    def __str__(self) -> str:
        return (
            f"ParseResult("
            f"bookmarks={len(self.bookmarks)}, "
            f"folders={len(self.folders)}, "
            f"errors={len(self.errors)})"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bookmarks": [b.to_dict() for b in self.bookmarks],
            "folders": [f.to_dict() for f in self.folders],
            "errors": list(self.errors),
        }


@dataclass
class ImportResult:
    """Running counters and error log for one import run."""

    bookmarks_imported: int = 0
    folders_imported: int = 0
    bookmarks_skipped: int = 0
    bookmarks_replaced: int = 0
    errors: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return (
            f"ImportResult("
            f"bookmarks_imported={self.bookmarks_imported}, "
            f"folders_imported={self.folders_imported}, "
            f"skipped={self.bookmarks_skipped}, "
            f"replaced={self.bookmarks_replaced}, "
            f"errors={len(self.errors)})"
        )

    @property
    def total_processed(self) -> int:
        """Bookmarks that were imported, skipped, or replaced."""
        return self.bookmarks_imported + self.bookmarks_skipped + self.bookmarks_replaced

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bookmarksImported": self.bookmarks_imported,
            "foldersImported": self.folders_imported,
            "bookmarksSkipped": self.bookmarks_skipped,
            "bookmarksReplaced": self.bookmarks_replaced,
            "errors": list(self.errors),
        }
