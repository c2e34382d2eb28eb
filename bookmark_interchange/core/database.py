"""
SQLite-Backed Record Storage.

Provides durable storage for folders, bookmarks and tags behind the
``RecordStore`` interface used by the importer, so imports and exports can
run against a local database file.
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Generator, List, Optional, Tuple, Union

from ..utils.error_handler import DuplicateRecordError, RecordNotFoundError, StoreError
from .data_models import Bookmark, Folder, Tag


def _bookmark_to_row(bookmark: Bookmark) -> Dict[str, Any]:
    return {
        "id": bookmark.id,
        "url": bookmark.url,
        "title": bookmark.title,
        "description": bookmark.description,
        "notes": bookmark.notes,
        "folder_id": bookmark.folder_id,
        "tags": json.dumps(bookmark.tags),
        "created_at": bookmark.created_at,
        "updated_at": bookmark.updated_at,
        "favicon_url": bookmark.favicon_url,
        "og_image": bookmark.og_image,
    }


def _bookmark_from_row(row: sqlite3.Row) -> Bookmark:
    return Bookmark(
        id=row["id"],
        url=row["url"],
        title=row["title"],
        description=row["description"],
        notes=row["notes"],
        folder_id=row["folder_id"],
        tags=json.loads(row["tags"]) if row["tags"] else [],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        favicon_url=row["favicon_url"],
        og_image=row["og_image"],
    )


def _folder_to_row(folder: Folder) -> Dict[str, Any]:
    return {
        "id": folder.id,
        "name": folder.name,
        "parent_id": folder.parent_id,
        "created_at": folder.created_at,
    }


def _folder_from_row(row: sqlite3.Row) -> Folder:
    return Folder(
        id=row["id"],
        name=row["name"],
        parent_id=row["parent_id"],
        created_at=row["created_at"],
    )


def _tag_to_row(tag: Tag) -> Dict[str, Any]:
    return {"id": tag.id, "name": tag.name, "color": tag.color}


def _tag_from_row(row: sqlite3.Row) -> Tag:
    return Tag(id=row["id"], name=row["name"], color=row["color"])


class SQLiteRecordStore:
    """
    One table of the bookmark database exposed as a record store.

    Only columns listed in ``indexes`` can be used with ``query_by_index``.
    """

    def __init__(
        self,
        database: "BookmarkDatabase",
        table: str,
        to_row: Callable[[Any], Dict[str, Any]],
        from_row: Callable[[sqlite3.Row], Any],
        indexes: Tuple[str, ...] = (),
    ):
        self.database = database
        self.table = table
        self._to_row = to_row
        self._from_row = from_row
        self.indexes = indexes
        self.logger = logging.getLogger(f"{__name__}.{table}")

    def add(self, record: Any) -> str:
        row = self._to_row(record)
        columns = ", ".join(row)
        placeholders = ", ".join(f":{c}" for c in row)

        try:
            with self.database.connection() as conn:
                conn.execute(
                    f"INSERT INTO {self.table} ({columns}) VALUES ({placeholders})",
                    row,
                )
                conn.commit()
        except sqlite3.IntegrityError as e:
            raise DuplicateRecordError(
                f"Record {record.id} already exists in {self.table}",
                store_name=self.table,
                record_id=record.id,
            ) from e
        except sqlite3.Error as e:
            raise StoreError(
                f"Failed to add record to {self.table}: {e}",
                store_name=self.table,
                record_id=record.id,
            ) from e

        return record.id

    def update(self, record: Any) -> str:
        row = self._to_row(record)
        columns = ", ".join(row)
        placeholders = ", ".join(f":{c}" for c in row)

        try:
            with self.database.connection() as conn:
                conn.execute(
                    f"INSERT OR REPLACE INTO {self.table} ({columns}) "
                    f"VALUES ({placeholders})",
                    row,
                )
                conn.commit()
        except sqlite3.Error as e:
            raise StoreError(
                f"Failed to update record in {self.table}: {e}",
                store_name=self.table,
                record_id=record.id,
            ) from e

        return record.id

    def get(self, record_id: str) -> Optional[Any]:
        rows = self._select(f"SELECT * FROM {self.table} WHERE id = ?", (record_id,))
        return self._from_row(rows[0]) if rows else None

    def get_all(self) -> List[Any]:
        rows = self._select(f"SELECT * FROM {self.table} ORDER BY rowid")
        return [self._from_row(row) for row in rows]

    def delete(self, record_id: str) -> None:
        try:
            with self.database.connection() as conn:
                cursor = conn.execute(
                    f"DELETE FROM {self.table} WHERE id = ?", (record_id,)
                )
                conn.commit()
        except sqlite3.Error as e:
            raise StoreError(
                f"Failed to delete record from {self.table}: {e}",
                store_name=self.table,
                record_id=record_id,
            ) from e

        if cursor.rowcount == 0:
            raise RecordNotFoundError(
                f"Record {record_id} not found in {self.table}",
                store_name=self.table,
                record_id=record_id,
            )

    def query_by_index(self, field_name: str, value: Any) -> List[Any]:
        if field_name not in self.indexes:
            raise StoreError(
                f"No index {field_name!r} on {self.table}", store_name=self.table
            )

        if value is None:
            rows = self._select(
                f"SELECT * FROM {self.table} WHERE {field_name} IS NULL ORDER BY rowid"
            )
        else:
            rows = self._select(
                f"SELECT * FROM {self.table} WHERE {field_name} = ? ORDER BY rowid",
                (value,),
            )
        return [self._from_row(row) for row in rows]

    def count(self) -> int:
        rows = self._select(f"SELECT COUNT(*) AS total FROM {self.table}")
        return rows[0]["total"]

    def _select(self, query: str, params: Tuple = ()) -> List[sqlite3.Row]:
        try:
            with self.database.connection() as conn:
                return conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise StoreError(
                f"Failed to query {self.table}: {e}", store_name=self.table
            ) from e


class BookmarkDatabase:
    """
    SQLite database holding folders, bookmarks and tags.

    Example:
        >>> db = BookmarkDatabase(Path("bookmarks.db"))
        >>> importer = BookmarkImporter(db.folders, db.bookmarks)
        >>> result = importer.import_file(Path("export.html"))
        >>> html = export_bookmarks_to_html(db.bookmarks.get_all(), db.folders.get_all())
    """

    SCHEMA = """
    CREATE TABLE IF NOT EXISTS folders (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        parent_id TEXT,
        created_at INTEGER NOT NULL
    );

    CREATE TABLE IF NOT EXISTS bookmarks (
        id TEXT PRIMARY KEY,
        url TEXT NOT NULL,
        title TEXT NOT NULL,
        description TEXT,
        notes TEXT,
        folder_id TEXT,
        tags TEXT,
        created_at INTEGER NOT NULL,
        updated_at INTEGER NOT NULL,
        favicon_url TEXT,
        og_image TEXT
    );

    CREATE TABLE IF NOT EXISTS tags (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        color TEXT
    );

    -- Indexes for the lookups the application performs
    CREATE INDEX IF NOT EXISTS idx_bookmarks_url ON bookmarks(url);
    CREATE INDEX IF NOT EXISTS idx_bookmarks_folder ON bookmarks(folder_id);
    CREATE INDEX IF NOT EXISTS idx_bookmarks_created ON bookmarks(created_at);
    CREATE INDEX IF NOT EXISTS idx_bookmarks_updated ON bookmarks(updated_at);
    CREATE INDEX IF NOT EXISTS idx_folders_parent ON folders(parent_id);
    CREATE INDEX IF NOT EXISTS idx_folders_name ON folders(name);
    CREATE INDEX IF NOT EXISTS idx_tags_name ON tags(name);
    """

    def __init__(self, db_path: Union[str, Path] = Path("bookmarks.db")):
        """
        Initialize the bookmark database.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.logger = logging.getLogger(__name__)
        self._init_database()

        self.bookmarks = SQLiteRecordStore(
            self,
            "bookmarks",
            _bookmark_to_row,
            _bookmark_from_row,
            indexes=("url", "folder_id", "created_at", "updated_at"),
        )
        self.folders = SQLiteRecordStore(
            self,
            "folders",
            _folder_to_row,
            _folder_from_row,
            indexes=("parent_id", "name"),
        )
        self.tags = SQLiteRecordStore(
            self, "tags", _tag_to_row, _tag_from_row, indexes=("name",)
        )

    def _init_database(self) -> None:
        """Initialize database schema."""
        try:
            if self.db_path.parent and not self.db_path.parent.exists():
                self.db_path.parent.mkdir(parents=True, exist_ok=True)

            with self.connection() as conn:
                conn.executescript(self.SCHEMA)
                conn.commit()
            self.logger.debug(f"Database initialized at {self.db_path}")

        except (sqlite3.Error, OSError) as e:
            self.logger.error(f"Failed to initialize database: {e}")
            raise StoreError(f"Failed to initialize database {self.db_path}: {e}") from e

    @contextmanager
    def connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get database connection."""
        conn = None
        try:
            conn = sqlite3.connect(str(self.db_path))
            conn.row_factory = sqlite3.Row
            yield conn
        finally:
            if conn:
                conn.close()

    def clear_all(self) -> None:
        """Delete every folder, bookmark and tag."""
        try:
            with self.connection() as conn:
                conn.execute("DELETE FROM bookmarks")
                conn.execute("DELETE FROM folders")
                conn.execute("DELETE FROM tags")
                conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to clear database: {e}") from e

        self.logger.info(f"Cleared all records from {self.db_path}")

    def get_statistics(self) -> Dict[str, int]:
        """Record counts per table."""
        return {
            "bookmarks": self.bookmarks.count(),
            "folders": self.folders.count(),
            "tags": self.tags.count(),
        }
