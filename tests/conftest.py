"""
Pytest configuration and shared fixtures for bookmark interchange tests.

This module provides sample Netscape bookmark documents, prebuilt folder and
bookmark records, and record stores shared across test modules.
"""

import itertools
import os
from pathlib import Path
from typing import Callable, List

import pytest

from bookmark_interchange.core.data_models import Bookmark, Folder
from bookmark_interchange.core.record_store import InMemoryRecordStore

# ============================================================================
# Pytest Configuration
# ============================================================================

ENV_VARS = ("BOOKMARK_INTERCHANGE_DB", "BOOKMARK_INTERCHANGE_LOG_LEVEL")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep configuration environment overrides out of every test."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


# ============================================================================
# Sample Documents
# ============================================================================

CHROME_EXPORT_HTML = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<!-- This is an automatically generated file.
     It will be read and overwritten.
     DO NOT EDIT! -->
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks</H1>
<DL><p>
    <DT><H3 ADD_DATE="1609459200" LAST_MODIFIED="1609459200" PERSONAL_TOOLBAR_FOLDER="true">Bookmarks Bar</H3>
    <DL><p>
        <DT><A HREF="https://example.com" ADD_DATE="1609459200">Example Site</A>
        <DT><A HREF="https://python.org" ADD_DATE="1609459260" ICON="data:image/png;base64,AAAA">Python</A>
        <DD>The Python home page
        <DD>Notes: check release notes
    </DL><p>
    <DT><H3 ADD_DATE="1609459300">Programming</H3>
    <DL><p>
        <DT><H3 ADD_DATE="1609459400">JavaScript</H3>
        <DL><p>
            <DT><A HREF="https://developer.mozilla.org" ADD_DATE="1609459500">MDN</A>
        </DL><p>
    </DL><p>
    <DT><A HREF="https://github.com" ADD_DATE="1609459600">GitHub</A>
</DL><p>
"""


@pytest.fixture
def chrome_export_html() -> str:
    """Chrome-style export with nested folders, a description and notes."""
    return CHROME_EXPORT_HTML


@pytest.fixture
def sample_html_file(tmp_path) -> Path:
    """The Chrome-style export written to disk as UTF-8."""
    path = tmp_path / "bookmarks.html"
    path.write_text(CHROME_EXPORT_HTML, encoding="utf-8")
    return path


# ============================================================================
# Records
# ============================================================================


@pytest.fixture
def sequential_ids() -> Callable[[], str]:
    """Deterministic id factory issuing id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def fixed_clock() -> Callable[[], int]:
    """Clock frozen at 2024-01-15T10:30:00Z in epoch milliseconds."""
    return lambda: 1705314600000


@pytest.fixture
def sample_folders() -> List[Folder]:
    """Programming > JavaScript, plus a second root folder."""
    return [
        Folder(id="f-prog", name="Programming", parent_id=None, created_at=1700000000000),
        Folder(id="f-js", name="JavaScript", parent_id="f-prog", created_at=1700000001000),
        Folder(id="f-news", name="News", parent_id=None, created_at=1700000002000),
    ]


@pytest.fixture
def sample_bookmarks() -> List[Bookmark]:
    """Bookmarks spread across the root and the sample folders."""
    return [
        Bookmark(
            id="b-root",
            url="https://example.com",
            title="Example",
            created_at=1700000010000,
        ),
        Bookmark(
            id="b-mdn",
            url="https://developer.mozilla.org",
            title="MDN Web Docs",
            description="Web platform reference",
            notes="Start with the JS guide",
            folder_id="f-js",
            tags=["t-docs"],
            created_at=1700000020000,
            favicon_url="https://developer.mozilla.org/favicon.ico",
        ),
        Bookmark(
            id="b-python",
            url="https://python.org",
            title="Python",
            folder_id="f-prog",
            created_at=1700000030000,
        ),
        Bookmark(
            id="b-hn",
            url="https://news.ycombinator.com",
            title="Hacker News",
            folder_id="f-news",
            created_at=1700000040000,
        ),
    ]


# ============================================================================
# Stores
# ============================================================================


@pytest.fixture
def folder_store() -> InMemoryRecordStore:
    return InMemoryRecordStore("folders")


@pytest.fixture
def bookmark_store() -> InMemoryRecordStore:
    return InMemoryRecordStore("bookmarks")


@pytest.fixture
def temp_db_path(tmp_path) -> Path:
    """Path for a throwaway SQLite database."""
    return tmp_path / "bookmarks.db"


@pytest.fixture
def in_tmp_cwd(tmp_path, monkeypatch) -> Path:
    """Run the test with the temporary directory as working directory."""
    monkeypatch.chdir(tmp_path)
    return Path(os.getcwd())
