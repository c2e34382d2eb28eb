"""
Duplicate URL classification for bookmark imports.

Decides, per incoming bookmark, whether an import should add it, skip it,
replace an existing record, or add it alongside an existing record. The
check is an exact URL string match against a snapshot of the records that
existed before the import started.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Union

from .data_models import Bookmark, DuplicateHandling


class DuplicateAction(Enum):
    """What the importer should do with one incoming bookmark."""

    ADD = "add"  # Not a duplicate
    SKIP = "skip"  # Duplicate, leave existing record alone
    REPLACE = "replace"  # Duplicate, update existing record in place
    KEEP = "keep"  # Duplicate, add as a second record


@dataclass
class DuplicateDecision:
    """Classification of one incoming bookmark"""

    action: DuplicateAction
    bookmark: Bookmark
    existing: Optional[Bookmark] = None

    @property
    def is_duplicate(self) -> bool:
        return self.action is not DuplicateAction.ADD

    def replacement(self) -> Optional[Bookmark]:
        """
        Record to write for a REPLACE decision.

        Returns:
            The incoming bookmark carrying the existing record's id, or None
            when there is no existing record to replace
        """
        if self.action is not DuplicateAction.REPLACE or self.existing is None:
            return None
        return self.bookmark.copy(id=self.existing.id)


def coerce_duplicate_handling(
    mode: Union[DuplicateHandling, str, None]
) -> DuplicateHandling:
    """
    Normalize a duplicate handling mode given as enum or string.

    Args:
        mode: DuplicateHandling, its string value, or None for the default

    Returns:
        DuplicateHandling member

    Raises:
        ValueError: If the string is not a known mode
    """
    if mode is None:
        return DuplicateHandling.SKIP
    if isinstance(mode, DuplicateHandling):
        return mode
    try:
        return DuplicateHandling(str(mode).lower())
    except ValueError:
        valid = ", ".join(m.value for m in DuplicateHandling)
        raise ValueError(
            f"Unknown duplicate handling mode: {mode!r}. Valid modes: {valid}"
        ) from None


class DuplicateClassifier:
    """
    Classifies incoming bookmarks against a snapshot of existing records.

    The snapshot is taken once at construction; bookmarks written later in
    the same import are never seen as duplicates of each other.
    """

    def __init__(self, existing_bookmarks: Iterable[Bookmark]):
        """
        Initialize the classifier.

        Args:
            existing_bookmarks: Records present before the import
        """
        self.logger = logging.getLogger(__name__)
        self._by_url: Dict[str, Bookmark] = {}

        for bookmark in existing_bookmarks:
            # First record wins when the store already holds duplicates
            self._by_url.setdefault(bookmark.url, bookmark)

        self.logger.debug(f"Duplicate snapshot holds {len(self._by_url)} URLs")

    def __len__(self) -> int:
        return len(self._by_url)

    def __contains__(self, url: str) -> bool:
        return url in self._by_url

    def find_existing(self, url: str) -> Optional[Bookmark]:
        """Return the snapshot record with this exact URL, if any."""
        return self._by_url.get(url)

    def classify(
        self,
        bookmark: Bookmark,
        mode: Union[DuplicateHandling, str] = DuplicateHandling.SKIP,
    ) -> DuplicateDecision:
        """
        Decide what to do with one incoming bookmark.

        Args:
            bookmark: Parsed bookmark
            mode: Duplicate handling mode

        Returns:
            DuplicateDecision for the bookmark
        """
        mode = coerce_duplicate_handling(mode)

        if bookmark.url not in self._by_url:
            return DuplicateDecision(DuplicateAction.ADD, bookmark)

        existing = self._by_url[bookmark.url]

        if mode is DuplicateHandling.SKIP:
            action = DuplicateAction.SKIP
        elif mode is DuplicateHandling.REPLACE:
            action = DuplicateAction.REPLACE
        else:
            action = DuplicateAction.KEEP

        return DuplicateDecision(action, bookmark, existing=existing)
