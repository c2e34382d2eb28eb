"""
Record Store Protocol for Bookmark Interchange.

This module defines the persistence interface the importer and the CLI talk
to, plus a dictionary-backed implementation used for tests and for callers
that keep their records in memory.
"""

import copy
import logging
from abc import abstractmethod
from typing import Any, Dict, Generic, List, Optional, Protocol, TypeVar, runtime_checkable

from ..utils.error_handler import DuplicateRecordError, RecordNotFoundError

RecordT = TypeVar("RecordT")


@runtime_checkable
class RecordStore(Protocol[RecordT]):
    """
    Protocol for a CRUD object store keyed by record ``id``.

    Implementations raise ``StoreError`` (or a subclass) when a read or
    write fails.

    Example Usage:
        >>> store = InMemoryRecordStore("bookmarks")
        >>> store.add(bookmark)
        >>> store.query_by_index("folder_id", None)  # root-level records
    """

    @abstractmethod
    def add(self, record: RecordT) -> str:
        """
        Insert a new record.

        Returns:
            The record id

        Raises:
            DuplicateRecordError: If a record with the same id exists
        """
        ...

    @abstractmethod
    def update(self, record: RecordT) -> str:
        """Insert or overwrite a record by id and return the id."""
        ...

    @abstractmethod
    def get(self, record_id: str) -> Optional[RecordT]:
        """Return the record with this id, or None."""
        ...

    @abstractmethod
    def get_all(self) -> List[RecordT]:
        """Return every record in insertion order."""
        ...

    @abstractmethod
    def delete(self, record_id: str) -> None:
        """Remove a record by id."""
        ...

    @abstractmethod
    def query_by_index(self, field_name: str, value: Any) -> List[RecordT]:
        """
        Return records whose ``field_name`` equals ``value``.

        A None value matches records where the field is None or missing.
        """
        ...


class InMemoryRecordStore(Generic[RecordT]):
    """
    Dictionary-backed record store.

    Records are copied on the way in and out so callers cannot mutate
    stored state by accident.
    """

    def __init__(self, name: str = "records", records: Optional[List[RecordT]] = None):
        """
        Initialize the store.

        Args:
            name: Store name used in error messages
            records: Optional records to preload
        """
        self.name = name
        self.logger = logging.getLogger(f"{__name__}.{name}")
        self._records: Dict[str, RecordT] = {}

        for record in records or []:
            self.add(record)

    def __len__(self) -> int:
        return len(self._records)

    def add(self, record: RecordT) -> str:
        record_id = record.id
        if record_id in self._records:
            raise DuplicateRecordError(
                f"Record {record_id} already exists in {self.name}",
                store_name=self.name,
                record_id=record_id,
            )
        self._records[record_id] = copy.deepcopy(record)
        return record_id

    def update(self, record: RecordT) -> str:
        self._records[record.id] = copy.deepcopy(record)
        return record.id

    def get(self, record_id: str) -> Optional[RecordT]:
        record = self._records.get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def get_all(self) -> List[RecordT]:
        return [copy.deepcopy(r) for r in self._records.values()]

    def delete(self, record_id: str) -> None:
        if record_id not in self._records:
            raise RecordNotFoundError(
                f"Record {record_id} not found in {self.name}",
                store_name=self.name,
                record_id=record_id,
            )
        del self._records[record_id]

    def query_by_index(self, field_name: str, value: Any) -> List[RecordT]:
        return [
            copy.deepcopy(r)
            for r in self._records.values()
            if getattr(r, field_name, None) == value
        ]

    def clear(self) -> None:
        self._records.clear()
