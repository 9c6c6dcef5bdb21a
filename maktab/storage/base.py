import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

Record = Dict[str, Any]


class StorageBackend(ABC):
    """
    Key-value document storage shared by every service.

    Records are plain dicts. Every record returned carries its key under ``"id"``.
    Writes are full overwrites (last writer wins); there are no transactions,
    so concurrent read-modify-write cycles on the same key can lose updates.
    """

    name = "abstract"

    @abstractmethod
    def get(self, collection: str, key: str) -> Optional[Record]:
        """Return the record stored under ``key`` or None."""

    @abstractmethod
    def set(self, collection: str, key: str, record: Record) -> None:
        """Store ``record`` under ``key``, replacing anything already there."""

    @abstractmethod
    def delete(self, collection: str, key: str) -> None:
        """Remove the record under ``key``. Missing keys are ignored."""

    @abstractmethod
    def list_all(self, collection: str) -> List[Record]:
        """Return every record of the collection in storage order."""

    def query(self, collection: str, field: str, value: Any) -> List[Record]:
        """Records whose ``field`` equals ``value``. No ordering is guaranteed."""
        return [r for r in self.list_all(collection) if r.get(field) == value]

    def list_ordered(self, collection: str, field: str, descending: bool = False) -> List[Record]:
        """Records sorted by ``field``; records without the field come last."""
        records = self.list_all(collection)
        present = [r for r in records if r.get(field) is not None]
        missing = [r for r in records if r.get(field) is None]
        present.sort(key=lambda r: r[field], reverse=descending)
        return present + missing

    def add(self, collection: str, record: Record) -> str:
        """Store ``record`` under a freshly generated key and return the key."""
        key = uuid.uuid4().hex
        self.set(collection, key, record)
        return key

    @staticmethod
    def _with_key(key: str, record: Record) -> Record:
        data = dict(record)
        data["id"] = key
        return data
