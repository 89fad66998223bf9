"""Memory backend - in-process collection for testing without a MongoDB server."""

import copy
from collections.abc import Mapping, Sequence
from typing import Any

from bson import ObjectId
from pymongo.errors import BulkWriteError, DuplicateKeyError
from pymongo.results import DeleteResult, InsertManyResult, InsertOneResult

from docseed.ids import ID_FIELD, ensure_id
from docseed.models import Document


def _matches(document: Document, filter: Mapping[str, Any]) -> bool:
    """Check a document against equality and $in conditions on top-level fields."""
    for field, condition in filter.items():
        value = document.get(field)
        if isinstance(condition, dict) and "$in" in condition:
            if value not in condition["$in"]:
                return False
        elif value != condition:
            return False
    return True


class MemoryCursor:
    """Minimal async cursor over a snapshot of matching documents."""

    def __init__(self, documents: list[Document]):
        self._documents = documents

    async def to_list(self, length: int | None = None) -> list[Document]:
        """
        Return matching documents.

        Args:
            length: Maximum number of documents (None for all)
        """
        if length is None:
            return list(self._documents)
        return self._documents[:length]

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for document in self._documents:
            yield document


class MemoryCollection:
    """
    In-memory collection implementing the seeder's collection handle.

    Simulates MongoDB behavior:
    - Generates ObjectId `_id` values for documents that lack one
    - Rejects duplicate `_id` values (DuplicateKeyError, BulkWriteError for batches)
    - Stores deep copies, so callers cannot mutate stored state

    Use case: Fast unit tests, offline development, prototyping factories.
    """

    def __init__(self, name: str = "memory"):
        """
        Initialize an empty collection.

        Args:
            name: Collection name
        """
        self.name = name
        self._documents: dict[Any, Document] = {}

    def _store(self, document: Document) -> Any:
        stored = ensure_id(copy.deepcopy(document), ObjectId)
        key = stored[ID_FIELD]
        if key in self._documents:
            raise DuplicateKeyError(
                f"E11000 duplicate key error collection: {self.name} "
                f"index: _id_ dup key: {{ _id: {key!r} }}"
            )
        self._documents[key] = stored
        return key

    async def insert_one(self, document: Document) -> InsertOneResult:
        inserted_id = self._store(document)
        return InsertOneResult(inserted_id, True)

    async def insert_many(self, documents: Sequence[Document]) -> InsertManyResult:
        """
        Insert documents in order, stopping at the first duplicate like an ordered bulk write.

        Raises:
            BulkWriteError: On a duplicate `_id`; details["nInserted"] counts the
                documents stored before it
        """
        inserted_ids = []
        for index, document in enumerate(documents):
            try:
                inserted_ids.append(self._store(document))
            except DuplicateKeyError as exc:
                raise BulkWriteError(
                    {
                        "writeErrors": [{"index": index, "code": 11000, "errmsg": str(exc)}],
                        "writeConcernErrors": [],
                        "nInserted": len(inserted_ids),
                        "nUpserted": 0,
                        "nMatched": 0,
                        "nModified": 0,
                        "nRemoved": 0,
                        "upserted": [],
                    }
                ) from exc
        return InsertManyResult(inserted_ids, True)

    async def delete_many(self, filter: Mapping[str, Any]) -> DeleteResult:
        doomed = [key for key, doc in self._documents.items() if _matches(doc, filter)]
        for key in doomed:
            del self._documents[key]
        return DeleteResult({"n": len(doomed), "ok": 1.0}, True)

    async def find_one(self, filter: Mapping[str, Any] | None = None) -> Document | None:
        for document in self._documents.values():
            if _matches(document, filter or {}):
                return copy.deepcopy(document)
        return None

    def find(self, filter: Mapping[str, Any] | None = None) -> MemoryCursor:
        return MemoryCursor(
            [
                copy.deepcopy(document)
                for document in self._documents.values()
                if _matches(document, filter or {})
            ]
        )

    async def count_documents(self, filter: Mapping[str, Any]) -> int:
        return sum(1 for document in self._documents.values() if _matches(document, filter))

    async def drop(self) -> None:
        """Clear all documents."""
        self._documents.clear()


class MemoryDatabase:
    """Named MemoryCollections, handed out like a pymongo AsyncDatabase."""

    def __init__(self, name: str = "docseed"):
        self.name = name
        self._collections: dict[str, MemoryCollection] = {}

    def get_collection(self, name: str) -> MemoryCollection:
        """
        Get a collection by name, creating it on first use.

        Args:
            name: Collection name

        Returns:
            The same MemoryCollection for every call with this name
        """
        if name not in self._collections:
            self._collections[name] = MemoryCollection(name)
        return self._collections[name]

    def __getitem__(self, name: str) -> MemoryCollection:
        return self.get_collection(name)

    async def list_collection_names(self) -> list[str]:
        return list(self._collections.keys())
