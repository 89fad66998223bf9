"""Seeder: create, patch, track and clean up seeded documents."""

import asyncio
import logging
import random as random_module
from collections.abc import Callable
from typing import Any, NoReturn

from bson import ObjectId
from pymongo.errors import BulkWriteError, PyMongoError

from docseed.exceptions import InsertionFailure, InvalidRangeError
from docseed.ids import ID_FIELD, ensure_id
from docseed.merge import apply_patch
from docseed.models import CollectionHandle, Document, FactoryFn, Patch, PickResult

logger = logging.getLogger(__name__)


class Seeder:
    """
    Generates documents with a factory, inserts them and remembers their ids.

    Only documents created through this instance are ever removed by clean(),
    so unrelated data in the same collection is left alone.

    Example:
        >>> users = Seeder(db.get_collection("users"), lambda: {"name": fake.name()})
        >>> admin = await users.one({"role": "admin"})
        >>> crowd = await users.many(20)
        >>> await users.clean()
    """

    def __init__(
        self,
        collection: CollectionHandle,
        factory: FactoryFn,
        rng: random_module.Random | None = None,
        id_factory: Callable[[], Any] = ObjectId,
    ):
        """
        Initialize Seeder.

        Args:
            collection: Collection handle documents are inserted into
            factory: Zero-argument callable producing one new document
            rng: Random source for random()/pick() counts (default: module random)
            id_factory: Generator for missing `_id` values (default: ObjectId)
        """
        self._collection = collection
        self._factory = factory
        self._rng = rng or random_module.Random()
        self._id_factory = id_factory
        self._inserted: list[Any] = []
        self._lock = asyncio.Lock()

    @property
    def collection(self) -> CollectionHandle:
        return self._collection

    @property
    def inserted_ids(self) -> tuple[Any, ...]:
        """Ids of every document created and not yet cleaned, in creation order."""
        return tuple(self._inserted)

    @property
    def _collection_name(self) -> str | None:
        return getattr(self._collection, "name", None)

    def _create_data(self, count: int, patch: Patch = None) -> list[Document]:
        """Build `count` patched documents with ids assigned."""
        return [
            ensure_id(apply_patch(self._factory(), index, patch), self._id_factory)
            for index in range(count)
        ]

    def _random_count(self, min_count: int, max_count: int) -> int:
        """
        Pick a random count in [min_count, max_count).

        Raises:
            InvalidRangeError: If max_count is not greater than min_count (after
                clamping min_count to 0)
        """
        min_count = max(0, min_count)
        if max_count <= min_count:
            raise InvalidRangeError(min_count, max_count)
        return self._rng.randrange(min_count, max_count)

    async def _discard(self, ids: list[Any], error: Exception) -> NoReturn:
        """Delete the documents a failed batch did store, then raise `error`."""
        if ids:
            try:
                await self._collection.delete_many({ID_FIELD: {"$in": ids}})
            except PyMongoError as exc:
                logger.warning(
                    "Could not remove %d partially inserted documents from '%s': %s",
                    len(ids),
                    self._collection_name,
                    exc,
                )
                raise error from exc
        raise error

    async def one(self, patch: Patch = None) -> Document:
        """
        Create and insert a single document.

        Args:
            patch: Dict to deep-merge or callable (document, index) -> document

        Returns:
            The inserted document, including its `_id`

        Raises:
            InsertionFailure: If the store did not acknowledge the insert
        """
        async with self._lock:
            document = self._create_data(1, patch)[0]
            result = await self._collection.insert_one(document)
            if not result.acknowledged or result.inserted_id is None:
                raise InsertionFailure(1, 0, self._collection_name)

            self._inserted.append(result.inserted_id)
            logger.debug("Seeded 1 document into '%s'", self._collection_name)
            return document

    async def many(self, count: int, patch: Patch = None) -> list[Document]:
        """
        Create and insert `count` documents in one batch.

        A count of 0 (or less) returns an empty list without calling the factory.

        Args:
            count: Number of documents to create
            patch: Dict to deep-merge into each document, or callable
                (document, index) -> document called per document

        Returns:
            Inserted documents, in creation order

        Raises:
            InsertionFailure: If the store acknowledged fewer documents than
                requested; any documents it did store are removed again
            BulkWriteError: Re-raised unchanged after removing the documents
                stored ahead of the failing one
        """
        if count < 1:
            return []

        async with self._lock:
            documents = self._create_data(count, patch)
            try:
                result = await self._collection.insert_many(documents)
            except BulkWriteError as exc:
                # Ordered inserts stop at the first error
                stored = documents[: exc.details.get("nInserted", 0)]
                await self._discard([document[ID_FIELD] for document in stored], exc)

            inserted_ids = list(result.inserted_ids) if result.acknowledged else []
            if len(inserted_ids) != count:
                await self._discard(
                    inserted_ids, InsertionFailure(count, len(inserted_ids), self._collection_name)
                )

            self._inserted.extend(inserted_ids)
            logger.debug("Seeded %d documents into '%s'", count, self._collection_name)
            return documents

    async def random(self, min_count: int, max_count: int, patch: Patch = None) -> list[Document]:
        """
        Create a random number of documents in [min_count, max_count).

        Raises:
            InvalidRangeError: If max_count <= min_count
        """
        return await self.many(self._random_count(min_count, max_count), patch)

    async def pick(self, min_count: int, max_count: int, patch: Patch) -> PickResult:
        """
        Create a random-sized batch where exactly one document gets the patch.

        Args:
            min_count: Minimum batch size (inclusive)
            max_count: Maximum batch size (exclusive)
            patch: Patch applied only to the picked "standout" document

        Returns:
            PickResult(standout, remainder). For an empty batch standout is None
            and remainder is empty.

        Raises:
            InvalidRangeError: If max_count <= min_count
        """
        count = self._random_count(min_count, max_count)
        picked = self._random_count(0, count) if count > 0 else 0

        def patch_picked(document: Document, index: int) -> Document:
            if index == picked:
                return apply_patch(document, index, patch)
            return document

        crowd = await self.many(count, patch_picked)
        if not crowd:
            return PickResult(None, [])

        standout = crowd.pop(picked)
        return PickResult(standout, crowd)

    async def clean(self) -> None:
        """
        Delete every document this seeder created and reset the ledger.

        Deletes by the exact tracked id set only. If the delete call fails the
        error propagates and the ledger is kept for a retry.
        """
        async with self._lock:
            if not self._inserted:
                return

            tracked = len(self._inserted)
            result = await self._collection.delete_many({ID_FIELD: {"$in": list(self._inserted)}})
            if result.acknowledged and result.deleted_count != tracked:
                # Already removed by someone else
                logger.debug(
                    "Removed %s of %d tracked documents from '%s'",
                    result.deleted_count,
                    tracked,
                    self._collection_name,
                )
            self._inserted = []

    async def __aenter__(self) -> "Seeder":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.clean()
