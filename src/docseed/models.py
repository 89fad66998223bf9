"""Data models and type definitions."""

from collections.abc import Callable, Mapping, Sequence
from typing import Any, NamedTuple, Optional, Protocol, Union

from pymongo.results import DeleteResult, InsertManyResult, InsertOneResult

Document = dict[str, Any]

FactoryFn = Callable[[], Document]
"""Zero-argument callable returning one new un-identified document."""

PatchFn = Callable[[Document, int], Document]
"""Per-record patch, called with the generated document and its batch index."""

Patch = Union[Document, PatchFn, None]


class PickResult(NamedTuple):
    """
    Result of Seeder.pick().

    Attributes:
        standout: The single patched document (None when nothing was created)
        remainder: The other documents of the batch, in creation order
    """

    standout: Optional[Document]
    remainder: list[Document]


class CollectionHandle(Protocol):
    """
    Async collection capability a Seeder inserts into and deletes from.

    Satisfied by pymongo's AsyncCollection and by MemoryCollection.
    """

    @property
    def name(self) -> str: ...

    async def insert_one(self, document: Document) -> InsertOneResult: ...

    async def insert_many(self, documents: Sequence[Document]) -> InsertManyResult: ...

    async def delete_many(self, filter: Mapping[str, Any]) -> DeleteResult: ...

    async def find_one(self, filter: Mapping[str, Any] | None = None) -> Document | None: ...
