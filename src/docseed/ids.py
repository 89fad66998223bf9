"""Document identifier assignment."""

from collections.abc import Callable
from typing import Any

from bson import ObjectId

from docseed.models import Document

ID_FIELD = "_id"


def ensure_id(document: Document, id_factory: Callable[[], Any] = ObjectId) -> Document:
    """
    Return the document with an identifier, generating one if absent.

    A missing `_id` key and an `_id` of None both count as absent. The input
    document is never mutated.

    Args:
        document: Patched document about to be inserted
        id_factory: Zero-argument callable producing a new identifier

    Returns:
        The same document if it already has an identifier, else a copy with one
    """
    if document.get(ID_FIELD) is not None:
        return document
    return {**document, ID_FIELD: id_factory()}
