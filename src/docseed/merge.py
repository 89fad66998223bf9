"""Patch application for generated documents."""

import copy
from collections.abc import Mapping
from typing import Any

from docseed.models import Document, Patch


def deep_merge(base: Mapping[str, Any], patch: Mapping[str, Any]) -> Document:
    """
    Merge a patch mapping on top of a base document.

    Only dict-vs-dict values are merged recursively. Any other value in the
    patch (lists, objects, scalars, None) replaces the base value wholesale.
    Neither input is mutated; patch values are deep-copied into the result.

    Args:
        base: Generated document
        patch: Partial document to lay on top

    Returns:
        New merged document

    Examples:
        >>> deep_merge({"a": {"x": 1, "y": 2}, "b": [1]}, {"a": {"y": 3}, "b": [9, 9]})
        {'a': {'x': 1, 'y': 3}, 'b': [9, 9]}
        >>> deep_merge({"a": 1}, {"a": None})
        {'a': None}
    """
    merged = dict(base)
    for key, value in patch.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def apply_patch(document: Document, index: int, patch: Patch = None) -> Document:
    """
    Apply a seed patch to a generated document.

    Args:
        document: Factory output
        index: 0-based position of the document in its batch
        patch: Callable (document, index) -> document, dict to deep-merge,
            or anything else to leave the document as generated

    Returns:
        Patched document
    """
    if callable(patch):
        return patch(document, index)
    if isinstance(patch, dict):
        return deep_merge(document, patch)
    return document
