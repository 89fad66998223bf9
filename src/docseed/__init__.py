"""
docseed - Tracked Fixture Documents for MongoDB

Creates randomized, patchable documents through a factory, inserts them and
removes exactly the documents it created when asked to clean up.
"""

from docseed.exceptions import DocSeedError, InsertionFailure, InvalidRangeError
from docseed.factories import FakerFactory
from docseed.ids import ensure_id
from docseed.merge import apply_patch, deep_merge
from docseed.models import Document, FactoryFn, Patch, PickResult
from docseed.seeder import Seeder
from docseed.seeder_map import SeederMap, create_seeder, create_seeder_map

__version__ = "0.1.0"

__all__ = [
    "Seeder",
    "SeederMap",
    "create_seeder",
    "create_seeder_map",
    "FakerFactory",
    "PickResult",
    "Document",
    "FactoryFn",
    "Patch",
    "deep_merge",
    "apply_patch",
    "ensure_id",
    "DocSeedError",
    "InsertionFailure",
    "InvalidRangeError",
]
