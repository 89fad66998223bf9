"""Pytest configuration and shared fixtures."""

import random
from unittest.mock import Mock

import pytest

from docseed import Seeder
from docseed.backends import MemoryCollection, MemoryDatabase


def make_record() -> dict:
    """Random un-identified record: an int, a bool and a list of ints."""
    return {
        "foo": random.randint(0, 99_999_999),
        "bar": random.random() > 0.5,
        "baz": [random.randint(0, 9999) for _ in range(random.randint(1, 99))],
        "meta": {"source": "factory", "tags": ["a", "b"]},
    }


@pytest.fixture
def factory() -> Mock:
    """Record factory that counts its calls."""
    return Mock(side_effect=make_record)


@pytest.fixture
def db() -> MemoryDatabase:
    """Provide an empty in-memory database."""
    return MemoryDatabase("docseed_test")


@pytest.fixture
def collection(db: MemoryDatabase) -> MemoryCollection:
    """Provide the in-memory 'tests' collection."""
    return db.get_collection("tests")


@pytest.fixture
def seeder(collection: MemoryCollection, factory: Mock) -> Seeder:
    """Provide a seeder bound to the in-memory collection."""
    return Seeder(collection, factory, rng=random.Random(1234))
