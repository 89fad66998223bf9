"""Fixtures for tests against a real MongoDB server."""

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from bson import ObjectId
from pymongo.asynchronous.database import AsyncDatabase

from docseed.config import Settings, open_database


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless a MongoDB URL is configured."""
    if os.getenv("DOCSEED_MONGO__URL"):
        return
    skip_no_mongo = pytest.mark.skip(reason="MongoDB not configured - set DOCSEED_MONGO__URL")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_no_mongo)


def throwaway_settings(settings: Settings) -> Settings:
    """Copy `settings` onto a database name no other run uses."""
    mongo = settings.mongo.model_copy(update={"database": f"docseed_test_{ObjectId()}"})
    return settings.model_copy(update={"mongo": mongo})


@pytest_asyncio.fixture
async def mongo_db() -> AsyncGenerator[AsyncDatabase, None]:
    """
    Provide a fresh database on the configured server.

    Only the database created for this test is dropped afterwards, so the
    configured DOCSEED_MONGO__DATABASE is never touched.
    """
    settings = throwaway_settings(Settings())
    db = open_database(settings)

    yield db

    await db.client.drop_database(settings.mongo.database)
    await db.client.close()


@pytest_asyncio.fixture
async def mongo_collection(mongo_db):
    """Provide the 'tests' collection of the test database."""
    return mongo_db.get_collection("tests")
