"""
Configuration management for docseed.

Loads settings from DOCSEED_* environment variables and docseed.toml files
using pydantic-settings.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "docseed.toml"


class MongoConfig(BaseModel):
    """MongoDB connection configuration."""

    url: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URL",
    )
    database: str = Field(
        default="docseed_test",
        description="Database that seeded collections live in",
    )
    server_selection_timeout_ms: int = Field(
        default=5000,
        description="How long to wait for a reachable server before failing",
    )


class Settings(BaseSettings):
    """
    Main configuration for docseed.

    Environment variables use the DOCSEED_ prefix and a double underscore
    between section and field, e.g. DOCSEED_MONGO__URL.
    """

    model_config = SettingsConfigDict(env_prefix="DOCSEED_", env_nested_delimiter="__")

    mongo: MongoConfig = Field(default_factory=MongoConfig)

    @classmethod
    def from_toml(cls, path: Path | str) -> Settings:
        """
        Read settings from a docseed.toml file.

        Values in the file take precedence over DOCSEED_* environment variables.

        Args:
            path: docseed.toml location

        Raises:
            FileNotFoundError: If there is no file at `path`
            ValueError: If the TOML is malformed or fails validation
        """
        config_path = Path(path)
        if not config_path.is_file():
            raise FileNotFoundError(
                f"docseed settings file {config_path} does not exist. "
                f"Create it with a [mongo] table or rely on DOCSEED_MONGO__* variables."
            )

        return cls(**tomllib.loads(config_path.read_text(encoding="utf-8")))

    @classmethod
    def find_and_load(cls, start_dir: Optional[Path] = None) -> Settings:
        """
        Use the nearest docseed.toml at or above `start_dir` (default: cwd).

        Raises:
            FileNotFoundError: If no directory up to the filesystem root has one
        """
        origin = Path(start_dir or Path.cwd()).resolve()

        for directory in (origin, *origin.parents):
            candidate = directory / CONFIG_FILENAME
            if candidate.is_file():
                logger.debug("Loading docseed settings from %s", candidate)
                return cls.from_toml(candidate)

        raise FileNotFoundError(
            f"No {CONFIG_FILENAME} in {origin} or any directory above it. "
            f"Add one next to your tests or set DOCSEED_MONGO__URL and "
            f"DOCSEED_MONGO__DATABASE instead."
        )


def open_database(settings: Settings | None = None) -> AsyncDatabase:
    """
    Open the configured database on a new AsyncMongoClient.

    The caller owns the client and should close it with `await db.client.close()`.

    Args:
        settings: Settings to use (defaults to environment-derived Settings())

    Returns:
        AsyncDatabase for settings.mongo.database
    """
    settings = settings or Settings()
    client: AsyncMongoClient = AsyncMongoClient(
        settings.mongo.url,
        serverSelectionTimeoutMS=settings.mongo.server_selection_timeout_ms,
    )
    return client[settings.mongo.database]
