"""Tests for docseed settings."""

from pathlib import Path

import pytest

from docseed.config import Settings, open_database


def test_defaults(monkeypatch):
    """Settings have local defaults."""
    monkeypatch.delenv("DOCSEED_MONGO__URL", raising=False)
    monkeypatch.delenv("DOCSEED_MONGO__DATABASE", raising=False)
    settings = Settings()

    assert settings.mongo.url == "mongodb://localhost:27017"
    assert settings.mongo.database == "docseed_test"


def test_env_override(monkeypatch):
    """DOCSEED_MONGO__* variables override defaults."""
    monkeypatch.setenv("DOCSEED_MONGO__URL", "mongodb://db.example:27017")
    monkeypatch.setenv("DOCSEED_MONGO__DATABASE", "fixtures")

    settings = Settings()

    assert settings.mongo.url == "mongodb://db.example:27017"
    assert settings.mongo.database == "fixtures"


def test_from_toml(tmp_path: Path):
    """Settings load from a TOML file."""
    config_file = tmp_path / "docseed.toml"
    config_file.write_text('[mongo]\nurl = "mongodb://toml:27017"\ndatabase = "from_toml"\n')

    settings = Settings.from_toml(config_file)

    assert settings.mongo.url == "mongodb://toml:27017"
    assert settings.mongo.database == "from_toml"


def test_from_toml_missing(tmp_path: Path):
    """Missing files raise FileNotFoundError."""
    with pytest.raises(FileNotFoundError, match="nope.toml does not exist"):
        Settings.from_toml(tmp_path / "nope.toml")


def test_find_and_load_walks_up(tmp_path: Path):
    """find_and_load searches parent directories."""
    (tmp_path / "docseed.toml").write_text('[mongo]\ndatabase = "parent"\n')
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert Settings.find_and_load(nested).mongo.database == "parent"


def test_find_and_load_not_found(tmp_path: Path):
    """No config anywhere raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError, match="docseed.toml"):
        Settings.find_and_load(tmp_path)


async def test_open_database_uses_settings():
    """open_database returns the configured database without connecting."""
    settings = Settings(mongo={"url": "mongodb://localhost:27017", "database": "opened"})

    db = open_database(settings)
    try:
        assert db.name == "opened"
    finally:
        await db.client.close()
