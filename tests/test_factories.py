"""Tests for FakerFactory."""

import datetime

import pytest

from docseed import FakerFactory


class TestFakerFactory:
    """Tests for FakerFactory.__call__()."""

    def test_field_name_mapping(self) -> None:
        """Fields without a spec use the name mapping."""
        factory = FakerFactory({"email": None, "name": None, "created_at": None})

        document = factory()

        assert "@" in document["email"]
        assert document["name"]
        assert isinstance(document["created_at"], datetime.datetime)

    def test_unknown_name_falls_back_to_text(self) -> None:
        """Unmapped names get short text."""
        document = FakerFactory({"whatever": None})()

        assert isinstance(document["whatever"], str)
        assert len(document["whatever"]) <= 50

    def test_provider_name(self) -> None:
        """String specs call the named Faker provider."""
        document = FakerFactory({"age": "pyint", "flag": "pybool"})()

        assert isinstance(document["age"], int)
        assert isinstance(document["flag"], bool)

    def test_callable_spec(self) -> None:
        """Callable specs are called per document."""
        counter = iter(range(10))
        factory = FakerFactory({"n": lambda: next(counter)})

        assert [factory()["n"] for _ in range(3)] == [0, 1, 2]

    def test_nested_template(self) -> None:
        """Dict specs expand to nested documents."""
        document = FakerFactory({"address": {"city": None, "zip": None}})()

        assert set(document["address"]) == {"city", "zip"}

    def test_seed_reproducible(self) -> None:
        """Equal seeds produce equal documents."""
        template = {"name": None, "email": None}

        assert FakerFactory(template, seed=3)() == FakerFactory(template, seed=3)()

    def test_unknown_provider_raises(self) -> None:
        """Unknown provider names fail at construction."""
        with pytest.raises(ValueError, match="not_a_provider"):
            FakerFactory({"x": "not_a_provider"})

    def test_unsupported_spec_raises(self) -> None:
        """Specs of unsupported types fail at construction."""
        with pytest.raises(TypeError):
            FakerFactory({"x": 42})

    async def test_usable_as_seeder_factory(self, collection) -> None:
        """A FakerFactory plugs straight into a Seeder."""
        from docseed import Seeder

        seeder = Seeder(collection, FakerFactory({"name": None}, seed=1))
        records = await seeder.many(3, {"role": "admin"})

        assert all(r["role"] == "admin" and r["name"] for r in records)
