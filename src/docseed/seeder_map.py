"""Factory helpers binding seeders to a database handle."""

from collections.abc import Callable, Iterator, Mapping
from typing import Any

from docseed.models import FactoryFn
from docseed.seeder import Seeder


class SeederMap(Mapping[str, Seeder]):
    """
    Named seeders for one database with a combined clean().

    Allows accessing seeders as attributes:
        seeders.users      # Seeder bound to the "users" collection
        seeders["users"]   # Same seeder

    Names the map itself defines (clean, get, keys, items, values) resolve to
    those methods, so a collection with such a name is reachable only by item
    access: seeders["clean"].
    """

    def __init__(self, seeders: Mapping[str, Seeder]):
        self._seeders: dict[str, Seeder] = dict(seeders)

    def __getitem__(self, name: str) -> Seeder:
        return self._seeders[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._seeders)

    def __len__(self) -> int:
        return len(self._seeders)

    def __getattr__(self, name: str) -> Seeder:
        """
        Allow attribute access to seeders.

        Raises:
            AttributeError: If no seeder is registered under this name
        """
        if name.startswith("_"):
            raise AttributeError(f"No attribute '{name}'")
        if name in self._seeders:
            return self._seeders[name]
        raise AttributeError(f"No seeder '{name}' in seeder map")

    async def clean(self) -> None:
        """Clean up the documents created by every seeder in this map."""
        for seeder in self._seeders.values():
            await seeder.clean()


def create_seeder(collection: str, factory: FactoryFn, **options: Any) -> Callable[[Any], Seeder]:
    """
    Create a seeder factory for one collection.

    Args:
        collection: Collection name
        factory: Document factory
        **options: Extra Seeder keyword arguments (rng, id_factory)

    Returns:
        Callable taking a database handle and returning a bound Seeder

    Example:
        >>> users = create_seeder("users", user_factory)(db)
        >>> await users.many(3)
    """

    def bind(db: Any) -> Seeder:
        return Seeder(db.get_collection(collection), factory, **options)

    return bind


def create_seeder_map(factories: Mapping[str, FactoryFn], **options: Any) -> Callable[[Any], SeederMap]:
    """
    Create a seeder map factory, one seeder per collection name.

    Args:
        factories: Collection name -> document factory
        **options: Extra Seeder keyword arguments shared by every seeder

    Returns:
        Callable taking a database handle and returning a SeederMap

    Example:
        >>> seeders = create_seeder_map({"users": user_factory, "posts": post_factory})(db)
        >>> await seeders.users.one()
        >>> await seeders.clean()
    """

    def bind(db: Any) -> SeederMap:
        return SeederMap(
            {name: create_seeder(name, factory, **options)(db) for name, factory in factories.items()}
        )

    return bind
