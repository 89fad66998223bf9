"""Faker-based document factories."""

from collections.abc import Callable, Mapping
from typing import Any

from faker import Faker


class FakerFactory:
    """
    Build a document factory from a field template using the Faker library.

    Template values:
        - callable: called with no arguments
        - str: name of a Faker provider method (e.g. "email", "pyint")
        - dict: nested template, expanded recursively
        - None: derived from the field name, falling back to short text

    Example:
        >>> users = FakerFactory({"name": None, "email": None, "age": "pyint",
        ...                       "address": {"city": None, "zip": None}})
        >>> users()
        {'name': 'Jane Doe', 'email': 'jdoe@example.org', 'age': 4821, 'address': {...}}
        >>> seeder = Seeder(db.get_collection("users"), users)
    """

    # Field name → Faker method mapping
    FIELD_MAPPINGS: dict[str, str] = {
        "email": "email",
        "first_name": "first_name",
        "last_name": "last_name",
        "name": "name",
        "username": "user_name",
        "company": "company",
        "phone": "phone_number",
        "phone_number": "phone_number",
        "address": "address",
        "street": "street_address",
        "city": "city",
        "state": "state",
        "country": "country",
        "zip": "zipcode",
        "zipcode": "zipcode",
        "url": "url",
        "title": "sentence",
        "description": "paragraph",
        "bio": "paragraph",
        "active": "pybool",
        "created_at": "date_time_this_year",
        "updated_at": "date_time_this_year",
    }

    def __init__(
        self,
        template: Mapping[str, Any],
        locale: str | None = None,
        seed: int | None = None,
    ):
        """
        Initialize factory.

        Args:
            template: Field name → value spec (see class docstring)
            locale: Faker locale (default: Faker's default)
            seed: Seed for this factory's Faker instance, for reproducible data

        Raises:
            ValueError: If a template names an unknown Faker provider
            TypeError: If a template value is of an unsupported type
        """
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
        self._fields = self._compile(template)

    def _compile(self, template: Mapping[str, Any]) -> dict[str, Callable[[], Any]]:
        return {name: self._compile_field(name, spec) for name, spec in template.items()}

    def _compile_field(self, name: str, spec: Any) -> Callable[[], Any]:
        if callable(spec):
            return spec
        if isinstance(spec, dict):
            nested = self._compile(spec)
            return lambda: {key: make() for key, make in nested.items()}
        if spec is None:
            spec = self.FIELD_MAPPINGS.get(name)
            if spec is None:
                return lambda: self.fake.text(max_nb_chars=50)
        if isinstance(spec, str):
            provider = getattr(self.fake, spec, None)
            if not callable(provider):
                raise ValueError(
                    f"Unknown Faker provider '{spec}' for field '{name}'. "
                    f"Use a Faker method name (e.g. 'email', 'pyint') or a callable."
                )
            return provider
        raise TypeError(f"Unsupported template value for field '{name}': {spec!r}")

    def __call__(self) -> dict[str, Any]:
        """Generate one new document."""
        return {name: make() for name, make in self._fields.items()}
