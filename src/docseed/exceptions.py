"""Custom exceptions with helpful error messages."""


class DocSeedError(Exception):
    """Base exception for docseed errors."""

    pass


class InsertionFailure(DocSeedError):
    """Store acknowledged fewer inserted documents than requested."""

    def __init__(self, expected: int, actual: int, collection: str | None = None):
        self.expected = expected
        self.actual = actual
        self.collection = collection
        target = f" into '{collection}'" if collection else ""
        super().__init__(
            f"Failed to insert seeded documents{target}: "
            f"expected {expected}, store acknowledged {actual}.\n\n"
            f"Suggestions:\n"
            f"1. Check that the collection uses an acknowledged write concern (w>=1)\n"
            f"2. Check for document validation rules rejecting generated data\n"
            f"3. Verify the database connection settings"
        )


class InvalidRangeError(DocSeedError):
    """Random count range is empty."""

    def __init__(self, min_count: int, max_count: int):
        self.min_count = min_count
        self.max_count = max_count
        super().__init__(
            f"Invalid random count range [{min_count}, {max_count}): "
            f"max must be greater than min.\n\n"
            f"Suggestions:\n"
            f"1. Use max = min + 1 to always create exactly min documents\n"
            f"2. Or call seeder.many({min_count}) for a fixed count"
        )
