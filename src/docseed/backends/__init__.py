"""Backend implementations of the collection handle."""

from docseed.backends.memory import MemoryCollection, MemoryCursor, MemoryDatabase

__all__ = ["MemoryCollection", "MemoryCursor", "MemoryDatabase"]
