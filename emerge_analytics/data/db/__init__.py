"""In-memory document store used by the repositories."""

from .inmemory_db import InMemoryDatabase, InMemoryCollection, InMemoryCursor

__all__ = ["InMemoryDatabase", "InMemoryCollection", "InMemoryCursor"]
