"""Resource store implementations."""

from alertshift.store.memory import InMemoryResourceStore

__all__ = ["InMemoryResourceStore"]
