"""
Canonical protocol definitions for alertshift.

The upgrade core never talks to a concrete API server.  It consumes two
structural contracts defined here, and any object with the right shape
satisfies them:

    protocols.py
    ├── ResourceStore   — typed record CRUD with not-found / already-exists
    │                     semantics (in-memory store, API client adapters)
    └── SettingsSource  — keyed string settings read at call time

Guardrails:
    ❌ DON'T: Return None from ``get`` for a missing record
    ✅ DO: Raise NotFoundError so callers can tell "absent" from "failed"

    ❌ DON'T: Retry inside a store implementation
    ✅ DO: Raise StoreError and let the caller re-invoke the upgrade

Tags:
    protocol, resource-store, settings, contracts
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, TypeVar, runtime_checkable

from alertshift.models.meta import Resource, ResourceKind

R = TypeVar("R", bound=Resource)


@runtime_checkable
class ResourceStore(Protocol):
    """
    Typed record store.

    Contract:
        list(kind, namespace=None, labels=None) → [records]
            ``namespace=None`` lists across all namespaces.  ``labels``
            keeps only records whose labels contain every given pair.
        get(kind, namespace, name) → record | NotFoundError
        create(record) → record | AlreadyExistsError | StoreError
        update(record) → record | NotFoundError | ConflictError | StoreError
        delete(kind, namespace, name) → None | NotFoundError | StoreError

    Cluster-scoped kinds ignore ``namespace``.  Returned records are copies;
    mutating them never changes stored state without ``update``.
    """

    def list(
        self,
        kind: ResourceKind,
        namespace: str | None = None,
        labels: Mapping[str, str] | None = None,
    ) -> list[Resource]:
        ...

    def get(self, kind: ResourceKind, namespace: str | None, name: str) -> Resource:
        ...

    def create(self, record: R) -> R:
        ...

    def update(self, record: R) -> R:
        ...

    def delete(self, kind: ResourceKind, namespace: str | None, name: str) -> None:
        ...


@runtime_checkable
class SettingsSource(Protocol):
    """Keyed settings; ``get`` raises MissingConfigError for an unset key."""

    def get(self, key: str) -> str:
        ...


__all__ = ["ResourceStore", "SettingsSource"]
