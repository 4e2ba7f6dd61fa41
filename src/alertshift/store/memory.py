"""
Process-local resource store.

:class:`InMemoryResourceStore` implements
:class:`~alertshift.core.protocols.ResourceStore` over a dict.  It mirrors the
semantics an API server gives the upgrade: copies in and out, server-owned
``uid``/``resource_version``/``creation_timestamp``, optimistic concurrency on
update, and namespace deletion that removes everything inside it.

Example:
    store = InMemoryResourceStore()
    store.create(Namespace(metadata=ObjectMeta(name="cattle-alerting")))
    store.delete(ResourceKind.NAMESPACE, None, "cattle-alerting")
"""

from __future__ import annotations

import threading
import uuid
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import TypeVar

from alertshift.core.errors import (
    AlreadyExistsError,
    ConflictError,
    NotFoundError,
    StoreError,
)
from alertshift.core.logging import get_logger
from alertshift.models import RESOURCE_TYPES
from alertshift.models.meta import Resource, ResourceKind

logger = get_logger(__name__)

R = TypeVar("R", bound=Resource)

_Key = tuple[ResourceKind, str, str]


class InMemoryResourceStore:
    """Thread-safe dict-backed record store."""

    def __init__(self, records: Iterable[Resource] = ()):
        self._records: dict[_Key, Resource] = {}
        self._lock = threading.RLock()
        self._version = 0
        for record in records:
            self.create(record)

    # ------------------------------------------------------------------ #
    # ResourceStore
    # ------------------------------------------------------------------ #

    def list(
        self,
        kind: ResourceKind,
        namespace: str | None = None,
        labels: Mapping[str, str] | None = None,
    ) -> list[Resource]:
        namespace = self._scope(kind, namespace)
        with self._lock:
            items = [
                record
                for (k, ns, _), record in self._records.items()
                if k == kind and (namespace is None or ns == namespace)
            ]
        if labels:
            items = [r for r in items if _matches(r.metadata.labels, labels)]
        return [r.model_copy(deep=True) for r in items]

    def get(self, kind: ResourceKind, namespace: str | None, name: str) -> Resource:
        key = (kind, self._scope(kind, namespace) or "", name)
        with self._lock:
            record = self._records.get(key)
        if record is None:
            raise NotFoundError(kind.value, namespace, name)
        return record.model_copy(deep=True)

    def create(self, record: R) -> R:
        key = self._key(record)
        with self._lock:
            if key in self._records:
                raise AlreadyExistsError(record.kind.value, key[1] or None, key[2])
            stored = record.model_copy(deep=True)
            stored.metadata.namespace = key[1]
            stored.metadata.uid = str(uuid.uuid4())
            stored.metadata.resource_version = self._next_version()
            stored.metadata.creation_timestamp = datetime.now(UTC).isoformat()
            self._records[key] = stored
        logger.debug("record_created", kind=record.kind.value, namespace=key[1], name=key[2])
        return stored.model_copy(deep=True)

    def update(self, record: R) -> R:
        key = self._key(record)
        with self._lock:
            current = self._records.get(key)
            if current is None:
                raise NotFoundError(record.kind.value, key[1] or None, key[2])
            sent = record.metadata.resource_version
            if sent and sent != current.metadata.resource_version:
                raise ConflictError(
                    f"{record.kind.value} {key[1]}:{key[2]} has been modified; "
                    f"resource version {sent} is stale"
                ).with_context(kind=record.kind.value, namespace=key[1], name=key[2])
            stored = record.model_copy(deep=True)
            stored.metadata.namespace = key[1]
            stored.metadata.uid = current.metadata.uid
            stored.metadata.creation_timestamp = current.metadata.creation_timestamp
            stored.metadata.resource_version = self._next_version()
            self._records[key] = stored
        logger.debug("record_updated", kind=record.kind.value, namespace=key[1], name=key[2])
        return stored.model_copy(deep=True)

    def delete(self, kind: ResourceKind, namespace: str | None, name: str) -> None:
        key = (kind, self._scope(kind, namespace) or "", name)
        with self._lock:
            if key not in self._records:
                raise NotFoundError(kind.value, namespace, name)
            del self._records[key]
            if kind == ResourceKind.NAMESPACE:
                contained = [k for k in self._records if k[1] == name]
                for k in contained:
                    del self._records[k]
        logger.debug("record_deleted", kind=kind.value, namespace=key[1], name=name)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def __len__(self) -> int:
        return len(self._records)

    def _next_version(self) -> str:
        self._version += 1
        return str(self._version)

    @staticmethod
    def _scope(kind: ResourceKind, namespace: str | None) -> str | None:
        if not RESOURCE_TYPES[kind].namespaced:
            return ""
        return namespace or None

    @staticmethod
    def _key(record: Resource) -> _Key:
        if not record.metadata.name:
            raise StoreError(f"{record.kind.value} has no name", retryable=False)
        if not record.namespaced:
            return record.kind, "", record.metadata.name
        if not record.metadata.namespace:
            raise StoreError(
                f"{record.kind.value} {record.metadata.name} has no namespace",
                retryable=False,
            )
        return record.kind, record.metadata.namespace, record.metadata.name


def _matches(labels: Mapping[str, str], selector: Mapping[str, str]) -> bool:
    return all(labels.get(k) == v for k, v in selector.items())
