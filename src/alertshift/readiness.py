"""
Readiness gate for application upgrades.

The deployment mechanism does not retry an install that fails because the
cluster or the catalog is not ready, so the upgrade checks both before
touching the application record.

    ready  ⇔  cluster.Ready
              ∧ catalog.Upgraded ∧ catalog.Refreshed ∧ catalog.DiskCached

The check is point-in-time: no waiting, no polling.  A not-ready subject is
reported in the returned :class:`ReadinessState`, not raised.  A missing
cluster or catalog raises :class:`~alertshift.core.errors.ResourceLookupError`;
any other store failure raises :class:`~alertshift.core.errors.UpgradeError`
carrying the retryable flag of its cause.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from alertshift.core.errors import (
    NotFoundError,
    ResourceLookupError,
    StoreError,
    UpgradeError,
)
from alertshift.core.logging import get_logger
from alertshift.core.protocols import ResourceStore
from alertshift.models import (
    CATALOG_CONDITION_DISK_CACHED,
    CATALOG_CONDITION_REFRESHED,
    CATALOG_CONDITION_UPGRADED,
    CLUSTER_CONDITION_READY,
    Catalog,
    Cluster,
    ResourceKind,
    condition_is_true,
)

logger = get_logger(__name__)

CATALOG_READY_CONDITIONS = (
    CATALOG_CONDITION_UPGRADED,
    CATALOG_CONDITION_REFRESHED,
    CATALOG_CONDITION_DISK_CACHED,
)


@dataclass(frozen=True)
class ReadinessState:
    """Outcome of a readiness check.

    Attributes:
        ready: True when both cluster and catalog are ready.
        subject: What was not ready (``cluster`` or ``catalog``), None when ready.
        name: Name of the subject that was not ready.
        missing: Conditions that were not ``True``.
    """

    ready: bool
    subject: Literal["cluster", "catalog"] | None = None
    name: str | None = None
    missing: tuple[str, ...] = ()

    @property
    def reason(self) -> str:
        if self.ready:
            return "ready"
        return f"{self.subject} {self.name} not ready"


class ReadinessGate:
    """Point-in-time readiness check of a cluster and a catalog."""

    def __init__(self, store: ResourceStore):
        self.store = store

    def check(self, cluster_name: str, catalog_name: str) -> ReadinessState:
        cluster: Cluster = self._fetch(ResourceKind.CLUSTER, cluster_name)
        if not condition_is_true(cluster.status.conditions, CLUSTER_CONDITION_READY):
            state = ReadinessState(
                ready=False,
                subject="cluster",
                name=cluster_name,
                missing=(CLUSTER_CONDITION_READY,),
            )
            logger.info("readiness_check_failed", subject="cluster", name=cluster_name)
            return state

        catalog: Catalog = self._fetch(ResourceKind.CATALOG, catalog_name)
        missing = tuple(
            c for c in CATALOG_READY_CONDITIONS
            if not condition_is_true(catalog.status.conditions, c)
        )
        if missing:
            logger.info(
                "readiness_check_failed", subject="catalog", name=catalog_name, missing=list(missing)
            )
            return ReadinessState(ready=False, subject="catalog", name=catalog_name, missing=missing)

        return ReadinessState(ready=True)

    def _fetch(self, kind: ResourceKind, name: str):
        subject = kind.value.lower()
        try:
            return self.store.get(kind, None, name)
        except NotFoundError as exc:
            raise ResourceLookupError(
                f"get {subject} {name} failed, {exc}", cause=exc
            ).with_context(kind=kind.value, name=name)
        except StoreError as exc:
            raise UpgradeError(
                f"get {subject} {name} failed, {exc}", cause=exc
            ).with_context(kind=kind.value, name=name)
