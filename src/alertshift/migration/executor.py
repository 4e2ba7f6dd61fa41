"""
Legacy alert migration.

:class:`MigrationExecutor` walks the legacy alerts of one cluster and upserts
the translated rules and groups:

    list legacy alerts ──► translate ──► get rule ─┬─ absent ──► create rule
                                                   └─ present ─► update rule spec
                                     ──► create group (already-exists is fine)

Re-running is safe: names are derived from the legacy alert, existing rules
are overwritten with the same spec, and existing groups are left alone.

Failure handling:
    - A list failure aborts the scope.
    - The first create/get/update failure other than already-exists or
      not-found aborts the run; later alerts are not attempted.
    Both surface as :class:`~alertshift.core.errors.MigrationError`.
"""

from __future__ import annotations

from collections import defaultdict

from alertshift.core.config.settings import DEFAULT_GROUP_INTERVAL_SECONDS
from alertshift.core.errors import (
    AlreadyExistsError,
    MigrationError,
    NotFoundError,
    StoreError,
)
from alertshift.core.logging import get_logger
from alertshift.core.protocols import ResourceStore
from alertshift.migration.translator import (
    translate_cluster_alert,
    translate_project_alert,
)
from alertshift.models import LegacyClusterAlert, LegacyProjectAlert, ResourceKind
from alertshift.models.meta import Resource
from alertshift.refs import in_cluster

logger = get_logger(__name__)


class MigrationExecutor:
    """Migrate one cluster's legacy cluster and project alerts.

    Attributes:
        store: Resource store holding both legacy and new records.
        cluster_name: Cluster whose alerts are migrated.
        group_interval_seconds: Group interval given to every migrated
            rule and group.
    """

    def __init__(
        self,
        store: ResourceStore,
        cluster_name: str,
        *,
        group_interval_seconds: int = DEFAULT_GROUP_INTERVAL_SECONDS,
    ):
        self.store = store
        self.cluster_name = cluster_name
        self.group_interval_seconds = group_interval_seconds

    # ------------------------------------------------------------------ #
    # Scopes
    # ------------------------------------------------------------------ #

    def migrate_cluster(self) -> int:
        """Migrate legacy cluster alerts.  Returns the number migrated."""
        try:
            alerts: list[LegacyClusterAlert] = self.store.list(
                ResourceKind.CLUSTER_ALERT, self.cluster_name
            )
        except StoreError as exc:
            raise MigrationError(
                f"get old cluster alert failed, {exc}", cause=exc
            ).with_context(cluster=self.cluster_name, kind=ResourceKind.CLUSTER_ALERT.value)

        for alert in alerts:
            rule, group = translate_cluster_alert(
                alert, self.cluster_name, self.group_interval_seconds
            )
            self._upsert_rule(alert, rule)
            self._ensure_group(group)

        logger.info("legacy_cluster_alerts_migrated", cluster=self.cluster_name, count=len(alerts))
        return len(alerts)

    def migrate_project(self) -> int:
        """Migrate legacy project alerts of projects in this cluster.

        Returns the number migrated.
        """
        try:
            alerts: list[LegacyProjectAlert] = self.store.list(ResourceKind.PROJECT_ALERT)
        except StoreError as exc:
            raise MigrationError(
                f"get old project alert failed, {exc}", cause=exc
            ).with_context(cluster=self.cluster_name, kind=ResourceKind.PROJECT_ALERT.value)

        by_project: dict[str, list[LegacyProjectAlert]] = defaultdict(list)
        for alert in alerts:
            if in_cluster(alert.spec.project_name, self.cluster_name):
                by_project[alert.spec.project_name].append(alert)

        migrated = 0
        for project_id, project_alerts in by_project.items():
            for alert in project_alerts:
                rule, group = translate_project_alert(
                    alert, project_id, self.group_interval_seconds
                )
                self._upsert_rule(alert, rule)
                self._ensure_group(group)
                migrated += 1

        logger.info(
            "legacy_project_alerts_migrated",
            cluster=self.cluster_name,
            projects=len(by_project),
            count=migrated,
        )
        return migrated

    # ------------------------------------------------------------------ #
    # Per-record steps
    # ------------------------------------------------------------------ #

    def _upsert_rule(self, legacy: Resource, rule: Resource) -> None:
        try:
            existing = self.store.get(rule.kind, rule.namespace, rule.name)
        except NotFoundError:
            self._create_rule(legacy, rule)
            return
        except StoreError as exc:
            raise self._failed(legacy, "get alert rule", exc)

        updated = existing.model_copy(update={"spec": rule.spec.model_copy(deep=True)})
        try:
            self.store.update(updated)
        except NotFoundError:
            # removed between get and update
            self._create_rule(legacy, rule)
            return
        except StoreError as exc:
            raise self._failed(legacy, "update alert rule", exc)
        logger.info("rule_updated", kind=rule.kind.value, namespace=rule.namespace, name=rule.name)

    def _create_rule(self, legacy: Resource, rule: Resource) -> None:
        try:
            self.store.create(rule)
        except AlreadyExistsError:
            logger.info(
                "rule_already_exists", kind=rule.kind.value, namespace=rule.namespace, name=rule.name
            )
            return
        except StoreError as exc:
            raise self._failed(legacy, "create alert rule", exc)
        logger.info("rule_created", kind=rule.kind.value, namespace=rule.namespace, name=rule.name)

    def _ensure_group(self, group: Resource) -> None:
        try:
            self.store.create(group)
        except AlreadyExistsError:
            logger.debug(
                "group_already_exists",
                kind=group.kind.value,
                namespace=group.namespace,
                name=group.name,
            )
            return
        except StoreError as exc:
            raise MigrationError(
                f"migrate failed, create alert group {group.namespace}:{group.name} failed, {exc}",
                cause=exc,
            ).with_context(
                cluster=self.cluster_name,
                kind=group.kind.value,
                namespace=group.namespace,
                name=group.name,
            )
        logger.info("group_created", kind=group.kind.value, namespace=group.namespace, name=group.name)

    def _failed(self, legacy: Resource, action: str, exc: StoreError) -> MigrationError:
        return MigrationError(
            f"migrate {legacy.namespace}:{legacy.name} failed, {action} failed, {exc}",
            cause=exc,
        ).with_context(
            cluster=self.cluster_name,
            kind=legacy.kind.value,
            namespace=legacy.namespace,
            name=legacy.name,
        )
