"""
Alerting upgrade orchestrator.

:class:`AlertUpgrader` moves one cluster from legacy alerts to groups/rules
and points the deployed alerting application at the current monitoring
template version.  One call is one sequential pass with no state of its own:

    1. resolve target version  (settings → template default version)
    2. migrate legacy data     (only if previous version lacks the marker)
         migrate_cluster → migrate_project → remove legacy namespace
    3. locate system project   (label selector)
    4. fetch application       (absent → done, nothing to upgrade)
    5. compute desired state   (external id + operator.enabled=false)
         unchanged → done, no write
    6. readiness gate → update application

Every step blocks and the first failure ends the call.  There is no retry
loop: the surrounding reconciliation loop re-invokes ``upgrade`` and the
create-or-update writes of step 2 make re-invocation safe.  A
:class:`~alertshift.core.errors.PreconditionNotMetError` means "try again
later"; anything else needs attention.

Example:
    >>> upgrader = AlertUpgrader.from_settings(store, get_settings())
    >>> upgrader.version()
    'system-library-rancher-monitoring-0.0.3'
    >>> upgrader.upgrade("0.0.1")
    'system-library-rancher-monitoring-0.1.0'
"""

from __future__ import annotations

from typing import NamedTuple

from alertshift.core.config.settings import (
    SYSTEM_MONITORING_CATALOG_ID_KEY,
    AlertShiftSettings,
)
from alertshift.core.config.source import settings_source_from
from alertshift.core.errors import (
    NotFoundError,
    PreconditionNotMetError,
    ResourceLookupError,
    StoreError,
    UpgradeError,
)
from alertshift.core.logging import LogContext, get_logger
from alertshift.core.protocols import ResourceStore, SettingsSource
from alertshift.migration.cleanup import remove_legacy_alerting
from alertshift.migration.executor import MigrationExecutor
from alertshift.models import App, CatalogTemplate, Project, ResourceKind
from alertshift.readiness import ReadinessGate
from alertshift.refs import (
    build_external_id,
    parse_external_id,
    split_external_id,
    template_id,
)

logger = get_logger(__name__)


class TargetVersion(NamedTuple):
    """What the application should be upgraded to."""

    external_id: str
    version: str
    catalog: str


class AlertUpgrader:
    """Upgrade entry point for one cluster's alerting.

    Attributes:
        store: Resource store for every record the upgrade touches.
        cluster_name: Cluster being upgraded.
        settings_source: Live keyed settings (system monitoring catalog id).
        settings: Static names and constants.
    """

    def __init__(
        self,
        store: ResourceStore,
        cluster_name: str,
        settings_source: SettingsSource,
        *,
        settings: AlertShiftSettings | None = None,
        migrator: MigrationExecutor | None = None,
        readiness: ReadinessGate | None = None,
    ):
        self.store = store
        self.cluster_name = cluster_name
        self.settings_source = settings_source
        self.settings = settings or AlertShiftSettings()
        self.migrator = migrator or MigrationExecutor(
            store,
            cluster_name,
            group_interval_seconds=self.settings.group_interval_seconds,
        )
        self.readiness = readiness or ReadinessGate(store)

    @classmethod
    def from_settings(
        cls, store: ResourceStore, settings: AlertShiftSettings
    ) -> AlertUpgrader:
        return cls(
            store,
            settings.cluster_name,
            settings_source_from(settings),
            settings=settings,
        )

    @property
    def name(self) -> str:
        return self.settings.service_name

    # ------------------------------------------------------------------ #
    # Produced interface
    # ------------------------------------------------------------------ #

    def version(self) -> str:
        """Template version id of the configured system monitoring catalog."""
        catalog_id = self.settings_source.get(SYSTEM_MONITORING_CATALOG_ID_KEY)
        template_version_id, _ = parse_external_id(catalog_id)
        return template_version_id

    def upgrade(self, previous_version: str) -> str:
        """Upgrade from *previous_version*; returns the new version id."""
        with LogContext(cluster=self.cluster_name, service=self.name):
            target = self.resolve_target()
            logger.info(
                "upgrade_started", previous_version=previous_version, target_version=target.version
            )

            if self.needs_migration(previous_version):
                self.migrate_legacy()
            else:
                logger.info("legacy_migration_skipped", previous_version=previous_version)

            project = self.system_project()
            app = self._get_app(project)
            if app is None:
                logger.info("app_not_deployed", namespace=project.name, name=self.settings.app_name)
                return target.version

            desired = self.desired_app(app, target.external_id)
            if not self.app_changed(app, desired):
                logger.info("app_upgrade_skipped", namespace=app.namespace, name=app.name)
                return target.version

            self._ensure_ready(target.catalog)
            try:
                self.store.update(desired)
            except StoreError as exc:
                raise UpgradeError(
                    f"update app {app.namespace}:{app.name} failed, {exc}", cause=exc
                ).with_context(
                    cluster=self.cluster_name,
                    kind=ResourceKind.APP.value,
                    namespace=app.namespace,
                    name=app.name,
                )
            logger.info(
                "app_upgraded",
                namespace=app.namespace,
                name=app.name,
                external_id=target.external_id,
            )
            return target.version

    # ------------------------------------------------------------------ #
    # Steps
    # ------------------------------------------------------------------ #

    def resolve_target(self) -> TargetVersion:
        ref = split_external_id(self.settings_source.get(SYSTEM_MONITORING_CATALOG_ID_KEY))
        tid = template_id(ref.catalog, ref.template)
        try:
            template: CatalogTemplate = self.store.get(
                ResourceKind.CATALOG_TEMPLATE, ref.namespace, tid
            )
        except NotFoundError as exc:
            raise ResourceLookupError(f"get template {tid} failed, {exc}", cause=exc).with_context(
                kind=ResourceKind.CATALOG_TEMPLATE.value, namespace=ref.namespace, name=tid
            )
        except StoreError as exc:
            raise UpgradeError(f"get template {tid} failed, {exc}", cause=exc).with_context(
                kind=ResourceKind.CATALOG_TEMPLATE.value, namespace=ref.namespace, name=tid
            )
        if not template.spec.default_version:
            raise ResourceLookupError(f"template {tid} has no default version").with_context(
                kind=ResourceKind.CATALOG_TEMPLATE.value, namespace=ref.namespace, name=tid
            )

        external_id = build_external_id(ref.catalog, ref.template, template.spec.default_version)
        version, _ = parse_external_id(external_id)
        return TargetVersion(external_id=external_id, version=version, catalog=ref.catalog)

    def needs_migration(self, previous_version: str) -> bool:
        return self.settings.migrated_marker not in previous_version

    def migrate_legacy(self) -> None:
        logger.info("legacy_migration_started")
        clusters = self.migrator.migrate_cluster()
        projects = self.migrator.migrate_project()
        remove_legacy_alerting(self.store, self.settings.legacy_namespace)
        logger.info(
            "legacy_migration_completed", cluster_alerts=clusters, project_alerts=projects
        )

    def system_project(self) -> Project:
        try:
            projects = self.store.list(
                ResourceKind.PROJECT, self.cluster_name, self.settings.system_project_label
            )
        except StoreError as exc:
            raise UpgradeError(f"list system project failed, {exc}", cause=exc).with_context(
                cluster=self.cluster_name, kind=ResourceKind.PROJECT.value
            )
        if not projects or not projects[0].name:
            raise ResourceLookupError("get system project failed").with_context(
                cluster=self.cluster_name, kind=ResourceKind.PROJECT.value
            )
        return projects[0]

    def desired_app(self, app: App, external_id: str) -> App:
        desired = app.model_copy(deep=True)
        desired.spec.external_id = external_id
        desired.spec.answers[self.settings.operator_answer_key] = "false"
        return desired

    def app_changed(self, current: App, desired: App) -> bool:
        """Compare only the fields the upgrade sets."""
        key = self.settings.operator_answer_key
        return (
            current.spec.external_id != desired.spec.external_id
            or current.spec.answers.get(key) != desired.spec.answers.get(key)
        )

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _get_app(self, project: Project) -> App | None:
        name = self.settings.app_name
        try:
            return self.store.get(ResourceKind.APP, project.name, name)
        except NotFoundError:
            return None
        except StoreError as exc:
            raise UpgradeError(
                f"get app {project.name}:{name} failed, {exc}", cause=exc
            ).with_context(
                cluster=self.cluster_name,
                kind=ResourceKind.APP.value,
                namespace=project.name,
                name=name,
            )

    def _ensure_ready(self, catalog_name: str) -> None:
        state = self.readiness.check(self.cluster_name, catalog_name)
        if state.ready:
            return
        raise PreconditionNotMetError(
            state.reason,
            subject=state.subject,
            retry_after=self.settings.catalog_sync_interval_seconds,
        ).with_context(cluster=self.cluster_name, name=state.name, missing=list(state.missing))
