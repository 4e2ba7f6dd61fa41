"""Tests for alertshift.migration.executor — list → translate → upsert."""

import pytest

from alertshift.core.errors import AlreadyExistsError, MigrationError, NotFoundError, StoreError
from alertshift.migration.executor import MigrationExecutor
from alertshift.models import (
    ClusterAlertGroup,
    NodeRule,
    ObjectMeta,
    ResourceKind,
    TargetNode,
    TargetPod,
)
from tests._support.fault_injection import FaultyStore


def _names(store, kind, namespace=None):
    return sorted(r.name for r in store.list(kind, namespace))


@pytest.fixture
def executor(store):
    return MigrationExecutor(store, "c-1")


class TestMigrateCluster:
    def test_creates_rule_and_group(self, store, executor, make_cluster_alert):
        store.create(make_cluster_alert("high-cpu", target_node=TargetNode(node_name="n1")))

        assert executor.migrate_cluster() == 1

        rule = store.get(ResourceKind.CLUSTER_ALERT_RULE, "c-1", "migrate-high-cpu")
        assert isinstance(rule.spec.target, NodeRule)
        group = store.get(ResourceKind.CLUSTER_ALERT_GROUP, "c-1", "migrate-group-high-cpu")
        assert [r.recipient for r in group.spec.recipients] == ["a@x.com"]

    def test_only_lists_own_cluster(self, store, executor, make_cluster_alert):
        other = make_cluster_alert("elsewhere")
        other.metadata.namespace = "c-2"
        store.create(other)

        assert executor.migrate_cluster() == 0
        assert _names(store, ResourceKind.CLUSTER_ALERT_RULE) == []

    def test_idempotent(self, store, executor, make_cluster_alert):
        store.create(make_cluster_alert("a", target_node=TargetNode(node_name="n1")))
        store.create(make_cluster_alert("b"))

        executor.migrate_cluster()
        first_rules = {r.name: r.spec for r in store.list(ResourceKind.CLUSTER_ALERT_RULE)}
        first_groups = {g.name: g.spec for g in store.list(ResourceKind.CLUSTER_ALERT_GROUP)}

        executor.migrate_cluster()

        assert {r.name: r.spec for r in store.list(ResourceKind.CLUSTER_ALERT_RULE)} == first_rules
        assert {g.name: g.spec for g in store.list(ResourceKind.CLUSTER_ALERT_GROUP)} == first_groups
        assert _names(store, ResourceKind.CLUSTER_ALERT_RULE) == ["migrate-a", "migrate-b"]

    def test_existing_rule_spec_overwritten_metadata_kept(self, store, executor, make_cluster_alert):
        store.create(make_cluster_alert("a"))
        executor.migrate_cluster()
        rule = store.get(ResourceKind.CLUSTER_ALERT_RULE, "c-1", "migrate-a")
        rule.metadata.labels["team"] = "ops"
        rule.spec.severity = "info"
        store.update(rule)

        executor.migrate_cluster()

        after = store.get(ResourceKind.CLUSTER_ALERT_RULE, "c-1", "migrate-a")
        assert after.spec.severity == "warning"
        assert after.metadata.labels == {"team": "ops"}
        assert after.metadata.uid == rule.metadata.uid

    def test_existing_group_left_alone(self, store, executor, make_cluster_alert):
        store.create(make_cluster_alert("a"))
        store.create(
            ClusterAlertGroup(metadata=ObjectMeta(name="migrate-group-a", namespace="c-1"))
        )

        executor.migrate_cluster()

        group = store.get(ResourceKind.CLUSTER_ALERT_GROUP, "c-1", "migrate-group-a")
        assert group.spec.recipients == []

    def test_rule_create_race_tolerated(self, store, make_cluster_alert):
        store.create(make_cluster_alert("a"))
        store.create(make_cluster_alert("b"))
        faulty = FaultyStore(store)
        faulty.install_fault(
            "create",
            ResourceKind.CLUSTER_ALERT_RULE,
            AlreadyExistsError("ClusterAlertRule", "c-1", "migrate-a"),
            times=1,
        )

        assert MigrationExecutor(faulty, "c-1").migrate_cluster() == 2
        assert _names(store, ResourceKind.CLUSTER_ALERT_GROUP) == [
            "migrate-group-a",
            "migrate-group-b",
        ]

    def test_rule_deleted_between_get_and_update_is_recreated(self, store, make_cluster_alert):
        store.create(make_cluster_alert("high-cpu", target_node=TargetNode(node_name="n1")))
        MigrationExecutor(store, "c-1").migrate_cluster()

        class DeletingStore(FaultyStore):
            def update(self, record):
                self.calls.append(("update", record.kind, record.namespace, record.name))
                self.inner.delete(record.kind, record.namespace, record.name)
                raise NotFoundError(record.kind.value, record.namespace, record.name)

        racing = DeletingStore(store)

        assert MigrationExecutor(racing, "c-1").migrate_cluster() == 1
        assert len(racing.calls_to("update", ResourceKind.CLUSTER_ALERT_RULE)) == 1
        assert len(racing.calls_to("create", ResourceKind.CLUSTER_ALERT_RULE)) == 1
        rule = store.get(ResourceKind.CLUSTER_ALERT_RULE, "c-1", "migrate-high-cpu")
        assert isinstance(rule.spec.target, NodeRule)

    def test_group_already_exists_tolerated(self, store, make_cluster_alert):
        store.create(make_cluster_alert("a"))
        faulty = FaultyStore(store)
        faulty.install_fault(
            "create",
            ResourceKind.CLUSTER_ALERT_GROUP,
            AlreadyExistsError("ClusterAlertGroup", "c-1", "migrate-group-a"),
        )

        assert MigrationExecutor(faulty, "c-1").migrate_cluster() == 1

    def test_list_failure_aborts(self, store, make_cluster_alert):
        faulty = FaultyStore(store)
        faulty.install_fault("list", ResourceKind.CLUSTER_ALERT, StoreError("connection reset"))

        with pytest.raises(MigrationError, match="get old cluster alert failed") as exc_info:
            MigrationExecutor(faulty, "c-1").migrate_cluster()
        assert exc_info.value.retryable is True

    def test_first_hard_failure_stops_loop(self, store, make_cluster_alert):
        store.create(make_cluster_alert("a"))
        store.create(make_cluster_alert("b"))
        faulty = FaultyStore(store)
        faulty.install_fault("create", ResourceKind.CLUSTER_ALERT_RULE, StoreError("boom"))

        with pytest.raises(MigrationError, match="create alert rule failed"):
            MigrationExecutor(faulty, "c-1").migrate_cluster()

        assert len(faulty.calls_to("create", ResourceKind.CLUSTER_ALERT_RULE)) == 1
        assert faulty.calls_to("create", ResourceKind.CLUSTER_ALERT_GROUP) == []

    def test_get_failure_surfaces(self, store, make_cluster_alert):
        store.create(make_cluster_alert("a"))
        faulty = FaultyStore(store)
        faulty.install_fault("get", ResourceKind.CLUSTER_ALERT_RULE, StoreError("timeout"))

        with pytest.raises(MigrationError, match="get alert rule failed") as exc_info:
            MigrationExecutor(faulty, "c-1").migrate_cluster()
        assert exc_info.value.context.name == "a"

    def test_group_failure_surfaces(self, store, make_cluster_alert):
        store.create(make_cluster_alert("a"))
        faulty = FaultyStore(store)
        faulty.install_fault("create", ResourceKind.CLUSTER_ALERT_GROUP, StoreError("boom"))

        with pytest.raises(MigrationError, match="create alert group c-1:migrate-group-a failed"):
            MigrationExecutor(faulty, "c-1").migrate_cluster()


class TestMigrateProject:
    def test_filters_to_cluster_and_groups_by_project(self, store, make_project_alert):
        store.create(make_project_alert("crash", "c-1:p-app", target_pod=TargetPod(pod_name="web")))
        store.create(make_project_alert("slow", "c-1:p-web"))
        store.create(make_project_alert("foreign", "c-2:p-other"))

        assert MigrationExecutor(store, "c-1").migrate_project() == 2

        assert _names(store, ResourceKind.PROJECT_ALERT_RULE, "p-app") == ["migrate-rule-crash"]
        assert _names(store, ResourceKind.PROJECT_ALERT_RULE, "p-web") == ["migrate-rule-slow"]
        assert _names(store, ResourceKind.PROJECT_ALERT_RULE, "p-other") == []
        group = store.get(ResourceKind.PROJECT_ALERT_GROUP, "p-app", "migrate-group-crash")
        assert group.spec.project_name == "c-1:p-app"

    def test_idempotent(self, store, make_project_alert):
        store.create(make_project_alert("crash"))
        executor = MigrationExecutor(store, "c-1")

        executor.migrate_project()
        executor.migrate_project()

        assert _names(store, ResourceKind.PROJECT_ALERT_RULE) == ["migrate-rule-crash"]
        assert _names(store, ResourceKind.PROJECT_ALERT_GROUP) == ["migrate-group-crash"]

    def test_update_failure_surfaces(self, store, make_project_alert):
        store.create(make_project_alert("crash"))
        MigrationExecutor(store, "c-1").migrate_project()
        faulty = FaultyStore(store)
        faulty.install_fault("update", ResourceKind.PROJECT_ALERT_RULE, StoreError("boom"))

        with pytest.raises(MigrationError, match="update alert rule failed"):
            MigrationExecutor(faulty, "c-1").migrate_project()

    def test_list_failure_aborts(self, store):
        faulty = FaultyStore(store)
        faulty.install_fault("list", ResourceKind.PROJECT_ALERT, StoreError("boom"))

        with pytest.raises(MigrationError, match="get old project alert failed"):
            MigrationExecutor(faulty, "c-1").migrate_project()
