"""
Legacy alert → group/rule translation.

Pure functions, no I/O.  Every legacy alert, however shaped, maps to exactly
one rule and one group with names derived from the legacy alert's name:

    ===================  ==========================  =========================
    legacy               rule                        group
    ===================  ==========================  =========================
    ClusterAlert  X      ClusterAlertRule migrate-X  migrate-group-X
    ProjectAlert  X      ProjectAlertRule            migrate-group-X
                         migrate-rule-X
    ===================  ==========================  =========================

Timing:
    group_wait_seconds      ← legacy initial_wait_seconds
    group_interval_seconds  ← DEFAULT_GROUP_INTERVAL_SECONDS (no legacy field)
    repeat_interval_seconds ← legacy repeat_interval_seconds

Targets:
    The single legacy target becomes the rule's tagged ``target``.  No target,
    or more than one legacy target field set, yields ``target=None``.
"""

from __future__ import annotations

from typing import Generic, NamedTuple, TypeVar

from alertshift.core.config.settings import DEFAULT_GROUP_INTERVAL_SECONDS
from alertshift.core.logging import get_logger
from alertshift.models import (
    ClusterAlertGroup,
    ClusterAlertGroupSpec,
    ClusterAlertRule,
    ClusterAlertRuleSpec,
    ClusterRuleTarget,
    EventRule,
    LegacyClusterAlert,
    LegacyProjectAlert,
    NodeRule,
    ObjectMeta,
    PodRule,
    ProjectAlertGroup,
    ProjectAlertGroupSpec,
    ProjectAlertRule,
    ProjectAlertRuleSpec,
    ProjectRuleTarget,
    SystemServiceRule,
    TimingField,
    WorkloadRule,
)
from alertshift.models.legacy import LegacyAlertSpec
from alertshift.refs import group_id, parse_ref

logger = get_logger(__name__)

MIGRATION_GROUP_DISPLAY_NAME = "Migrate group"
MIGRATION_GROUP_DESCRIPTION = "Migrate alert from last version"

RuleT = TypeVar("RuleT")
GroupT = TypeVar("GroupT")


class Translation(NamedTuple, Generic[RuleT, GroupT]):
    rule: RuleT
    group: GroupT


def cluster_rule_name(legacy_name: str) -> str:
    return f"migrate-{legacy_name}"


def project_rule_name(legacy_name: str) -> str:
    return f"migrate-rule-{legacy_name}"


def migration_group_name(legacy_name: str) -> str:
    return f"migrate-group-{legacy_name}"


def translate_timing(
    spec: LegacyAlertSpec, group_interval_seconds: int = DEFAULT_GROUP_INTERVAL_SECONDS
) -> TimingField:
    return TimingField(
        group_wait_seconds=spec.initial_wait_seconds,
        group_interval_seconds=group_interval_seconds,
        repeat_interval_seconds=spec.repeat_interval_seconds,
    )


def cluster_rule_target(alert: LegacyClusterAlert) -> ClusterRuleTarget | None:
    spec = alert.spec
    targets: list[ClusterRuleTarget] = []
    if spec.target_node is not None:
        targets.append(NodeRule(**spec.target_node.model_dump()))
    if spec.target_event is not None:
        targets.append(EventRule(**spec.target_event.model_dump()))
    if spec.target_system_service is not None:
        targets.append(SystemServiceRule(**spec.target_system_service.model_dump()))
    return _single(alert, targets)


def project_rule_target(alert: LegacyProjectAlert) -> ProjectRuleTarget | None:
    spec = alert.spec
    targets: list[ProjectRuleTarget] = []
    if spec.target_pod is not None:
        targets.append(PodRule(**spec.target_pod.model_dump()))
    if spec.target_workload is not None:
        targets.append(WorkloadRule(**spec.target_workload.model_dump()))
    return _single(alert, targets)


def _single(alert, targets):
    if len(targets) > 1:
        logger.warning(
            "legacy_alert_ambiguous_target",
            kind=alert.kind.value,
            namespace=alert.namespace,
            name=alert.name,
            targets=[t.type for t in targets],
        )
        return None
    return targets[0] if targets else None


def translate_cluster_alert(
    alert: LegacyClusterAlert,
    cluster_name: str,
    group_interval_seconds: int = DEFAULT_GROUP_INTERVAL_SECONDS,
) -> Translation[ClusterAlertRule, ClusterAlertGroup]:
    """Translate a legacy cluster alert owned by *cluster_name*."""
    group_name = migration_group_name(alert.name)
    timing = translate_timing(alert.spec, group_interval_seconds)

    rule = ClusterAlertRule(
        metadata=ObjectMeta(name=cluster_rule_name(alert.name), namespace=cluster_name),
        spec=ClusterAlertRuleSpec(
            cluster_name=cluster_name,
            group_name=group_id(cluster_name, group_name),
            display_name=alert.spec.display_name,
            severity=alert.spec.severity,
            timing=timing,
            target=cluster_rule_target(alert),
        ),
    )
    group = ClusterAlertGroup(
        metadata=ObjectMeta(name=group_name, namespace=cluster_name),
        spec=ClusterAlertGroupSpec(
            cluster_name=cluster_name,
            display_name=MIGRATION_GROUP_DISPLAY_NAME,
            description=MIGRATION_GROUP_DESCRIPTION,
            timing=timing.model_copy(),
            recipients=[r.model_copy() for r in alert.spec.recipients],
        ),
    )
    return Translation(rule, group)


def translate_project_alert(
    alert: LegacyProjectAlert,
    project_id: str,
    group_interval_seconds: int = DEFAULT_GROUP_INTERVAL_SECONDS,
) -> Translation[ProjectAlertRule, ProjectAlertGroup]:
    """Translate a legacy project alert owned by *project_id* (``<cluster>:<project>``)."""
    _, project_name = parse_ref(project_id)
    group_name = migration_group_name(alert.name)
    timing = translate_timing(alert.spec, group_interval_seconds)

    rule = ProjectAlertRule(
        metadata=ObjectMeta(name=project_rule_name(alert.name), namespace=project_name),
        spec=ProjectAlertRuleSpec(
            project_name=project_id,
            group_name=group_id(project_name, group_name),
            display_name=alert.spec.display_name,
            severity=alert.spec.severity,
            timing=timing,
            target=project_rule_target(alert),
        ),
    )
    group = ProjectAlertGroup(
        metadata=ObjectMeta(name=group_name, namespace=project_name),
        spec=ProjectAlertGroupSpec(
            project_name=project_id,
            display_name=MIGRATION_GROUP_DISPLAY_NAME,
            description=MIGRATION_GROUP_DESCRIPTION,
            timing=timing.model_copy(),
            recipients=[r.model_copy() for r in alert.spec.recipients],
        ),
    )
    return Translation(rule, group)
