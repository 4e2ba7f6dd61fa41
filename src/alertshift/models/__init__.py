"""Typed records (pydantic v2) for legacy alerts, groups/rules, and the
cluster management objects the upgrade consults."""

from alertshift.models.alerting import (
    ClusterAlertGroup,
    ClusterAlertGroupSpec,
    ClusterAlertRule,
    ClusterAlertRuleSpec,
    ClusterRuleTarget,
    EventRule,
    NodeRule,
    PodRule,
    ProjectAlertGroup,
    ProjectAlertGroupSpec,
    ProjectAlertRule,
    ProjectAlertRuleSpec,
    ProjectRuleTarget,
    Recipient,
    SystemServiceRule,
    TimingField,
    WorkloadRule,
)
from alertshift.models.legacy import (
    LegacyClusterAlert,
    LegacyClusterAlertSpec,
    LegacyProjectAlert,
    LegacyProjectAlertSpec,
    TargetEvent,
    TargetNode,
    TargetPod,
    TargetSystemService,
    TargetWorkload,
)
from alertshift.models.management import (
    CATALOG_CONDITION_DISK_CACHED,
    CATALOG_CONDITION_REFRESHED,
    CATALOG_CONDITION_UPGRADED,
    CLUSTER_CONDITION_READY,
    App,
    AppSpec,
    Catalog,
    CatalogTemplate,
    Cluster,
    Namespace,
    Project,
    ProjectSpec,
    Status,
    TemplateSpec,
)
from alertshift.models.meta import (
    Condition,
    ObjectMeta,
    Resource,
    ResourceKind,
    condition_is_true,
)

__all__ = [
    # meta
    "Condition",
    "ObjectMeta",
    "Resource",
    "ResourceKind",
    "condition_is_true",
    # legacy
    "LegacyClusterAlert",
    "LegacyClusterAlertSpec",
    "LegacyProjectAlert",
    "LegacyProjectAlertSpec",
    "TargetEvent",
    "TargetNode",
    "TargetPod",
    "TargetSystemService",
    "TargetWorkload",
    # alerting
    "ClusterAlertGroup",
    "ClusterAlertGroupSpec",
    "ClusterAlertRule",
    "ClusterAlertRuleSpec",
    "ClusterRuleTarget",
    "EventRule",
    "NodeRule",
    "PodRule",
    "ProjectAlertGroup",
    "ProjectAlertGroupSpec",
    "ProjectAlertRule",
    "ProjectAlertRuleSpec",
    "ProjectRuleTarget",
    "Recipient",
    "SystemServiceRule",
    "TimingField",
    "WorkloadRule",
    # management
    "CATALOG_CONDITION_DISK_CACHED",
    "CATALOG_CONDITION_REFRESHED",
    "CATALOG_CONDITION_UPGRADED",
    "CLUSTER_CONDITION_READY",
    "App",
    "AppSpec",
    "Catalog",
    "CatalogTemplate",
    "Cluster",
    "Namespace",
    "Project",
    "ProjectSpec",
    "Status",
    "TemplateSpec",
]

RESOURCE_TYPES: dict[ResourceKind, type[Resource]] = {
    cls.kind: cls
    for cls in (
        LegacyClusterAlert,
        LegacyProjectAlert,
        ClusterAlertGroup,
        ClusterAlertRule,
        ProjectAlertGroup,
        ProjectAlertRule,
        Namespace,
        App,
        Cluster,
        Catalog,
        CatalogTemplate,
        Project,
    )
}

__all__.append("RESOURCE_TYPES")
