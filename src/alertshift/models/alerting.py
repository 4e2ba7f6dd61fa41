"""Group/rule alerting records.

Rules carry their target as a single tagged value (discriminated on
``type``), so a rule can watch nodes, events, or a system service (cluster
rules) or pods or a workload (project rules), but never two at once.
"""

from __future__ import annotations

from typing import Annotated, ClassVar, Literal

from pydantic import BaseModel, Field

from alertshift.models.meta import Resource, ResourceKind


class Recipient(BaseModel):
    """Notification target, copied verbatim during migration."""

    recipient: str = ""
    notifier_name: str = ""
    notifier_type: str = ""


class TimingField(BaseModel):
    group_wait_seconds: int = 0
    group_interval_seconds: int = 0
    repeat_interval_seconds: int = 0


# ── Rule targets ─────────────────────────────────────────────────────────


class NodeRule(BaseModel):
    type: Literal["node"] = "node"
    node_name: str = ""
    selector: dict[str, str] = Field(default_factory=dict)
    condition: str = ""
    mem_threshold: int = 0
    cpu_threshold: int = 0


class EventRule(BaseModel):
    type: Literal["event"] = "event"
    event_type: str = ""
    resource_kind: str = ""


class SystemServiceRule(BaseModel):
    type: Literal["system_service"] = "system_service"
    condition: str = ""


class PodRule(BaseModel):
    type: Literal["pod"] = "pod"
    pod_name: str = ""
    condition: str = ""
    restart_times: int = 0
    restart_interval_seconds: int = 0


class WorkloadRule(BaseModel):
    type: Literal["workload"] = "workload"
    workload_id: str = ""
    selector: dict[str, str] = Field(default_factory=dict)
    available_percentage: int = 0


ClusterRuleTarget = Annotated[
    NodeRule | EventRule | SystemServiceRule, Field(discriminator="type")
]
ProjectRuleTarget = Annotated[PodRule | WorkloadRule, Field(discriminator="type")]


# ── Groups ───────────────────────────────────────────────────────────────


class GroupSpec(BaseModel):
    display_name: str = ""
    description: str = ""
    timing: TimingField = Field(default_factory=TimingField)
    recipients: list[Recipient] = Field(default_factory=list)


class ClusterAlertGroupSpec(GroupSpec):
    cluster_name: str = ""


class ProjectAlertGroupSpec(GroupSpec):
    project_name: str = ""


class ClusterAlertGroup(Resource):
    kind: ClassVar[ResourceKind] = ResourceKind.CLUSTER_ALERT_GROUP

    spec: ClusterAlertGroupSpec = Field(default_factory=ClusterAlertGroupSpec)


class ProjectAlertGroup(Resource):
    kind: ClassVar[ResourceKind] = ResourceKind.PROJECT_ALERT_GROUP

    spec: ProjectAlertGroupSpec = Field(default_factory=ProjectAlertGroupSpec)


# ── Rules ────────────────────────────────────────────────────────────────


class RuleSpec(BaseModel):
    # "<scope>:<group name>"
    group_name: str = ""
    display_name: str = ""
    severity: str = "critical"
    timing: TimingField = Field(default_factory=TimingField)


class ClusterAlertRuleSpec(RuleSpec):
    cluster_name: str = ""
    target: ClusterRuleTarget | None = None


class ProjectAlertRuleSpec(RuleSpec):
    project_name: str = ""
    target: ProjectRuleTarget | None = None


class ClusterAlertRule(Resource):
    kind: ClassVar[ResourceKind] = ResourceKind.CLUSTER_ALERT_RULE

    spec: ClusterAlertRuleSpec = Field(default_factory=ClusterAlertRuleSpec)


class ProjectAlertRule(Resource):
    kind: ClassVar[ResourceKind] = ResourceKind.PROJECT_ALERT_RULE

    spec: ProjectAlertRuleSpec = Field(default_factory=ProjectAlertRuleSpec)
