"""Legacy single-resource alert records.

These are read during migration and never written.  Each legacy alert keeps
its target as a set of independently optional fields; at most one of them is
expected to be set.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, Field

from alertshift.models.alerting import Recipient
from alertshift.models.meta import Resource, ResourceKind


class TargetNode(BaseModel):
    node_name: str = ""
    selector: dict[str, str] = Field(default_factory=dict)
    condition: str = ""
    mem_threshold: int = 0
    cpu_threshold: int = 0


class TargetEvent(BaseModel):
    event_type: str = ""
    resource_kind: str = ""


class TargetSystemService(BaseModel):
    condition: str = ""


class TargetPod(BaseModel):
    pod_name: str = ""
    condition: str = ""
    restart_times: int = 0
    restart_interval_seconds: int = 0


class TargetWorkload(BaseModel):
    workload_id: str = ""
    selector: dict[str, str] = Field(default_factory=dict)
    available_percentage: int = 0


class LegacyAlertSpec(BaseModel):
    """Fields shared by cluster and project legacy alerts."""

    display_name: str = ""
    description: str = ""
    severity: str = "critical"
    initial_wait_seconds: int = 0
    repeat_interval_seconds: int = 0
    recipients: list[Recipient] = Field(default_factory=list)


class LegacyClusterAlertSpec(LegacyAlertSpec):
    cluster_name: str = ""
    target_node: TargetNode | None = None
    target_event: TargetEvent | None = None
    target_system_service: TargetSystemService | None = None


class LegacyProjectAlertSpec(LegacyAlertSpec):
    # "<cluster>:<project>"
    project_name: str = ""
    target_pod: TargetPod | None = None
    target_workload: TargetWorkload | None = None


class LegacyClusterAlert(Resource):
    kind: ClassVar[ResourceKind] = ResourceKind.CLUSTER_ALERT

    spec: LegacyClusterAlertSpec = Field(default_factory=LegacyClusterAlertSpec)


class LegacyProjectAlert(Resource):
    kind: ClassVar[ResourceKind] = ResourceKind.PROJECT_ALERT

    spec: LegacyProjectAlertSpec = Field(default_factory=LegacyProjectAlertSpec)
