"""Common record envelope: kinds, object metadata, and status conditions.

Every record the resource store holds is a :class:`Resource` subclass with a
class-level ``kind`` and an :class:`ObjectMeta`.  Cluster-scoped kinds set
``namespaced = False`` and are stored with an empty namespace.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class ResourceKind(str, Enum):
    """Kinds of records the upgrade reads or writes."""

    CLUSTER_ALERT = "ClusterAlert"
    PROJECT_ALERT = "ProjectAlert"
    CLUSTER_ALERT_GROUP = "ClusterAlertGroup"
    CLUSTER_ALERT_RULE = "ClusterAlertRule"
    PROJECT_ALERT_GROUP = "ProjectAlertGroup"
    PROJECT_ALERT_RULE = "ProjectAlertRule"
    NAMESPACE = "Namespace"
    APP = "App"
    CLUSTER = "Cluster"
    CATALOG = "Catalog"
    CATALOG_TEMPLATE = "CatalogTemplate"
    PROJECT = "Project"


class ObjectMeta(BaseModel):
    """Identity and server-populated bookkeeping of a record."""

    model_config = ConfigDict(extra="forbid")

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    uid: str = ""
    resource_version: str = ""
    creation_timestamp: str | None = None


class Condition(BaseModel):
    """A single status condition (``type`` is ``True``/``False``/``Unknown``)."""

    type: str
    status: str = "Unknown"
    reason: str = ""
    message: str = ""

    def is_true(self) -> bool:
        return self.status == "True"


def condition_is_true(conditions: list[Condition], condition_type: str) -> bool:
    """True if *conditions* contains *condition_type* with status ``True``."""
    for condition in conditions:
        if condition.type == condition_type:
            return condition.is_true()
    return False


class Resource(BaseModel):
    """Base for every stored record."""

    kind: ClassVar[ResourceKind]
    namespaced: ClassVar[bool] = True

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace


__all__ = [
    "Condition",
    "ObjectMeta",
    "Resource",
    "ResourceKind",
    "condition_is_true",
]
