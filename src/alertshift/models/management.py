"""Cluster management records the upgrade reads: clusters, catalogs,
templates, projects, namespaces, and the deployed application."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, Field

from alertshift.models.meta import Condition, Resource, ResourceKind

CLUSTER_CONDITION_READY = "Ready"
CATALOG_CONDITION_UPGRADED = "Upgraded"
CATALOG_CONDITION_REFRESHED = "Refreshed"
CATALOG_CONDITION_DISK_CACHED = "DiskCached"


class Status(BaseModel):
    conditions: list[Condition] = Field(default_factory=list)


class Cluster(Resource):
    kind: ClassVar[ResourceKind] = ResourceKind.CLUSTER
    namespaced: ClassVar[bool] = False

    status: Status = Field(default_factory=Status)


class CatalogSpec(BaseModel):
    url: str = ""
    branch: str = ""


class Catalog(Resource):
    kind: ClassVar[ResourceKind] = ResourceKind.CATALOG
    namespaced: ClassVar[bool] = False

    spec: CatalogSpec = Field(default_factory=CatalogSpec)
    status: Status = Field(default_factory=Status)


class TemplateSpec(BaseModel):
    display_name: str = ""
    catalog_id: str = ""
    default_version: str = ""


class CatalogTemplate(Resource):
    kind: ClassVar[ResourceKind] = ResourceKind.CATALOG_TEMPLATE

    spec: TemplateSpec = Field(default_factory=TemplateSpec)


class ProjectSpec(BaseModel):
    display_name: str = ""
    cluster_name: str = ""


class Project(Resource):
    kind: ClassVar[ResourceKind] = ResourceKind.PROJECT

    spec: ProjectSpec = Field(default_factory=ProjectSpec)


class Namespace(Resource):
    kind: ClassVar[ResourceKind] = ResourceKind.NAMESPACE
    namespaced: ClassVar[bool] = False


class AppSpec(BaseModel):
    project_name: str = ""
    target_namespace: str = ""
    external_id: str = ""
    answers: dict[str, str] = Field(default_factory=dict)


class App(Resource):
    kind: ClassVar[ResourceKind] = ResourceKind.APP

    spec: AppSpec = Field(default_factory=AppSpec)
