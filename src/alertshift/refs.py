"""Reference helpers: catalog external ids, group ids, and scoped ids.

An application's external id is a compact URL naming the catalog, template,
and version it was installed from::

    catalog://?catalog=system-library&template=rancher-monitoring&version=0.0.3

Catalogs may be namespaced (``catalog=<namespace>/<name>``).  Global catalogs
predate namespacing and omit it; their templates live in
:data:`GLOBAL_NAMESPACE`.
"""

from __future__ import annotations

from typing import NamedTuple
from urllib.parse import parse_qs, urlparse

from alertshift.core.errors import InvalidConfigError

GLOBAL_NAMESPACE = "cattle-global-data"


class ExternalRef(NamedTuple):
    namespace: str
    catalog: str
    catalog_type: str
    template: str
    version: str


def split_external_id(external_id: str) -> ExternalRef:
    """Split *external_id* into its structured parts.

    Raises:
        InvalidConfigError: if the value is not a ``catalog://`` reference
            naming a catalog and a template.
    """
    parsed = urlparse(external_id)
    if parsed.scheme != "catalog":
        raise InvalidConfigError("external_id", external_id)

    query = parse_qs(parsed.query)

    def first(key: str) -> str:
        return query.get(key, [""])[0]

    catalog_with_namespace = first("catalog")
    template = first("template")
    if not catalog_with_namespace or not template:
        raise InvalidConfigError("external_id", external_id)

    namespace, _, catalog = catalog_with_namespace.partition("/")
    if not catalog:
        namespace, catalog = GLOBAL_NAMESPACE, catalog_with_namespace

    return ExternalRef(
        namespace=namespace,
        catalog=catalog,
        catalog_type=first("type"),
        template=template,
        version=first("version"),
    )


def parse_external_id(external_id: str) -> tuple[str, str]:
    """Return ``(template_version_id, namespace)`` for *external_id*.

    The template version id is ``<catalog>-<template>-<version>``.
    """
    ref = split_external_id(external_id)
    return f"{ref.catalog}-{ref.template}-{ref.version}", ref.namespace


def build_external_id(catalog: str, template: str, version: str) -> str:
    """Format an external id; values are written as-is, not percent-encoded."""
    return f"catalog://?catalog={catalog}&template={template}&version={version}"


def template_id(catalog: str, template: str) -> str:
    return f"{catalog}-{template}"


def group_id(scope: str, group_name: str) -> str:
    """Composite id a rule uses to reference its group."""
    return f"{scope}:{group_name}"


def parse_ref(ref: str) -> tuple[str, str]:
    """Split ``"c-abc:p-xyz"`` into ``("c-abc", "p-xyz")``.

    A value without a separator is a bare name with no namespace.
    """
    namespace, sep, name = ref.partition(":")
    if not sep:
        return "", ref
    return namespace, name


def in_cluster(scoped_id: str, cluster_name: str) -> bool:
    """True if the ``<cluster>:<name>`` id belongs to *cluster_name*."""
    namespace, _ = parse_ref(scoped_id)
    return namespace == cluster_name
