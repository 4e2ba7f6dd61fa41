"""
Shared pytest fixtures and configuration for alertshift tests.

This module provides:
- A seeded in-memory resource store describing one healthy cluster ("c-1")
  with its system project, monitoring catalog/template, and deployed
  alerting application
- Settings and settings-source fixtures
- Factories for legacy alerts

Usage:
    def test_something(store, upgrader, make_cluster_alert):
        store.create(make_cluster_alert("high-cpu"))
        upgrader.upgrade("0.0.1")
"""

import sys
from pathlib import Path

import pytest

# Ensure alertshift package and tests._support are importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from alertshift.core.config import (
    SYSTEM_MONITORING_CATALOG_ID_KEY,
    AlertShiftSettings,
    StaticSettingsSource,
    clear_settings_cache,
)
from alertshift.models import (
    CatalogTemplate,
    LegacyClusterAlert,
    LegacyClusterAlertSpec,
    LegacyProjectAlert,
    LegacyProjectAlertSpec,
    Namespace,
    ObjectMeta,
    Project,
    ProjectSpec,
    Recipient,
    TemplateSpec,
)
from alertshift.store import InMemoryResourceStore
from alertshift.upgrade import AlertUpgrader

from tests._support.records import (
    CATALOG,
    CATALOG_ID,
    CLUSTER,
    DEFAULT_VERSION,
    SYSTEM_PROJECT,
    alerting_app,
    ready_catalog,
    ready_cluster,
)


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "integration" in str(test_path):
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def clean_settings_cache():
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Record factories
# =============================================================================


@pytest.fixture
def make_cluster_alert():
    """Factory fixture for legacy cluster alerts in cluster ``c-1``."""

    def _make(name: str, *, recipients=("a@x.com",), initial_wait=30, repeat=300, **targets):
        return LegacyClusterAlert(
            metadata=ObjectMeta(name=name, namespace=CLUSTER),
            spec=LegacyClusterAlertSpec(
                cluster_name=CLUSTER,
                display_name=f"{name} alert",
                severity="warning",
                initial_wait_seconds=initial_wait,
                repeat_interval_seconds=repeat,
                recipients=[Recipient(recipient=r, notifier_name="n-1") for r in recipients],
                **targets,
            ),
        )

    return _make


@pytest.fixture
def make_project_alert():
    """Factory fixture for legacy project alerts (``project_id`` is ``<cluster>:<project>``)."""

    def _make(name: str, project_id: str = f"{CLUSTER}:p-app", *, recipients=("b@x.com",), **targets):
        return LegacyProjectAlert(
            metadata=ObjectMeta(name=name, namespace=project_id.partition(":")[2]),
            spec=LegacyProjectAlertSpec(
                project_name=project_id,
                display_name=f"{name} alert",
                initial_wait_seconds=60,
                repeat_interval_seconds=3600,
                recipients=[Recipient(recipient=r) for r in recipients],
                **targets,
            ),
        )

    return _make


# =============================================================================
# Store / upgrader fixtures
# =============================================================================


@pytest.fixture
def settings() -> AlertShiftSettings:
    return AlertShiftSettings(cluster_name=CLUSTER, system_monitoring_catalog_id=CATALOG_ID)


@pytest.fixture
def settings_source() -> StaticSettingsSource:
    return StaticSettingsSource({SYSTEM_MONITORING_CATALOG_ID_KEY: CATALOG_ID})


@pytest.fixture
def empty_store() -> InMemoryResourceStore:
    return InMemoryResourceStore()


@pytest.fixture
def store() -> InMemoryResourceStore:
    """One ready cluster with monitoring catalog, system project, and alerting app."""
    return InMemoryResourceStore(
        [
            ready_cluster(),
            ready_catalog(),
            CatalogTemplate(
                metadata=ObjectMeta(
                    name="system-library-rancher-monitoring", namespace="cattle-global-data"
                ),
                spec=TemplateSpec(
                    display_name="rancher-monitoring",
                    catalog_id=CATALOG,
                    default_version=DEFAULT_VERSION,
                ),
            ),
            Project(
                metadata=ObjectMeta(
                    name=SYSTEM_PROJECT,
                    namespace=CLUSTER,
                    labels={"authz.management.cattle.io/system-project": "true"},
                ),
                spec=ProjectSpec(display_name="System", cluster_name=CLUSTER),
            ),
            Project(
                metadata=ObjectMeta(name="p-app", namespace=CLUSTER),
                spec=ProjectSpec(display_name="Default", cluster_name=CLUSTER),
            ),
            Namespace(metadata=ObjectMeta(name="cattle-alerting")),
            alerting_app(),
        ]
    )


@pytest.fixture
def upgrader(store, settings_source, settings) -> AlertUpgrader:
    return AlertUpgrader(store, CLUSTER, settings_source, settings=settings)
