"""Tests for alertshift.migration.cleanup."""

import pytest

from alertshift.core.errors import MigrationError, NotFoundError, StoreError
from alertshift.migration.cleanup import remove_legacy_alerting
from alertshift.models import LegacyClusterAlert, ObjectMeta, ResourceKind
from tests._support.fault_injection import FaultyStore


def test_removes_namespace_and_contents(store):
    store.create(LegacyClusterAlert(metadata=ObjectMeta(name="stray", namespace="cattle-alerting")))

    assert remove_legacy_alerting(store) is True

    with pytest.raises(NotFoundError):
        store.get(ResourceKind.NAMESPACE, None, "cattle-alerting")
    assert store.list(ResourceKind.CLUSTER_ALERT, "cattle-alerting") == []


def test_absent_namespace_is_success(empty_store):
    assert remove_legacy_alerting(empty_store) is False


def test_custom_namespace(store):
    assert remove_legacy_alerting(store, "does-not-exist") is False
    assert remove_legacy_alerting(store, "cattle-alerting") is True


def test_other_failures_surface(store):
    faulty = FaultyStore(store)
    faulty.install_fault("delete", ResourceKind.NAMESPACE, StoreError("forbidden", retryable=False))

    with pytest.raises(MigrationError, match="failed to remove legacy alerting namespace") as exc_info:
        remove_legacy_alerting(faulty)
    assert exc_info.value.retryable is False
    assert isinstance(exc_info.value.cause, StoreError)
