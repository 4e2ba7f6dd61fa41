"""Tests for alertshift.core.config — AlertShiftSettings, get_settings, settings sources."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from alertshift.core.config import (
    DEFAULT_GROUP_INTERVAL_SECONDS,
    DEFAULT_SYSTEM_MONITORING_CATALOG_ID,
    SYSTEM_MONITORING_CATALOG_ID_KEY,
    AlertShiftSettings,
    StaticSettingsSource,
    clear_settings_cache,
    get_settings,
    settings_source_from,
)
from alertshift.core.errors import MissingConfigError


@pytest.fixture(autouse=True)
def _clear_cache():
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestDefaults:
    def test_group_interval(self):
        assert AlertShiftSettings().group_interval_seconds == DEFAULT_GROUP_INTERVAL_SECONDS == 180

    def test_catalog_id(self):
        assert AlertShiftSettings().system_monitoring_catalog_id == DEFAULT_SYSTEM_MONITORING_CATALOG_ID

    def test_names(self):
        s = AlertShiftSettings()
        assert s.legacy_namespace == "cattle-alerting"
        assert s.app_name == "cluster-alerting"
        assert s.migrated_marker == "system-library-rancher-monitoring"
        assert s.operator_answer_key == "operator.enabled"
        assert s.system_project_label == {"authz.management.cattle.io/system-project": "true"}
        assert s.catalog_sync_interval_seconds == 60


class TestEnvironment:
    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("ALERTSHIFT_CLUSTER_NAME", "c-abc12")
        monkeypatch.setenv("ALERTSHIFT_GROUP_INTERVAL_SECONDS", "90")
        s = AlertShiftSettings()
        assert s.cluster_name == "c-abc12"
        assert s.group_interval_seconds == 90

    def test_label_from_json(self, monkeypatch):
        monkeypatch.setenv("ALERTSHIFT_SYSTEM_PROJECT_LABEL", '{"tier": "system"}')
        assert AlertShiftSettings().system_project_label == {"tier": "system"}

    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValidationError):
            AlertShiftSettings(group_interval_seconds=0)

    def test_rejects_unknown_log_format(self):
        with pytest.raises(ValidationError):
            AlertShiftSettings(log_format="xml")


class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_force_reload(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("ALERTSHIFT_CLUSTER_NAME", "c-new")
        assert get_settings() is first
        assert get_settings(_force_reload=True).cluster_name == "c-new"


class TestSettingsSource:
    def test_static_get(self):
        source = StaticSettingsSource({"a": "1"})
        assert source.get("a") == "1"

    def test_missing_and_empty_raise(self):
        source = StaticSettingsSource({"empty": ""})
        with pytest.raises(MissingConfigError):
            source.get("empty")
        with pytest.raises(MissingConfigError):
            source.get("absent")

    def test_set(self):
        source = StaticSettingsSource()
        source.set("k", "v")
        assert source.get("k") == "v"

    def test_from_settings(self):
        s = AlertShiftSettings(system_monitoring_catalog_id="catalog://?catalog=a&template=b&version=1")
        source = settings_source_from(s)
        assert source.get(SYSTEM_MONITORING_CATALOG_ID_KEY) == s.system_monitoring_catalog_id
