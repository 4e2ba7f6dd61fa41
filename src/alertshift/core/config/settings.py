"""
Centralized settings for alertshift.

:class:`AlertShiftSettings` is the single validated source for the names and
constants the upgrade depends on: the system monitoring catalog reference,
the legacy namespace, the application name, the migration marker, and the
default alert group interval.  Values come from ``ALERTSHIFT_*`` environment
variables or a ``.env`` file.

Tags:
    configuration, settings, pydantic, caching, validation

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GROUP_INTERVAL_SECONDS = 180
DEFAULT_CATALOG_SYNC_INTERVAL_SECONDS = 60
DEFAULT_SYSTEM_MONITORING_CATALOG_ID = (
    "catalog://?catalog=system-library&template=rancher-monitoring&version=0.0.3"
)
SYSTEM_MONITORING_CATALOG_ID_KEY = "system-monitoring-catalog-id"


class AlertShiftSettings(BaseSettings):
    """alertshift configuration.

    All fields can be set via ``ALERTSHIFT_*`` environment variables (e.g.
    ``ALERTSHIFT_CLUSTER_NAME=c-abc12``) or through a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="ALERTSHIFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Target cluster ───────────────────────────────────────────
    cluster_name: str = Field(default="local")

    # ── Catalog ──────────────────────────────────────────────────
    system_monitoring_catalog_id: str = Field(default=DEFAULT_SYSTEM_MONITORING_CATALOG_ID)
    catalog_sync_interval_seconds: int = Field(
        default=DEFAULT_CATALOG_SYNC_INTERVAL_SECONDS,
        description="Suggested wait before re-invoking an upgrade blocked on readiness",
    )

    # ── Migration ────────────────────────────────────────────────
    group_interval_seconds: int = Field(default=DEFAULT_GROUP_INTERVAL_SECONDS)
    legacy_namespace: str = Field(default="cattle-alerting")
    migrated_marker: str = Field(
        default="system-library-rancher-monitoring",
        description="Substring of a previous version that means legacy data is already migrated",
    )

    # ── Application ──────────────────────────────────────────────
    service_name: str = Field(default="alerting")
    app_name: str = Field(default="cluster-alerting")
    operator_answer_key: str = Field(default="operator.enabled")
    system_project_label: dict[str, str] = Field(
        default={"authz.management.cattle.io/system-project": "true"}
    )

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    @field_validator("group_interval_seconds", "catalog_sync_interval_seconds")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive number of seconds")
        return value

    @field_validator("log_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        if value not in ("json", "console"):
            raise ValueError("log_format must be 'json' or 'console'")
        return value


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, AlertShiftSettings] = {}


def get_settings(*, _force_reload: bool = False) -> AlertShiftSettings:
    """Load, validate, and cache an :class:`AlertShiftSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]

    settings = AlertShiftSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()
