"""Configuration for alertshift.

Quick start::

    from alertshift.core.config import get_settings, settings_source_from

    settings = get_settings()
    source = settings_source_from(settings)
    source.get("system-monitoring-catalog-id")

Architecture::

    settings.py       AlertShiftSettings (pydantic-settings) + get_settings() cache
    source.py         StaticSettingsSource + settings_source_from()
"""

from .settings import (
    DEFAULT_CATALOG_SYNC_INTERVAL_SECONDS,
    DEFAULT_GROUP_INTERVAL_SECONDS,
    DEFAULT_SYSTEM_MONITORING_CATALOG_ID,
    SYSTEM_MONITORING_CATALOG_ID_KEY,
    AlertShiftSettings,
    clear_settings_cache,
    get_settings,
)
from .source import StaticSettingsSource, settings_source_from

__all__ = [
    "DEFAULT_CATALOG_SYNC_INTERVAL_SECONDS",
    "DEFAULT_GROUP_INTERVAL_SECONDS",
    "DEFAULT_SYSTEM_MONITORING_CATALOG_ID",
    "SYSTEM_MONITORING_CATALOG_ID_KEY",
    "AlertShiftSettings",
    "StaticSettingsSource",
    "clear_settings_cache",
    "get_settings",
    "settings_source_from",
]
