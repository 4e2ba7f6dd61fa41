"""Key/value settings sources consumed by the upgrade orchestrator.

The orchestrator reads live settings by key at call time (the catalog id can
change between invocations), so it depends on the small
:class:`~alertshift.core.protocols.SettingsSource` contract rather than on a
settings object captured at construction.
"""

from __future__ import annotations

from collections.abc import Mapping

from alertshift.core.config.settings import (
    SYSTEM_MONITORING_CATALOG_ID_KEY,
    AlertShiftSettings,
)
from alertshift.core.errors import MissingConfigError


class StaticSettingsSource:
    """Settings source backed by a plain mapping."""

    def __init__(self, values: Mapping[str, str] | None = None):
        self._values = dict(values or {})

    def get(self, key: str) -> str:
        value = self._values.get(key, "")
        if not value:
            raise MissingConfigError(key)
        return value

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


def settings_source_from(settings: AlertShiftSettings) -> StaticSettingsSource:
    """Expose the keyed values of *settings* as a settings source."""
    return StaticSettingsSource(
        {SYSTEM_MONITORING_CATALOG_ID_KEY: settings.system_monitoring_catalog_id}
    )
