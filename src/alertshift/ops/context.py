"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument.  The context carries the resource store, the target cluster, the
settings, caller identity, and arbitrary metadata.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from alertshift.core.config.settings import AlertShiftSettings, get_settings
from alertshift.core.protocols import ResourceStore, SettingsSource


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        store: Resource store satisfying :class:`alertshift.core.protocols.ResourceStore`.
        cluster_name: Cluster the operation acts on (defaults to ``settings.cluster_name``).
        settings: Static configuration (defaults to the cached ``get_settings()``).
        settings_source: Live keyed settings; derived from *settings* when omitted.
        request_id: Unique ID for this operation invocation (auto-generated).
        caller: Origin of the request, e.g. ``"controller"`` or ``"sdk"``.
        metadata: Arbitrary key/value pairs forwarded to logging.
    """

    store: ResourceStore
    cluster_name: str | None = None
    settings: AlertShiftSettings = field(default_factory=get_settings)
    settings_source: SettingsSource | None = None
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def cluster(self) -> str:
        return self.cluster_name or self.settings.cluster_name
