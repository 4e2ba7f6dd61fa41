"""
Upgrade operations.

Wraps :class:`~alertshift.upgrade.AlertUpgrader` for callers that want an
envelope rather than exceptions (a controller loop deciding whether to
requeue, an API handler).  Errors map to codes:

    PreconditionNotMetError  → PRECONDITION_NOT_MET  (retryable)
    ConfigError              → CONFIG
    ResourceLookupError      → NOT_FOUND
    MigrationError           → MIGRATION_FAILED
    UpgradeError             → UPGRADE_FAILED
    other AlertShiftError    → INTERNAL
"""

from __future__ import annotations

from typing import Any

from alertshift.core.config.source import settings_source_from
from alertshift.core.errors import (
    AlertShiftError,
    ConfigError,
    MigrationError,
    PreconditionNotMetError,
    ResourceLookupError,
    UpgradeError,
)
from alertshift.core.logging import get_logger
from alertshift.ops.context import OperationContext
from alertshift.ops.result import OperationError, OperationResult, start_timer
from alertshift.upgrade import AlertUpgrader

logger = get_logger(__name__)

_ERROR_CODES: list[tuple[type[AlertShiftError], str]] = [
    (PreconditionNotMetError, "PRECONDITION_NOT_MET"),
    (ConfigError, "CONFIG"),
    (ResourceLookupError, "NOT_FOUND"),
    (MigrationError, "MIGRATION_FAILED"),
    (UpgradeError, "UPGRADE_FAILED"),
]


def _upgrader(ctx: OperationContext) -> AlertUpgrader:
    return AlertUpgrader(
        ctx.store,
        ctx.cluster,
        ctx.settings_source or settings_source_from(ctx.settings),
        settings=ctx.settings,
    )


def _error_code(exc: AlertShiftError) -> str:
    for error_type, code in _ERROR_CODES:
        if isinstance(exc, error_type):
            return code
    return "INTERNAL"


def _fail(exc: AlertShiftError, elapsed_ms: float, metadata: dict[str, Any]) -> OperationResult:
    return OperationResult.fail(
        OperationError.from_exception(_error_code(exc), exc),
        elapsed_ms=elapsed_ms,
        metadata=metadata,
    )


def run_upgrade(ctx: OperationContext, previous_version: str) -> OperationResult[dict]:
    """Run one upgrade pass for ``ctx.cluster``."""
    timer = start_timer()
    metadata = {"request_id": ctx.request_id, "cluster": ctx.cluster, **ctx.metadata}

    try:
        upgrader = _upgrader(ctx)
        new_version = upgrader.upgrade(previous_version)
    except AlertShiftError as exc:
        logger.warning("upgrade_failed", caller=ctx.caller, **exc.to_dict())
        return _fail(exc, timer.elapsed_ms, metadata)

    return OperationResult.ok(
        {
            "service": upgrader.name,
            "previous_version": previous_version,
            "version": new_version,
        },
        elapsed_ms=timer.elapsed_ms,
        metadata=metadata,
    )


def current_version(ctx: OperationContext) -> OperationResult[str]:
    """Report the version the upgrade would consider current."""
    timer = start_timer()
    try:
        version = _upgrader(ctx).version()
    except AlertShiftError as exc:
        logger.warning("version_lookup_failed", caller=ctx.caller, **exc.to_dict())
        return _fail(exc, timer.elapsed_ms, {"request_id": ctx.request_id})
    return OperationResult.ok(version, elapsed_ms=timer.elapsed_ms)
