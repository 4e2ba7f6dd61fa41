"""Removal of the legacy alerting footprint."""

from __future__ import annotations

from alertshift.core.errors import MigrationError, NotFoundError, StoreError
from alertshift.core.logging import get_logger
from alertshift.core.protocols import ResourceStore
from alertshift.models import ResourceKind

logger = get_logger(__name__)

LEGACY_ALERTMANAGER_NAMESPACE = "cattle-alerting"


def remove_legacy_alerting(
    store: ResourceStore, namespace: str = LEGACY_ALERTMANAGER_NAMESPACE
) -> bool:
    """Delete the legacy alertmanager namespace.

    Returns True if it was deleted, False if it was already gone.
    """
    try:
        store.delete(ResourceKind.NAMESPACE, None, namespace)
    except NotFoundError:
        logger.debug("legacy_namespace_absent", namespace=namespace)
        return False
    except StoreError as exc:
        raise MigrationError(
            "failed to remove legacy alerting namespace when upgrade", cause=exc
        ).with_context(kind=ResourceKind.NAMESPACE.value, name=namespace)
    logger.info("legacy_namespace_removed", namespace=namespace)
    return True
