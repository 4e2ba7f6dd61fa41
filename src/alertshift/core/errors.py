"""
Structured error types for alertshift.

Provides a small hierarchy of typed errors with metadata for retry decisions,
error categorization, and root cause analysis through error chaining.

Instead of bare exceptions whose only distinguishing feature is their message
text, every AlertShiftError carries:
- **Category:** What kind of error (store, config, precondition, ...)
- **Retryable:** Whether re-invoking the upgrade later may succeed
- **Retry-after:** How long the caller should wait before re-invoking
- **Context:** Structured metadata (cluster, kind, namespace, name, ...)
- **Cause:** Chained underlying exception

Manifesto:
    - **Typed Error Hierarchy:** A "not ready yet" condition and a broken store
      are different failures and callers must be able to tell them apart
      without parsing messages.
    - **Explicit Retry Semantics:** Each error knows if it's retryable
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                      AlertShiftError                         │
        │  (category, retryable, retry_after, context, cause)          │
        ├──────────────────────────────────────────────────────────────┤
        │                                                              │
        │  StoreError            ConfigError         UpgradeError      │
        │  (STORE, retryable)    (CONFIG)            (UPGRADE)         │
        │       │                    │                   │             │
        │  NotFoundError         MissingConfigError  MigrationError    │
        │  AlreadyExistsError    InvalidConfigError                    │
        │  ConflictError                                               │
        │                                                              │
        │  ResourceLookupError   PreconditionNotMetError               │
        │  (LOOKUP)              (PRECONDITION, retryable)             │
        └──────────────────────────────────────────────────────────────┘

Examples:
    >>> error = PreconditionNotMetError("cluster c-1 not ready", subject="cluster")
    >>> error.retryable
    True
    >>> error.subject
    'cluster'

    >>> try:
    ...     raise ConnectionError("connection reset")
    ... except ConnectionError as e:
    ...     raise StoreError("create rule failed", cause=e)
    Traceback (most recent call last):
    ...
    StoreError: create rule failed

Guardrails:
    ❌ DON'T: Raise a plain Exception from the store or the orchestrator
    ✅ DO: Use the matching AlertShiftError subclass

    ❌ DON'T: Swallow the original exception when wrapping
    ✅ DO: Pass it as cause= for error chaining

Tags:
    error-handling, exception-hierarchy, retry-logic, error-context
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    Attributes:
        STORE: Resource store failures (transport, server errors, conflicts)
        LOOKUP: A required record could not be resolved
        CONFIG: Missing or malformed settings
        PRECONDITION: Supporting infrastructure not ready yet
        MIGRATION: Legacy alert migration or cleanup failed
        UPGRADE: Application upgrade failed
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    STORE = "STORE"
    LOOKUP = "LOOKUP"
    CONFIG = "CONFIG"
    PRECONDITION = "PRECONDITION"
    MIGRATION = "MIGRATION"
    UPGRADE = "UPGRADE"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Typed fields cover the identifiers every alertshift failure is about:
    which cluster, and which record (kind/namespace/name). Anything else
    goes in ``metadata``.

    Examples:
        >>> ctx = ErrorContext(cluster="c-1", kind="ClusterAlertRule", name="migrate-x")
        >>> ctx.to_dict()
        {'cluster': 'c-1', 'kind': 'ClusterAlertRule', 'name': 'migrate-x'}
    """

    cluster: str | None = None
    kind: str | None = None
    namespace: str | None = None
    name: str | None = None
    step: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["cluster", "kind", "namespace", "name", "step"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class AlertShiftError(Exception):
    """
    Base exception for all alertshift errors.

    Subclasses set ``default_category`` and ``default_retryable`` to give
    their domain sensible defaults; both can be overridden per instance.

    Examples:
        >>> error = AlertShiftError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.retryable
        False

        >>> error = AlertShiftError("get rule failed").with_context(
        ...     kind="ClusterAlertRule", name="migrate-high-cpu"
        ... )
        >>> error.context.name
        'migrate-high-cpu'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        retry_after: int | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.retry_after = retry_after
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> AlertShiftError:
        """
        Add context to this error (fluent API).

        Usage:
            raise StoreError("update failed").with_context(
                kind="App", namespace="p-sys", name="cluster-alerting"
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        if self.retry_after is not None:
            result["retry_after"] = self.retry_after
        if self.context:
            context_dict = self.context.to_dict()
            if context_dict:
                result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# STORE ERRORS
# =============================================================================


class StoreError(AlertShiftError):
    """
    Resource store call failed.

    Anything the store reports that is not one of the well-known conditions
    below. Retryable: the surrounding reconciliation loop re-invokes the
    upgrade later and idempotence makes that safe.
    """

    default_category = ErrorCategory.STORE
    default_retryable = True


class NotFoundError(StoreError):
    """Requested record does not exist."""

    default_retryable = False

    def __init__(self, kind: str, namespace: str | None, name: str, message: str | None = None):
        target = f"{namespace}:{name}" if namespace else name
        super().__init__(
            message or f"{kind} {target} not found",
            context=ErrorContext(kind=kind, namespace=namespace, name=name),
        )


class AlreadyExistsError(StoreError):
    """A record with the same identity already exists."""

    default_retryable = False

    def __init__(self, kind: str, namespace: str | None, name: str, message: str | None = None):
        target = f"{namespace}:{name}" if namespace else name
        super().__init__(
            message or f"{kind} {target} already exists",
            context=ErrorContext(kind=kind, namespace=namespace, name=name),
        )


class ConflictError(StoreError):
    """Update was based on a stale resource version."""


# =============================================================================
# CONFIGURATION / LOOKUP ERRORS (never retryable)
# =============================================================================


class ConfigError(AlertShiftError):
    """Configuration error."""

    default_category = ErrorCategory.CONFIG
    default_retryable = False


class MissingConfigError(ConfigError):
    """Required setting is missing."""

    def __init__(self, key: str, message: str | None = None):
        super().__init__(message or f"Missing required setting: {key}")
        self.key = key
        self.context.metadata["key"] = key


class InvalidConfigError(ConfigError):
    """Setting value is malformed."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        super().__init__(message or f"Invalid value for setting {key}: {value!r}")
        self.key = key
        self.value = value
        self.context.metadata["key"] = key


class ResourceLookupError(AlertShiftError):
    """A record the upgrade depends on could not be resolved."""

    default_category = ErrorCategory.LOOKUP
    default_retryable = False


# =============================================================================
# PRECONDITION ERRORS (retryable)
# =============================================================================


class PreconditionNotMetError(AlertShiftError):
    """
    Supporting infrastructure is not ready for the upgrade yet.

    Raised before the application record is touched, since the deployment
    mechanism does not retry on its own when the cluster or catalog is not
    ready. ``subject`` names what was not ready (``cluster`` or ``catalog``).
    """

    default_category = ErrorCategory.PRECONDITION
    default_retryable = True

    def __init__(self, message: str, *, subject: str, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.subject = subject
        self.context.metadata["subject"] = subject


# =============================================================================
# STEP ERRORS
# =============================================================================


class UpgradeError(AlertShiftError):
    """Application upgrade step failed."""

    default_category = ErrorCategory.UPGRADE
    default_retryable = False

    def __init__(self, message: str, **kwargs: Any):
        cause = kwargs.get("cause")
        if "retryable" not in kwargs and cause is not None:
            kwargs["retryable"] = is_retryable(cause)
        super().__init__(message, **kwargs)


class MigrationError(UpgradeError):
    """Legacy alert migration or legacy cleanup failed."""

    default_category = ErrorCategory.MIGRATION


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, AlertShiftError):
        return error.retryable
    return isinstance(error, (ConnectionError, OSError))


def get_retry_after(error: Exception) -> int | None:
    """Get retry delay from error, if specified."""
    if isinstance(error, AlertShiftError):
        return error.retry_after
    return None


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, AlertShiftError):
        return error.category
    if isinstance(error, (ConnectionError, OSError)):
        return ErrorCategory.STORE
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "AlertShiftError",
    # Store
    "StoreError",
    "NotFoundError",
    "AlreadyExistsError",
    "ConflictError",
    # Config / lookup
    "ConfigError",
    "MissingConfigError",
    "InvalidConfigError",
    "ResourceLookupError",
    # Precondition
    "PreconditionNotMetError",
    # Steps
    "UpgradeError",
    "MigrationError",
    # Utilities
    "is_retryable",
    "get_retry_after",
    "categorize_error",
]
