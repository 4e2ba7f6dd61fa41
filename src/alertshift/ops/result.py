"""
Upgrade result envelope.

A controller loop driving the upgrade needs three answers from each pass:
did it succeed, should it requeue, and after how long.  :class:`OperationResult`
carries those without the caller having to catch and classify
:class:`~alertshift.core.errors.AlertShiftError` itself.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from alertshift.core.errors import AlertShiftError, ErrorCategory


@dataclass(frozen=True, slots=True)
class OperationError:
    """Why an upgrade pass failed.

    Attributes:
        code: ``PRECONDITION_NOT_MET``, ``CONFIG``, ``NOT_FOUND``,
            ``MIGRATION_FAILED``, ``UPGRADE_FAILED`` or ``INTERNAL``.
        message: Message of the underlying error.
        category: Category of the underlying error.
        details: Error context (cluster, kind, namespace, name, subject, ...).
        retryable: Whether requeueing the upgrade may succeed.
        retry_after: Seconds to wait before requeueing, when known.
    """

    code: str
    message: str
    category: ErrorCategory | None = None
    details: dict[str, Any] = field(default_factory=dict)
    retryable: bool = False
    retry_after: int | None = None

    @classmethod
    def from_exception(cls, code: str, exc: AlertShiftError) -> OperationError:
        return cls(
            code=code,
            message=exc.message,
            category=exc.category,
            details=exc.context.to_dict(),
            retryable=exc.retryable,
            retry_after=exc.retry_after,
        )


T = TypeVar("T")


@dataclass
class OperationResult(Generic[T]):
    """Outcome of one operation call; build with :meth:`ok` or :meth:`fail`."""

    success: bool
    data: T | None = None
    error: OperationError | None = None
    elapsed_ms: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(
        cls, data: T, *, elapsed_ms: float = 0.0, metadata: dict[str, Any] | None = None
    ) -> OperationResult[T]:
        return cls(success=True, data=data, elapsed_ms=elapsed_ms, metadata=metadata or {})

    @classmethod
    def fail(
        cls,
        error: OperationError,
        *,
        elapsed_ms: float = 0.0,
        metadata: dict[str, Any] | None = None,
    ) -> OperationResult[T]:
        return cls(success=False, error=error, elapsed_ms=elapsed_ms, metadata=metadata or {})

    @property
    def requeue_after(self) -> int | None:
        """Seconds until the caller should requeue, or ``None`` to stop.

        A retryable failure without a hint requeues immediately (``0``).
        """
        if self.error is None or not self.error.retryable:
            return None
        return self.error.retry_after or 0

    def to_dict(self) -> dict[str, Any]:
        """Plain dict for structured logs or a status field."""
        d: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            d["data"] = self.data
        if self.error is not None:
            error: dict[str, Any] = {
                "code": self.error.code,
                "message": self.error.message,
                "retryable": self.error.retryable,
            }
            if self.error.category is not None:
                error["category"] = self.error.category.value
            if self.error.retry_after is not None:
                error["retry_after"] = self.error.retry_after
            if self.error.details:
                error["details"] = self.error.details
            d["error"] = error
        if self.elapsed_ms:
            d["elapsed_ms"] = round(self.elapsed_ms, 2)
        if self.metadata:
            d["metadata"] = self.metadata
        return d


class _Timer:
    __slots__ = ("_start",)

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._start) * 1000


def start_timer() -> _Timer:
    return _Timer()
