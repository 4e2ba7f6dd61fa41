"""Operation envelopes over the upgrade core."""

from alertshift.ops.context import OperationContext
from alertshift.ops.result import OperationError, OperationResult, start_timer
from alertshift.ops.upgrade import current_version, run_upgrade

__all__ = [
    "OperationContext",
    "OperationError",
    "OperationResult",
    "current_version",
    "run_upgrade",
    "start_timer",
]
