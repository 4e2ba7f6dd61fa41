"""
alertshift - upgrade legacy cluster alerting to the group/rule model.

Package layout::

    core/          errors, structlog logging, settings, collaborator protocols
    models/        typed records (legacy alerts, groups/rules, management)
    refs.py        catalog external-id codec and scoped id helpers
    store/         in-memory ResourceStore
    migration/     translator, executor, legacy cleanup
    readiness.py   cluster/catalog readiness gate
    upgrade.py     AlertUpgrader orchestrator
    ops/           OperationResult envelopes over the orchestrator
"""

__version__ = "0.1.0"

from alertshift.upgrade import AlertUpgrader, TargetVersion  # noqa: E402

__all__ = ["AlertUpgrader", "TargetVersion", "__version__"]
