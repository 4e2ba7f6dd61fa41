"""Legacy alert migration: translation, execution, and cleanup."""

from alertshift.migration.cleanup import LEGACY_ALERTMANAGER_NAMESPACE, remove_legacy_alerting
from alertshift.migration.executor import MigrationExecutor
from alertshift.migration.translator import (
    Translation,
    cluster_rule_name,
    migration_group_name,
    project_rule_name,
    translate_cluster_alert,
    translate_project_alert,
)

__all__ = [
    "LEGACY_ALERTMANAGER_NAMESPACE",
    "MigrationExecutor",
    "Translation",
    "cluster_rule_name",
    "migration_group_name",
    "project_rule_name",
    "remove_legacy_alerting",
    "translate_cluster_alert",
    "translate_project_alert",
]
