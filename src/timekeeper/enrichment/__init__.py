"""Enrichment - Normalizes raw ClickUp tasks for compliance checks."""

from timekeeper.enrichment.activity import (
    ActivitySignal,
    CommentActivity,
    StatusFieldActivity,
    build_activity_signal,
)
from timekeeper.enrichment.enricher import TaskEnricher
from timekeeper.enrichment.models import StatusKind, Task
from timekeeper.enrichment.rules import StatusRule, build_status_rules, match_rule

__all__ = [
    "ActivitySignal",
    "CommentActivity",
    "StatusFieldActivity",
    "StatusKind",
    "StatusRule",
    "Task",
    "TaskEnricher",
    "build_activity_signal",
    "build_status_rules",
    "match_rule",
]
