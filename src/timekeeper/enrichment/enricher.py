"""TaskEnricher - Turns raw ClickUp tasks into normalized Tasks."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from timekeeper.enrichment.activity import ActivitySignal
from timekeeper.enrichment.models import StatusKind, Task
from timekeeper.enrichment.rules import (
    StatusRule,
    build_status_rules,
    match_rule,
    resolve_responsible,
    resolve_time_spent,
    task_assignees,
)
from timekeeper.hierarchy.models import RawTask

logger = logging.getLogger("timekeeper.enrichment")


class TaskEnricher:
    """Resolves per-status field semantics for each task.

    The status decides which custom fields name the responsible people and
    hold the tracked time. The activity signal then looks for a status update
    from one of those people.
    """

    def __init__(
        self,
        activity: ActivitySignal,
        rules: Sequence[StatusRule] | None = None,
        max_concurrency: int = 5,
    ) -> None:
        """Initialize the enricher.

        Args:
            activity: Signal used to compute ``last_activity_at``.
            rules: Ordered status rules. Defaults to the standard table.
            max_concurrency: Worker threads for a batch of tasks.
        """
        self.activity = activity
        self.rules = list(rules) if rules is not None else build_status_rules()
        self.max_concurrency = max_concurrency

    def enrich(self, raw: RawTask) -> Task | None:
        """Normalize one raw task.

        Returns:
            The Task, or None if the task has no status.
        """
        payload = raw.payload
        status_value = (payload.get("status") or {}).get("status")
        if not status_value:
            logger.info("Skipping task %s: no status", raw.id or "<unknown>")
            return None

        status = str(status_value).lower()
        rule = match_rule(status, self.rules)
        responsible = resolve_responsible(payload, rule)

        return Task(
            id=raw.id,
            name=str(payload.get("name") or ""),
            url=str(payload.get("url") or ""),
            space_name=raw.space_name,
            status=status,
            status_kind=rule.kind,
            time_spent=resolve_time_spent(payload, rule),
            responsible_identities=responsible,
            assignees=task_assignees(payload),
            last_activity_at=self.activity.last_activity(payload, responsible),
            needs_reviewer_assignment=rule.kind is StatusKind.REVIEW and not responsible,
        )

    def enrich_all(self, raw_tasks: Sequence[RawTask]) -> list[Task]:
        """Enrich tasks on a bounded pool, keeping input order and dropping skips."""
        if not raw_tasks:
            return []
        with ThreadPoolExecutor(max_workers=self.max_concurrency) as executor:
            results = list(executor.map(self.enrich, raw_tasks))
        tasks = [t for t in results if t is not None]
        logger.info("Enriched %d tasks (%d skipped)", len(tasks), len(results) - len(tasks))
        return tasks
