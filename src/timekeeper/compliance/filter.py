"""ComplianceFilter - Decides which tasks are missing time or a status update."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import date

from timekeeper.compliance.models import ComplianceIssue, ComplianceReport, IssueKind
from timekeeper.enrichment.models import Task

logger = logging.getLogger("timekeeper.compliance")


class ComplianceFilter:
    """Classifies tasks in relevant statuses.

    A status is relevant when it contains one of the configured status
    substrings, so "code review (blocked)" is checked like "code review".
    """

    def __init__(self, relevant_statuses: Sequence[str], today: date | None = None) -> None:
        """Initialize the filter.

        Args:
            relevant_statuses: Status substrings subject to checks.
            today: The run's reference date. Defaults to the local date.
        """
        self.relevant_statuses = [s.lower() for s in relevant_statuses]
        self.today = today or date.today()

    def is_relevant(self, task: Task) -> bool:
        return any(status in task.status for status in self.relevant_statuses)

    def classify(self, task: Task) -> ComplianceIssue | None:
        """Return the task's issues, or None if it is compliant or not checked.

        Tasks waiting for a reviewer are not checked here; they get a
        reviewer-assignment alert instead.
        """
        if not self.is_relevant(task) or task.needs_reviewer_assignment:
            return None

        kinds: list[IssueKind] = []
        if task.time_spent == 0:
            kinds.append(IssueKind.TIME_NOT_TRACKED)
        if task.last_activity_at is None or task.last_activity_at.date() != self.today:
            kinds.append(IssueKind.STALE_UPDATE)

        if not kinds:
            return None
        return ComplianceIssue(task=task, kinds=tuple(kinds))

    def classify_all(self, tasks: Iterable[Task]) -> ComplianceReport:
        """Split tasks into reviewer alerts and compliance issues."""
        report = ComplianceReport()
        for task in tasks:
            if not self.is_relevant(task):
                continue
            if task.needs_reviewer_assignment:
                report.reviewer_assignments.append(task)
                continue
            issue = self.classify(task)
            if issue is not None:
                report.issues.append(issue)

        logger.info(
            "Found %d tasks missing time or status update, %d awaiting a reviewer",
            len(report.issues),
            len(report.reviewer_assignments),
        )
        return report
