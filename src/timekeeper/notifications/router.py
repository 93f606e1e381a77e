"""NotificationRouter - Decides who hears about which non-compliant tasks."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from timekeeper.compliance.models import ComplianceIssue
from timekeeper.enrichment.models import Task
from timekeeper.identity import IdentityMap
from timekeeper.notifications.exceptions import DeliveryFailed
from timekeeper.notifications.formatting import (
    format_digest,
    format_manager_digest,
    format_reviewer_alert,
)
from timekeeper.notifications.models import DispatchReport
from timekeeper.notifications.slack import Notifier

logger = logging.getLogger("timekeeper.notifications")

UNASSIGNED = "Unassigned"

IssuesBySpace = dict[str, list[ComplianceIssue]]


class NotificationRouter:
    """Groups issues per person and per space manager and sends digests.

    All grouping maps are built per call; the router keeps no state between
    runs besides its collaborators.
    """

    def __init__(self, notifier: Notifier, identities: IdentityMap) -> None:
        """Initialize the router.

        Args:
            notifier: Sink that delivers messages.
            identities: ClickUp name -> Slack identity map, plus managers.
        """
        self.notifier = notifier
        self.identities = identities

    def send_reviewer_alerts(self, tasks: Sequence[Task]) -> DispatchReport:
        """Ask each task's assignees to pick a reviewer."""
        report = DispatchReport()
        for task in tasks:
            if not task.assignees:
                logger.warning("Task %s needs a reviewer but has no assignees", task.id)
            for name in task.assignees:
                identity = self.identities.resolve_identity(name)
                if identity is None:
                    logger.warning("No Slack identity for %s (task %s)", name, task.id)
                    continue
                self._deliver(identity, format_reviewer_alert(task), report)
        return report

    def group_by_identity(self, issues: Sequence[ComplianceIssue]) -> dict[str, IssuesBySpace]:
        """Group issues by Slack identity, then by space.

        A task with several responsible people appears in each of their
        groups. Tasks nobody can be resolved for are left out and logged.
        """
        grouped: dict[str, IssuesBySpace] = {}
        for issue in issues:
            task = issue.task
            resolved = False
            for name in task.responsible_identities:
                identity = self.identities.resolve_identity(name)
                if identity is None:
                    logger.warning("No Slack identity for %s (task %s)", name, task.id)
                    continue
                resolved = True
                by_space = grouped.setdefault(identity, {})
                bucket = by_space.setdefault(task.space_name, [])
                if issue not in bucket:
                    bucket.append(issue)
            if not resolved:
                logger.warning(
                    "Task %s (%s) has no notifiable responsible person; not in any digest",
                    task.id,
                    task.name,
                )
        return grouped

    def group_for_managers(
        self, issues: Sequence[ComplianceIssue]
    ) -> dict[str, dict[str, list[ComplianceIssue]]]:
        """Group issues in managed spaces by each task's primary person."""
        managed = set(self.identities.spaces_with_managers)
        grouped: dict[str, dict[str, list[ComplianceIssue]]] = {}
        for issue in issues:
            task = issue.task
            if task.space_name not in managed:
                continue
            person = task.primary_identity or UNASSIGNED
            grouped.setdefault(task.space_name, {}).setdefault(person, []).append(issue)
        return grouped

    def send_digests(self, issues: Sequence[ComplianceIssue]) -> DispatchReport:
        """Send one digest per person and one per manager per managed space."""
        report = DispatchReport()

        for identity, by_space in self.group_by_identity(issues).items():
            self._deliver(identity, format_digest(by_space), report)

        for space_name, by_person in self.group_for_managers(issues).items():
            text = format_manager_digest(space_name, by_person)
            for manager in self.identities.managers_for(space_name):
                identity = self.identities.resolve_identity(manager)
                if identity is None:
                    logger.warning("No Slack identity for manager %s (%s)", manager, space_name)
                    continue
                self._deliver(identity, text, report)

        return report

    def _deliver(self, identity: str, text: str, report: DispatchReport) -> None:
        try:
            self.notifier.send(identity, text)
        except DeliveryFailed as e:
            logger.error("Slack DM failed for %s: %s", identity, e.detail)
            report.failed.append((identity, e.detail))
            return
        logger.info("Reminder sent to <@%s>", identity)
        report.sent.append(identity)
