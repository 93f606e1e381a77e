"""Data models for compliance classification."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from timekeeper.enrichment.models import Task


class IssueKind(StrEnum):
    """Something a relevant task is missing."""

    TIME_NOT_TRACKED = "time_not_tracked"
    STALE_UPDATE = "stale_update"

    @property
    def label(self) -> str:
        """Human-readable wording used in reminders."""
        return _LABELS[self]


_LABELS = {
    IssueKind.TIME_NOT_TRACKED: "time not tracked",
    IssueKind.STALE_UPDATE: "no recent comment",
}


@dataclass(frozen=True)
class ComplianceIssue:
    """A non-compliant task and the issues that apply to it."""

    task: Task
    kinds: tuple[IssueKind, ...]

    @property
    def labels(self) -> list[str]:
        return [kind.label for kind in self.kinds]


@dataclass
class ComplianceReport:
    """Classification of one run's tasks.

    Attributes:
        issues: Non-compliant tasks, in pipeline order.
        reviewer_assignments: Relevant tasks waiting for a reviewer.
    """

    issues: list[ComplianceIssue] = field(default_factory=list)
    reviewer_assignments: list[Task] = field(default_factory=list)
