"""Data models for the pipeline module."""

from __future__ import annotations

from dataclasses import dataclass, field

from timekeeper.compliance.models import ComplianceReport
from timekeeper.notifications.models import DispatchReport


@dataclass
class RunResult:
    """Outcome of one compliance run.

    Attributes:
        collected: Raw tasks found in active lists of tracked spaces.
        enriched: Tasks that had a usable status.
        report: Classification of the enriched tasks.
        reviewer_alerts: Delivery outcome of reviewer-assignment alerts.
        digests: Delivery outcome of personal and manager digests.
    """

    collected: int = 0
    enriched: int = 0
    report: ComplianceReport = field(default_factory=ComplianceReport)
    reviewer_alerts: DispatchReport = field(default_factory=DispatchReport)
    digests: DispatchReport = field(default_factory=DispatchReport)

    @property
    def deliveries(self) -> DispatchReport:
        return self.reviewer_alerts.merge(self.digests)
