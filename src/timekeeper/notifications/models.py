"""Data models for notification dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class DispatchReport:
    """Outcome of sending one class of notifications.

    Attributes:
        sent: Identities that received a message, in send order.
        failed: (identity, error detail) for rejected sends.
    """

    sent: list[str] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.sent) + len(self.failed)

    def merge(self, other: DispatchReport) -> DispatchReport:
        return DispatchReport(
            sent=[*self.sent, *other.sent],
            failed=[*self.failed, *other.failed],
        )
