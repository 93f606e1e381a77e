"""Data models for task enrichment."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class StatusKind(StrEnum):
    """Which workflow phase a status belongs to."""

    DEFAULT = "default"
    REVIEW = "review"
    DEPLOY = "deploy"


@dataclass(frozen=True)
class Task:
    """A ClickUp task normalized for compliance checks.

    Attributes:
        id: ClickUp task ID.
        name: Task title.
        url: Link to the task in ClickUp.
        space_name: Tracked space the task was found in.
        status: Lower-cased workflow status.
        status_kind: Phase the status belongs to.
        time_spent: Minutes logged in the phase's time field (0 = none).
        responsible_identities: ClickUp names accountable for the current status.
        assignees: The task's native assignee names.
        last_activity_at: Latest status update by a responsible person, if any.
        needs_reviewer_assignment: In review with no reviewer set.
    """

    id: str
    name: str
    url: str
    space_name: str
    status: str
    status_kind: StatusKind
    time_spent: float
    responsible_identities: tuple[str, ...]
    assignees: tuple[str, ...]
    last_activity_at: datetime | None
    needs_reviewer_assignment: bool

    @property
    def primary_identity(self) -> str | None:
        """First responsible identity, used to group manager summaries."""
        return self.responsible_identities[0] if self.responsible_identities else None
