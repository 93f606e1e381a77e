"""Data models for the hierarchy walker."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from timekeeper.clickup.payloads import parse_timestamp


@dataclass(frozen=True)
class TrackedList:
    """A ClickUp list (sprint) container.

    Attributes:
        id: ClickUp list ID.
        name: Display name.
        due_date: Sprint end, if set.
        percent_complete: Completion percentage, 0-100.
    """

    id: str
    name: str
    due_date: datetime | None
    percent_complete: float

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> TrackedList:
        percent = payload.get("percent_complete")
        try:
            percent_complete = float(percent) if percent is not None else 0.0
        except (TypeError, ValueError):
            percent_complete = 0.0
        return cls(
            id=str(payload["id"]),
            name=str(payload.get("name") or ""),
            due_date=parse_timestamp(payload.get("due_date")),
            percent_complete=percent_complete,
        )

    def is_active(self, now: datetime) -> bool:
        """A list is active while incomplete and not past its due date."""
        if self.percent_complete >= 100:
            return False
        return self.due_date is None or self.due_date >= now


@dataclass(frozen=True)
class RawTask:
    """A raw ClickUp task payload tagged with the tracked space it came from."""

    payload: dict[str, Any]
    space_name: str

    @property
    def id(self) -> str:
        return str(self.payload.get("id", ""))
