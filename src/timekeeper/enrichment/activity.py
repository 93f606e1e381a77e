"""Status-update signals: when did a responsible person last report progress?

One signal source is chosen per run and applied to every task.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Protocol

from timekeeper.clickup.exceptions import SourceUnavailable
from timekeeper.clickup.payloads import find_custom_field, parse_timestamp, person_name
from timekeeper.config import ConfigError
from timekeeper.identity import names_match

logger = logging.getLogger("timekeeper.enrichment")

STATUS_UPDATE_FIELD = "status update"


class CommentSource(Protocol):
    """Anything that can list a task's comments."""

    def list_comments(self, task_id: str) -> list[dict[str, Any]]: ...


class ActivitySignal(Protocol):
    """Computes the last qualifying activity time for a task."""

    def last_activity(
        self, payload: dict[str, Any], responsible: tuple[str, ...]
    ) -> datetime | None: ...


class CommentActivity:
    """Latest comment written by one of the task's responsible people."""

    def __init__(self, source: CommentSource) -> None:
        self.source = source

    def last_activity(
        self, payload: dict[str, Any], responsible: tuple[str, ...]
    ) -> datetime | None:
        if not responsible:
            return None
        task_id = str(payload.get("id", ""))
        try:
            comments = self.source.list_comments(task_id)
        except SourceUnavailable as e:
            logger.error("Failed to fetch comments for task %s: %s", task_id, e)
            return None

        latest: datetime | None = None
        for comment in comments:
            author = person_name(comment.get("user"))
            if not author or not any(names_match(author, name) for name in responsible):
                continue
            posted = parse_timestamp(comment.get("date"))
            if posted and (latest is None or posted > latest):
                latest = posted
        return latest


class StatusFieldActivity:
    """When the task's "status update" custom field was last filled in.

    The field carries no author, so every update counts.
    """

    def __init__(self, field_name: str = STATUS_UPDATE_FIELD) -> None:
        self.field_name = field_name

    def last_activity(
        self, payload: dict[str, Any], responsible: tuple[str, ...]
    ) -> datetime | None:
        field = find_custom_field(payload, self.field_name)
        if not field or field.get("value") in (None, "", []):
            return None
        return parse_timestamp(field.get("date_updated")) or parse_timestamp(
            payload.get("date_updated")
        )


def build_activity_signal(name: str, source: CommentSource) -> ActivitySignal:
    """Build the configured activity signal.

    Raises:
        ConfigError: If the signal name is unknown.
    """
    if name == "comments":
        return CommentActivity(source)
    if name == "status_field":
        return StatusFieldActivity()
    raise ConfigError(f"Unknown activity source: {name}")
