"""Slack message rendering for reminders and digests."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from timekeeper.compliance.models import ComplianceIssue
from timekeeper.enrichment.models import Task

DIGEST_HEADER = "You have tasks missing time tracking or a status update today:"


def format_issue_line(issue: ComplianceIssue) -> str:
    task = issue.task
    return f"• *{task.name}* (status: {task.status}): {', '.join(issue.labels)} ({task.url})"


def format_digest(issues_by_space: Mapping[str, Sequence[ComplianceIssue]]) -> str:
    """Render a personal digest with one section per space."""
    sections = [
        "\n".join([f"*{space}*", *(format_issue_line(i) for i in issues)])
        for space, issues in issues_by_space.items()
    ]
    return "\n\n".join([DIGEST_HEADER, *sections])


def format_manager_digest(
    space_name: str, issues_by_person: Mapping[str, Sequence[ComplianceIssue]]
) -> str:
    """Render a manager's summary of one space, grouped by person."""
    sections = [
        "\n".join([f"*{person}*", *(format_issue_line(i) for i in issues)])
        for person, issues in issues_by_person.items()
    ]
    header = f"Team tasks in *{space_name}* missing time tracking or a status update today:"
    return "\n\n".join([header, *sections])


def format_reviewer_alert(task: Task) -> str:
    return (
        f"*{task.name}* (status: {task.status}) in *{task.space_name}* has no reviewer "
        f"assigned. Please set the code review & QA field: {task.url}"
    )
