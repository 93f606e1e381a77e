"""Status rules and field resolution strategies.

A status picks one :class:`StatusRule` (first match wins). The rule names the
custom fields that hold the responsible people and the tracked time for that
phase. Resolution then tries an ordered list of strategies, each returning a
value or None for "not found".
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from timekeeper.clickup.payloads import find_custom_field, person_name
from timekeeper.enrichment.models import StatusKind

Payload = dict[str, Any]


@dataclass(frozen=True)
class StatusRule:
    """Field names used while a task sits in a group of statuses.

    An empty ``markers`` tuple matches any status.
    """

    kind: StatusKind
    markers: tuple[str, ...]
    responsible_field: str
    time_field: str

    def matches(self, status: str) -> bool:
        return not self.markers or any(marker in status for marker in self.markers)


DEFAULT_RULE = StatusRule(StatusKind.DEFAULT, (), "assignee", "time tracked")

PeopleStrategy = Callable[[Payload, StatusRule], tuple[str, ...] | None]
TimeStrategy = Callable[[Payload, StatusRule], float | None]


def build_status_rules(
    review_statuses: Sequence[str] = ("code review", "testing"),
) -> list[StatusRule]:
    """Build the ordered rule table; the catch-all default comes last."""
    rules = []
    review_markers = tuple(s.lower() for s in review_statuses if s)
    if review_markers:
        rules.append(
            StatusRule(
                StatusKind.REVIEW,
                review_markers,
                "code review & qa",
                "code reviewer & qa time tracked",
            )
        )
    rules.append(
        StatusRule(StatusKind.DEPLOY, ("ready to prod",), "deployer", "deployer time tracked")
    )
    rules.append(DEFAULT_RULE)
    return rules


def match_rule(status: str, rules: Sequence[StatusRule]) -> StatusRule:
    """Return the first rule matching a lower-cased status."""
    for rule in rules:
        if rule.matches(status):
            return rule
    return DEFAULT_RULE


def _unique(names: list[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(names))


def custom_field_people(payload: Payload, rule: StatusRule) -> tuple[str, ...] | None:
    """People listed in the rule's responsible custom field."""
    field = find_custom_field(payload, rule.responsible_field)
    value = field.get("value") if field else None
    if not isinstance(value, list):
        return None
    names = [n for n in (person_name(p) for p in value) if n]
    return _unique(names) or None


def native_assignees(payload: Payload, rule: StatusRule) -> tuple[str, ...] | None:
    """The task's own assignee list."""
    names = task_assignees(payload)
    return names or None


def task_assignees(payload: Payload) -> tuple[str, ...]:
    return _unique([n for n in (person_name(a) for a in payload.get("assignees") or []) if n])


def custom_field_number(payload: Payload, rule: StatusRule) -> float | None:
    """Numeric value of the rule's time-tracked custom field."""
    field = find_custom_field(payload, rule.time_field)
    if not field:
        return None
    value = field.get("value")
    if value is None or isinstance(value, bool):
        return None
    try:
        minutes = float(value)
    except (TypeError, ValueError):
        return None
    return minutes if minutes > 0 else None


# Review and deploy phases only trust their own field: an empty field means
# nobody has been assigned to that phase yet.
RESPONSIBLE_STRATEGIES: dict[StatusKind, list[PeopleStrategy]] = {
    StatusKind.REVIEW: [custom_field_people],
    StatusKind.DEPLOY: [custom_field_people],
    StatusKind.DEFAULT: [custom_field_people, native_assignees],
}

TIME_STRATEGIES: list[TimeStrategy] = [custom_field_number]


def resolve_responsible(
    payload: Payload,
    rule: StatusRule,
    strategies: dict[StatusKind, list[PeopleStrategy]] | None = None,
) -> tuple[str, ...]:
    """Try the strategies for the rule's kind in order; empty if none finds anyone."""
    for strategy in (strategies or RESPONSIBLE_STRATEGIES)[rule.kind]:
        found = strategy(payload, rule)
        if found:
            return found
    return ()


def resolve_time_spent(
    payload: Payload, rule: StatusRule, strategies: list[TimeStrategy] | None = None
) -> float:
    """Try the time strategies in order; 0 if none yields a value."""
    for strategy in strategies or TIME_STRATEGIES:
        found = strategy(payload, rule)
        if found is not None:
            return found
    return 0.0
