"""Helpers for reading ClickUp JSON payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any


def parse_timestamp(value: Any) -> datetime | None:
    """Convert a ClickUp millisecond timestamp to a local naive datetime.

    ClickUp sends timestamps as strings of epoch milliseconds. Missing,
    zero or unparseable values yield None.
    """
    if value in (None, "", 0, "0"):
        return None
    try:
        millis = int(float(value))
    except (TypeError, ValueError):
        return None
    return datetime.fromtimestamp(millis / 1000)


def person_name(person: Any) -> str | None:
    """Return a person's display name (username, then name), or None."""
    if not isinstance(person, dict):
        return None
    name = person.get("username") or person.get("name")
    return str(name) if name else None


def find_custom_field(payload: dict[str, Any], name: str) -> dict[str, Any] | None:
    """Find a task custom field by name, ignoring case."""
    wanted = name.lower()
    for custom_field in payload.get("custom_fields") or []:
        field_name = custom_field.get("name")
        if field_name and field_name.lower() == wanted:
            return dict(custom_field)
    return None
