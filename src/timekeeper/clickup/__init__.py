"""ClickUp client - Reads the space/folder/list/task hierarchy."""

from timekeeper.clickup.client import API_BASE, ClickUpClient
from timekeeper.clickup.exceptions import ClickUpError, SourceUnavailable
from timekeeper.clickup.payloads import find_custom_field, parse_timestamp, person_name

__all__ = [
    "API_BASE",
    "ClickUpClient",
    "ClickUpError",
    "SourceUnavailable",
    "find_custom_field",
    "parse_timestamp",
    "person_name",
]
