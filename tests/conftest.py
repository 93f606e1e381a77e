"""Shared pytest fixtures and configuration."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

import pytest

from timekeeper.enrichment import StatusKind, Task


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: actual ClickUp API calls (local only)")


# Shared fixtures

NOW = datetime(2026, 3, 10, 15, 0, 0)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for a run."""
    return NOW


@pytest.fixture
def task_payload() -> Callable[..., dict[str, Any]]:
    """Factory for raw ClickUp task payloads."""

    def build(
        task_id: str = "t1",
        name: str = "Task",
        status: str | None = "in progress",
        assignees: list[str] | None = None,
        custom_fields: list[dict[str, Any]] | None = None,
        **extra: Any,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": task_id,
            "name": name,
            "url": f"https://app.clickup.com/t/{task_id}",
            "status": {"status": status} if status is not None else {},
            "assignees": [{"username": a} for a in assignees or []],
            "custom_fields": custom_fields or [],
        }
        payload.update(extra)
        return payload

    return build


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """Factory for normalized Tasks."""

    def build(**overrides: Any) -> Task:
        values: dict[str, Any] = {
            "id": "t1",
            "name": "Task",
            "url": "https://app.clickup.com/t/t1",
            "space_name": "Alpha",
            "status": "in progress",
            "status_kind": StatusKind.DEFAULT,
            "time_spent": 30.0,
            "responsible_identities": ("Jane Doe",),
            "assignees": ("Jane Doe",),
            "last_activity_at": NOW,
            "needs_reviewer_assignment": False,
        }
        values.update(overrides)
        return Task(**values)

    return build
