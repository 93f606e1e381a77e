"""Scheduler - Runs compliance checks once or on an interval."""

from timekeeper.scheduler.scheduler import DEFAULT_INTERVAL_SECONDS, Scheduler

__all__ = [
    "DEFAULT_INTERVAL_SECONDS",
    "Scheduler",
]
