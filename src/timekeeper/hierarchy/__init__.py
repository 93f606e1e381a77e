"""Hierarchy - Walks spaces, folders and lists down to raw tasks."""

from timekeeper.hierarchy.models import RawTask, TrackedList
from timekeeper.hierarchy.walker import HierarchyWalker, TaskSource

__all__ = [
    "HierarchyWalker",
    "RawTask",
    "TaskSource",
    "TrackedList",
]
