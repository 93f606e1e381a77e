"""HierarchyWalker - Collects raw tasks from active lists in tracked spaces."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Any, Protocol

from timekeeper.clickup.exceptions import SourceUnavailable
from timekeeper.hierarchy.models import RawTask, TrackedList

logger = logging.getLogger("timekeeper.hierarchy")


class TaskSource(Protocol):
    """Interface for the ClickUp hierarchy."""

    def list_spaces(self, team_id: str) -> list[dict[str, Any]]: ...

    def list_folders(self, space_id: str) -> list[dict[str, Any]]: ...

    def list_lists(self, folder_id: str) -> list[dict[str, Any]]: ...

    def list_tasks(self, list_id: str, include_closed: bool = True) -> list[dict[str, Any]]: ...

    def list_comments(self, task_id: str) -> list[dict[str, Any]]: ...


class HierarchyWalker:
    """Walks space -> folder -> list -> task for the tracked spaces.

    Only the space listing is fatal. A folder, list or task fetch that fails
    is logged and contributes no tasks, so one broken sprint does not hide
    every other reminder.
    """

    def __init__(
        self,
        source: TaskSource,
        tracked_spaces: list[str],
        max_concurrency: int = 5,
    ) -> None:
        """Initialize the walker.

        Args:
            source: Where the hierarchy is read from.
            tracked_spaces: Space names to walk (exact, case-sensitive).
            max_concurrency: Worker threads used to fetch a folder's lists.
        """
        self.source = source
        self.tracked_spaces = list(tracked_spaces)
        self.max_concurrency = max_concurrency

    def collect_active_tasks(self, team_id: str, now: datetime | None = None) -> list[RawTask]:
        """Collect every task in the active lists of the tracked spaces.

        Args:
            team_id: ClickUp workspace (team) ID.
            now: Reference time for the due-date check. Defaults to now.

        Returns:
            Raw tasks in space, folder, list, task order.

        Raises:
            SourceUnavailable: If the spaces cannot be listed.
        """
        now = now or datetime.now()
        spaces = self.source.list_spaces(team_id)
        tracked = [s for s in spaces if s.get("name") in self.tracked_spaces]
        logger.info("Walking %d of %d spaces", len(tracked), len(spaces))

        collected: list[RawTask] = []
        for space in tracked:
            space_name = str(space["name"])
            for folder in self._folders(space):
                lists = self._active_lists(folder, now)
                if not lists:
                    continue
                for tasks in self._tasks_for_lists(lists):
                    collected.extend(RawTask(payload=t, space_name=space_name) for t in tasks)

        logger.info("Collected %d tasks from active lists", len(collected))
        return collected

    def _folders(self, space: dict[str, Any]) -> list[dict[str, Any]]:
        space_id = space.get("id")
        if not space_id:
            logger.warning("Skipping space %s: no id in payload", space.get("name"))
            return []
        try:
            return self.source.list_folders(str(space_id))
        except SourceUnavailable as e:
            logger.error("Skipping space %s: %s", space.get("name"), e)
            return []

    def _active_lists(self, folder: dict[str, Any], now: datetime) -> list[TrackedList]:
        folder_id = folder.get("id")
        if not folder_id:
            logger.warning("Skipping folder %s: no id in payload", folder.get("name"))
            return []
        try:
            payloads = self.source.list_lists(str(folder_id))
        except SourceUnavailable as e:
            logger.error("Skipping folder %s: %s", folder.get("id"), e)
            return []

        lists: list[TrackedList] = []
        for payload in payloads:
            if not payload.get("id"):
                logger.warning("Skipping list %s: no id in payload", payload.get("name"))
                continue
            lists.append(TrackedList.from_payload(payload))
        active = [tl for tl in lists if tl.is_active(now)]
        logger.debug(
            "Folder %s: %d of %d lists active", folder.get("id"), len(active), len(lists)
        )
        return active

    def _tasks_for_lists(self, lists: list[TrackedList]) -> list[list[dict[str, Any]]]:
        """Fetch each list's tasks on a bounded pool, keeping list order."""
        with ThreadPoolExecutor(max_workers=self.max_concurrency) as executor:
            return list(executor.map(self._tasks_for_list, lists))

    def _tasks_for_list(self, tracked_list: TrackedList) -> list[dict[str, Any]]:
        try:
            return self.source.list_tasks(tracked_list.id, include_closed=True)
        except SourceUnavailable as e:
            logger.error("Skipping list %s: %s", tracked_list.id, e)
            return []
